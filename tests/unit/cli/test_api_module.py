import argparse
import types
from unittest.mock import MagicMock

import pytest
import requests

from personapi.cli import api


def test_register_subcommands_parses_start_command():
    parser = argparse.ArgumentParser()
    subparsers = parser.add_subparsers(dest="subcommand", required=True)
    api.register_subcommands(subparsers)
    args = parser.parse_args(["start", "--host", "1.2.3.4", "--port", "1234"])
    assert args.subcommand == "start"
    assert args.host == "1.2.3.4"
    assert args.port == 1234


def test_dispatch_start_invokes_uvicorn_with_factory(monkeypatch):
    run_mock = MagicMock()
    monkeypatch.setattr("uvicorn.run", run_mock)

    args = types.SimpleNamespace(subcommand="start", host="127.0.0.1", port=9000)
    api.dispatch(args)

    run_mock.assert_called_once_with(
        "personapi.api.main:create_app", factory=True, host="127.0.0.1", port=9000
    )


def _status_args(**overrides):
    values = {"subcommand": "status", "host": "127.0.0.1", "port": 9000, "timeout": 2.0}
    values.update(overrides)
    return types.SimpleNamespace(**values)


def test_dispatch_status_queries_the_status_endpoint(monkeypatch, capsys):
    run_mock = MagicMock()
    monkeypatch.setattr("uvicorn.run", run_mock)
    get_mock = MagicMock()
    get_mock.return_value.status_code = 200
    get_mock.return_value.json.return_value = {"ok": True}
    monkeypatch.setattr("personapi.cli.api.requests.get", get_mock)

    api.dispatch(_status_args())

    get_mock.assert_called_once_with("http://127.0.0.1:9000/status", timeout=2.0)
    run_mock.assert_not_called()
    assert capsys.readouterr().out.strip() == "ok"


def test_dispatch_status_exits_when_server_is_unreachable(monkeypatch):
    monkeypatch.setattr(
        "personapi.cli.api.requests.get",
        MagicMock(side_effect=requests.ConnectionError("refused")),
    )
    with pytest.raises(SystemExit) as exc:
        api.dispatch(_status_args())
    assert exc.value.code == 1


@pytest.mark.parametrize(
    "status_code, body",
    [(503, {"ok": True}), (200, {"ok": False}), (200, ["ok"])],
)
def test_check_status_requires_ok_body(monkeypatch, status_code, body):
    get_mock = MagicMock()
    get_mock.return_value.status_code = status_code
    get_mock.return_value.json.return_value = body
    monkeypatch.setattr("personapi.cli.api.requests.get", get_mock)
    assert api.check_status("localhost", 8000) is False


def test_dispatch_unknown_subcommand_raises():
    with pytest.raises(ValueError, match="No handler"):
        api.dispatch(types.SimpleNamespace(subcommand="bogus"))
