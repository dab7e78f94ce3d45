import json

import pytest
from rich.console import Console

from personapi.cli import db as db_cli
from personapi.db import operations
from personapi.db.models import UserRole


@pytest.fixture
def db_file(tmp_path):
    path = tmp_path / "cli.db"
    operations.initialize(path)
    return path


def test_import_csv_and_export_json(tmp_path, db_file):
    source = tmp_path / "people.csv"
    source.write_text(
        "name,gender,date_of_birth,phone,nickname\n"
        "Alice,F,1990-04-02,0123,Al\n"
        "Bob,M,,,\n"
    )

    assert operations.import_persons(source, db_file) == 2

    out = tmp_path / "out" / "people.json"
    assert operations.export_persons(out, db_file) == 2
    rows = json.loads(out.read_text())
    assert [r["name"] for r in rows] == ["Alice", "Bob"]
    assert rows[0]["phone"] == "0123"
    assert rows[0]["date_of_birth"].startswith("1990-04-02")
    assert rows[1]["phone"] is None


def test_import_requires_name_and_gender(tmp_path, db_file):
    source = tmp_path / "bad.csv"
    source.write_text("name\nAlice\n")
    with pytest.raises(ValueError, match="gender"):
        operations.import_persons(source, db_file)


def test_import_rejects_unknown_format(tmp_path, db_file):
    with pytest.raises(ValueError):
        operations.import_persons(tmp_path / "people.xml", db_file)


def test_create_user_rejects_duplicates(db_file):
    user = operations.create_user("reader", "reader-pass", UserRole.person, db_file)
    assert user.username == "reader"
    with pytest.raises(ValueError, match="already exists"):
        operations.create_user("reader", "other-pass", UserRole.admin, db_file)


def test_show_renders_tables(db_file):
    console = Console(record=True, width=200)
    db_cli.dispatch(
        type("Args", (), {"subcommand": "show", "database": str(db_file)})(),
        console=console,
    )
    output = console.export_text()
    assert "person" in output
    assert "auth_user" in output
