# personapi/cli/api.py
import requests

from personapi.logging import get_logger


def register_subcommands(subparsers):
    status_parser = subparsers.add_parser("status", help="Query /status on a running API server")
    status_parser.add_argument("--host", default="localhost", help="Host the API server runs on")
    status_parser.add_argument("--port", type=int, default=8000, help="Port the API server listens on")
    status_parser.add_argument("--timeout", type=float, default=5.0, help="Seconds to wait for a reply")
    starter_parser = subparsers.add_parser("start", help="start the API server")
    starter_parser.add_argument("--host", default="localhost", help="Host to run the API server on")
    starter_parser.add_argument("--port", type=int, default=8000, help="Port to run the API server on")


def check_status(host, port, timeout=5.0):
    """Return ``True`` when ``GET /status`` answers ``{"ok": true}``."""
    url = f"http://{host}:{port}/status"
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        get_logger(__name__).warning("API server at %s is unreachable: %s", url, exc)
        return False
    if resp.status_code != 200:
        get_logger(__name__).warning("API server at %s answered %s", url, resp.status_code)
        return False
    try:
        body = resp.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("ok") is True


def dispatch(args):
    """Dispatch API CLI subcommands using a simple lookup table.

    Errors from handlers propagate. Unknown subcommands raise ``ValueError``.
    ``status`` exits non-zero when the server is not healthy.
    """
    logger = get_logger(__name__)

    def _status() -> None:
        if not check_status(args.host, args.port, args.timeout):
            raise SystemExit(1)
        logger.info("API server at %s:%s is up", args.host, args.port)
        print("ok")

    def _start() -> None:
        import uvicorn

        logger.info("Starting API server at %s:%s", args.host, args.port)
        uvicorn.run("personapi.api.main:create_app", factory=True, host=args.host, port=args.port)

    commands = {"status": _status, "start": _start}
    try:
        handler = commands[args.subcommand]
    except KeyError as exc:
        message = f"No handler for API subcommand: {args.subcommand}"
        logger.error(message)
        raise ValueError(message) from exc

    handler()
