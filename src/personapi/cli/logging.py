"""``personapi logging``: inspect and persist the package log level."""

from personapi.logging import configure, get_logger
from personapi.logging.config import save_log_level
from personapi.logging.logging import configured_level, log_file_path


def register_subcommands(subparsers):
    set_level_parser = subparsers.add_parser("set-level", help="Persist and apply a logging level")
    set_level_parser.add_argument(
        "level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level to use",
    )

    subparsers.add_parser("show-path", help="Show the log file location")
    subparsers.add_parser("show-level", help="Show the active logging level")


def dispatch(args):
    if args.subcommand == "set-level":
        path = save_log_level(args.level)
        configure()
        get_logger(__name__).info("log level %s saved to %s", args.level, path)
    elif args.subcommand == "show-path":
        print(log_file_path().resolve())
    elif args.subcommand == "show-level":
        print(configured_level())
    else:
        get_logger(__name__).error("No handler for subcommand: %s", args.subcommand)
