# personapi/cli/main.py
import argparse

from personapi.cli import api, auth, db, logging as logging_cli


def main(argv=None):

    parser = argparse.ArgumentParser(prog="personapi", description="Person API toolkit")
    subparsers = parser.add_subparsers(dest="command", required=True)

    db_parser = subparsers.add_parser("db", help="Database operations")
    db_subparsers = db_parser.add_subparsers(dest="subcommand", required=True)
    db.register_subcommands(db_subparsers)

    api_parser = subparsers.add_parser("api", help="API server control")
    api_subparsers = api_parser.add_subparsers(dest="subcommand", required=True)
    api.register_subcommands(api_subparsers)

    auth_parser = subparsers.add_parser("auth", help="User management")
    auth_subparsers = auth_parser.add_subparsers(dest="subcommand", required=True)
    auth.register_subcommands(auth_subparsers)

    logging_parser = subparsers.add_parser("logging", help="Logging utilities")
    logging_subparsers = logging_parser.add_subparsers(dest="subcommand", required=True)
    logging_cli.register_subcommands(logging_subparsers)

    args = parser.parse_args(argv)

    dispatchers = {
        "db": db.dispatch,
        "api": api.dispatch,
        "auth": auth.dispatch,
        "logging": logging_cli.dispatch,
    }
    dispatchers[args.command](args)


if __name__ == "__main__":
    main()
