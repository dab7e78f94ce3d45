"""Command-line helpers for the Person database.

Registers the ``personapi db`` subcommands on an ``argparse`` parser and
dispatches parsed arguments to :mod:`personapi.db.operations`.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from personapi.db import operations
from personapi.logging import get_logger


def register_subcommands(subparsers):
    """Attach database subcommands to an ``argparse`` parser.

    Every subcommand accepts ``--database`` (a path or ``sqlite`` URI);
    without it the ``PERSONAPI_DB_PATH`` default applies.
    """

    init_parser = subparsers.add_parser("init", help="initialize db")
    init_parser.add_argument("--database", required=False)

    status_parser = subparsers.add_parser("status", help="Check DB status")
    status_parser.add_argument("--database", required=False)

    show_parser = subparsers.add_parser("show", help="Show tables")
    show_parser.add_argument("--database", required=False)

    import_parser = subparsers.add_parser("import", help="Import persons from CSV, TSV or JSON")
    import_parser.add_argument("--file", required=True)
    import_parser.add_argument("--database", required=False)

    export_parser = subparsers.add_parser("export", help="Export persons to CSV, TSV or JSON")
    export_parser.add_argument("--file", required=True, help="Output file")
    export_parser.add_argument("--database", required=False)


def dispatch(args, console: Console | None = None):
    """Run the database operation associated with ``args.subcommand``."""

    logger = get_logger(__name__)
    if console is None:
        console = Console()
    database = getattr(args, "database", None)

    if args.subcommand == "status":
        version = operations.check_status(database)
        console.print(f"sqlite version: {version}")
    elif args.subcommand == "show":
        _render_table_overview(operations.show_tables(database), console=console)
    elif args.subcommand == "import":
        count = operations.import_persons(args.file, database)
        console.print(f"imported {count} persons")
    elif args.subcommand == "export":
        count = operations.export_persons(args.file, database)
        console.print(f"exported {count} persons to {args.file}")
    elif args.subcommand == "init":
        operations.initialize(database)
    else:
        logger.info("no dispatched function provided for %s", args.subcommand)


def _render_table_overview(
    table_definitions: Mapping[str, Sequence[Mapping[str, Any]]],
    console: Console,
) -> None:
    """Pretty-print table metadata using ``rich``."""

    table = Table(title="Person API Database Schema", show_lines=True)
    table.add_column("Table", style="bold cyan")
    table.add_column("Column", style="magenta")
    table.add_column("Type", style="green")
    table.add_column("Nullable", justify="center", style="yellow")
    table.add_column("Default", style="bright_black")

    table_names = sorted(table_definitions)
    if not table_names:
        table.add_row("[dim]No tables found[/dim]", "", "", "", "")
        console.print(table)
        return

    for table_index, table_name in enumerate(table_names):
        for column_index, column in enumerate(table_definitions[table_name]):
            default = column.get("default")
            table.add_row(
                table_name if column_index == 0 else "",
                str(column.get("name", "")),
                str(column.get("type", "")),
                "Yes" if column.get("nullable", True) else "No",
                "" if default in (None, "") else str(default),
            )
        if table_index < len(table_names) - 1:
            table.add_section()

    console.print(table)
