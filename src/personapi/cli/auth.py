"""Command-line helpers for managing API users."""

from __future__ import annotations

import getpass
import secrets

from rich.console import Console
from rich.panel import Panel

from personapi.db import operations
from personapi.db.models import UserRole
from personapi.logging import get_logger

logger = get_logger(__name__)

_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789"


def _generate_password(length: int) -> str:
    if length < 8:
        raise ValueError("password length must be at least 8 characters")
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))


def register_subcommands(subparsers):
    create_parser = subparsers.add_parser("create-user", help="Create an API user")
    create_parser.add_argument("username")
    create_parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.person.value,
    )
    create_parser.add_argument(
        "--password",
        help="Password to set (prompted when omitted; use --generate for a random one)",
    )
    create_parser.add_argument("--generate", action="store_true", help="Generate a random password")
    create_parser.add_argument("--length", type=int, default=16, help="Generated password length")
    create_parser.add_argument("--database", required=False)


def dispatch(args, console: Console | None = None):
    if console is None:
        console = Console()

    if args.subcommand != "create-user":
        logger.error("No handler for auth subcommand: %s", args.subcommand)
        raise ValueError(f"No handler for auth subcommand: {args.subcommand}")

    generated = False
    password = args.password
    if password is None and args.generate:
        password = _generate_password(args.length)
        generated = True
    if password is None:
        password = getpass.getpass(f"Password for {args.username}: ")
    if len(password) < 8:
        raise ValueError("password must be at least 8 characters")

    user = operations.create_user(
        args.username,
        password,
        UserRole(args.role),
        getattr(args, "database", None),
    )

    lines = [f"username: {user.username}", f"role: {user.role.value}"]
    if generated:
        lines.append(f"password: {password}")
    console.print(Panel("\n".join(lines), title="User created"))
