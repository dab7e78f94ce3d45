from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from sqlalchemy import inspect, select, text

from personapi.db.connect import get_db_path, get_session
from personapi.db.models import AuthUser, Person, UserRole, initialize_db, sqlite_engine
from personapi.db.users import find_user, new_user
from personapi.logging import get_logger

logger = get_logger(__name__)

PERSON_COLUMNS = ("id", "name", "username", "email", "gender", "date_of_birth", "phone", "city", "country")


def initialize(file_path: str | Path | None = None):
    """Create all tables in the database at ``file_path`` and return the engine."""

    db_uri = get_db_path(file_path)
    engine = sqlite_engine(db_uri)
    initialize_db(engine)
    logger.info("initialized %s", db_uri)
    return engine


def check_status(file_path: str | Path | None = None) -> str | None:
    """Query the database for its SQLite version and log/return it."""

    with get_session(file_path) as session:
        result = session.execute(text("SELECT sqlite_version();")).fetchone()
    if result:
        logger.info("sqlite version: %s", result[0])
        return result[0]
    logger.warning("sqlite version query returned no result")
    return None


def show_tables(file_path: str | Path | None = None) -> dict[str, list[dict[str, Any]]]:
    """Return a mapping of table name to column definitions."""

    with get_session(file_path) as session:
        inspector = inspect(session.bind)
        tables: dict[str, list[dict[str, Any]]] = {}
        for table_name in sorted(inspector.get_table_names()):
            tables[table_name] = [
                {
                    "name": column.get("name", ""),
                    "type": str(column.get("type", "")),
                    "nullable": bool(column.get("nullable", True)),
                    "default": column.get("default"),
                }
                for column in inspector.get_columns(table_name)
            ]
    return tables


def read_table(file_path: str | Path) -> pd.DataFrame:
    path = str(file_path)
    if path.endswith(".tsv"):
        return pd.read_table(path, dtype=str)
    if path.endswith(".csv"):
        return pd.read_csv(path, dtype=str)
    if path.endswith(".json"):
        return pd.read_json(path, orient="records", dtype=False)
    raise ValueError(f"do not know how to read file: {path}")


def _clean_record(raw: dict[str, Any]) -> dict[str, Any]:
    record = {k: v for k, v in raw.items() if k in PERSON_COLUMNS and v is not None}
    if "id" in record:
        record["id"] = int(record["id"])
    if "date_of_birth" in record:
        record["date_of_birth"] = pd.Timestamp(record["date_of_birth"]).date()
    for key in ("name", "username", "email", "gender", "phone", "city", "country"):
        if key in record:
            record[key] = str(record[key]).strip()
    return record


def import_persons(file_path: str | Path, db_file_path: str | Path | None = None) -> int:
    """Insert the persons listed in a CSV/TSV/JSON file; return the row count.

    Unknown columns are dropped. ``name`` and ``gender`` are required.
    """

    df = read_table(file_path)
    missing = {"name", "gender"} - set(df.columns)
    if missing:
        raise ValueError(f"missing required columns: {sorted(missing)}")

    df = df.replace({np.nan: None})
    unknown = sorted(set(df.columns) - set(PERSON_COLUMNS))
    if unknown:
        logger.warning("ignoring unknown columns: %s", unknown)

    records = [_clean_record(r) for r in df.to_dict(orient="records")]
    with get_session(db_file_path) as session:
        session.add_all(Person(**r) for r in records)
    logger.info("imported %d persons from %s", len(records), file_path)
    return len(records)


def _export_value(value: Any) -> Any:
    return value.isoformat() if isinstance(value, date) else value


def export_persons(file_path: str | Path, db_file_path: str | Path | None = None) -> int:
    """Write every person to CSV or JSON (chosen by suffix); return the row count."""

    with get_session(db_file_path) as session:
        rows = session.scalars(select(Person).order_by(Person.id)).all()
        df = pd.DataFrame(
            [{c: _export_value(getattr(r, c)) for c in PERSON_COLUMNS} for r in rows],
            columns=PERSON_COLUMNS,
        )

    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        df.to_json(path, orient="records", date_format="iso", indent=2)
    else:
        df.to_csv(path, index=False, sep="\t" if path.suffix.lower() == ".tsv" else ",")
    logger.info("exported %d persons to %s", len(df), path)
    return len(df)


def create_user(
    username: str,
    password: str,
    role: UserRole,
    db_file_path: str | Path | None = None,
) -> AuthUser:
    """Create an auth user; raises ``ValueError`` when the username is taken."""

    with get_session(db_file_path) as session:
        if find_user(session, username) is not None:
            raise ValueError(f"username already exists: {username}")
        user = new_user(username, password, role=role)
        session.add(user)
    logger.info("created %s user %s", role.value, username)
    return user
