import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from personapi.logging import get_logger

from .base import Base

logger = get_logger(__name__)


def _casefold(value):
    # SQLite's own lower() folds ASCII only
    return value.casefold() if isinstance(value, str) else value


def sqlite_engine(db_path: str = "sqlite:///./personapi.db") -> Engine:
    engine = create_engine(
        db_path,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    trace_sql = os.getenv("PERSONAPI_SQL_TRACE")

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if trace_sql:
            dbapi_connection.set_trace_callback(lambda x: logger.info(x))
        cursor.close()

    return engine


def initialize_db(engine: Engine):
    Base.metadata.create_all(bind=engine)
