# personapi/db/connect.py

import os
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Callable, ContextManager, Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from personapi.db.models import initialize_db, sqlite_engine
from personapi.logging import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


@lru_cache(maxsize=None)
def get_db_dir() -> Path:
    db_dir = Path(os.environ.get("PERSONAPI_DB_DIR", Path.home() / "personapi"))
    db_dir.mkdir(parents=True, exist_ok=True)
    logger.info("setting db_dir to %s", str(db_dir))
    return db_dir


def get_db_path(file: str | Path | None = None) -> str:
    """Return a SQLite database URI string.

    Parameters
    ----------
    file:
        Optional path (or ``sqlite`` URI) to the database. When ``None`` the
        ``PERSONAPI_DB_PATH`` environment variable is used, falling back to
        ``personapi.db`` inside :func:`get_db_dir`.
    """

    if file is None:
        file = os.getenv("PERSONAPI_DB_PATH") or None
    if file is None:
        return "sqlite:///" + str(get_db_dir() / "personapi.db")

    db_uri = str(file)
    if not db_uri.startswith("sqlite"):
        db_uri = "sqlite:///" + db_uri
    return db_uri


def make_session_factory(engine: Engine) -> SessionFactory:
    """Return a context-manager factory yielding transactional sessions.

    Sessions are created with ``expire_on_commit=False`` so objects loaded in
    a request stay readable after the commit on exit.
    """

    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    initialize_db(engine=engine)

    @contextmanager
    def get_session():
        session = SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return get_session


@lru_cache(maxsize=None)
def _default_factory(db_uri: str) -> SessionFactory:
    logger.info("opening database %s", db_uri)
    return make_session_factory(sqlite_engine(db_uri))


@contextmanager
def get_session(file_path: str | Path | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    factory = _default_factory(get_db_path(file_path))
    with factory() as session:
        yield session


def get_session_dep() -> Iterator[Session]:
    """FastAPI dependency that yields a SQLAlchemy session.

    Applications built by :func:`personapi.api.main.create_app` override this
    dependency with their own session factory.
    """

    with get_session() as session:
        yield session
