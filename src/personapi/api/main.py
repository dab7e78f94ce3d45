from __future__ import annotations

# src/personapi/api/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from personapi import __version__
from personapi.api.assembler import PersonModelAssembler
from personapi.api.errors import register_exception_handlers
from personapi.api.routes.auth import router as auth_router
from personapi.api.routes.persons import build_person_router
from personapi.config import Settings, load_settings
from personapi.db.connect import SessionFactory, get_db_path, get_session_dep, make_session_factory
from personapi.db.models import sqlite_engine
from personapi.db.store import PersonStore
from personapi.logging import get_logger
from personapi.service import CachedPersonQueryService, PersonQuery, PersonQueryService

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    session_factory: SessionFactory | None = None,
    query: PersonQuery | None = None,
) -> FastAPI:
    """Wire settings, storage, query service and routes into an application.

    ``session_factory`` defaults to a SQLite database at ``settings.db_path``
    (or the default location); ``query`` defaults to a cached
    :class:`PersonQueryService` over that database.
    """

    if settings is None:
        settings = load_settings()
    if session_factory is None:
        session_factory = make_session_factory(sqlite_engine(get_db_path(settings.db_path)))
    if query is None:
        service = PersonQueryService(
            PersonStore(session_factory),
            max_page_size=settings.max_page_size,
        )
        query = CachedPersonQueryService(service, ttl_seconds=settings.cache_ttl_seconds)

    app = FastAPI(title="Person API", version=__version__)
    app.state.settings = settings
    app.state.person_query = query
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    def session_dep():
        with session_factory() as session:
            yield session

    app.dependency_overrides[get_session_dep] = session_dep

    @app.get("/status")
    def status():
        return {"ok": True}

    app.include_router(auth_router, prefix="/api")
    app.include_router(
        build_person_router(query, PersonModelAssembler(settings.resource_root), settings),
        prefix=settings.resource_root,
    )
    register_exception_handlers(app)

    logger.info(
        "person routes mounted at %s (login required: %s)",
        settings.resource_root,
        settings.require_login,
    )
    return app
