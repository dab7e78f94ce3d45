"""Runtime settings for the Person API, read from ``PERSONAPI_*`` env vars."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


_DEFAULT_CORS_ORIGINS = (
    "http://127.0.0.1:3000",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://localhost:5173",
)


def _is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _parse_csv_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _env_str(key: str, default: str) -> str:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(key: str, default: int, *, minimum: int | None = None) -> int:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None:
        value = max(minimum, value)
    return value


def _normalize_root(raw: str) -> str:
    # the person routes need a non-empty mount point
    root = raw.strip().strip("/")
    return "/" + root if root else "/api/v1/persons"


@dataclass(frozen=True)
class Settings:
    api_version: str = "1"
    api_key: str = "personapi-dev-key"
    resource_root: str = "/api/v1/persons"
    default_page_size: int = 20
    max_page_size: int = 100
    cache_ttl_seconds: float = 60.0
    require_login: bool = True
    db_path: str | None = None
    cors_origins: tuple[str, ...] = field(default=_DEFAULT_CORS_ORIGINS)
    cors_allow_credentials: bool = False
    password_iterations: int = 250_000
    password_pepper: str = ""
    session_cookie_name: str = "personapi_session"
    session_ttl_seconds: int = 60 * 60 * 12


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment.

    Malformed integers fall back to their defaults; sizes are clamped to at
    least 1 and the cache TTL to at least 0 (0 disables caching). PBKDF2
    iterations never drop below 1000 and session lifetimes below a minute.
    """

    max_page_size = _env_int("PERSONAPI_MAX_PAGE_SIZE", 100, minimum=1)
    default_page_size = min(
        _env_int("PERSONAPI_DEFAULT_PAGE_SIZE", 20, minimum=1), max_page_size
    )
    return Settings(
        api_version=_env_str("PERSONAPI_API_VERSION", "1"),
        api_key=_env_str("PERSONAPI_API_KEY", "personapi-dev-key"),
        resource_root=_normalize_root(
            _env_str("PERSONAPI_RESOURCE_ROOT", "/api/v1/persons")
        ),
        default_page_size=default_page_size,
        max_page_size=max_page_size,
        cache_ttl_seconds=float(_env_int("PERSONAPI_CACHE_TTL_SECONDS", 60, minimum=0)),
        require_login=_is_truthy(os.getenv("PERSONAPI_REQUIRE_LOGIN", "1")),
        db_path=os.getenv("PERSONAPI_DB_PATH") or None,
        cors_origins=tuple(_parse_csv_list(os.getenv("PERSONAPI_CORS_ORIGINS")))
        or _DEFAULT_CORS_ORIGINS,
        cors_allow_credentials=_is_truthy(os.getenv("PERSONAPI_CORS_ALLOW_CREDENTIALS")),
        password_iterations=_env_int("PERSONAPI_PASSWORD_ITERATIONS", 250_000, minimum=1_000),
        password_pepper=_env_str("PERSONAPI_PASSWORD_PEPPER", ""),
        session_cookie_name=_env_str("PERSONAPI_SESSION_COOKIE_NAME", "personapi_session"),
        session_ttl_seconds=_env_int("PERSONAPI_SESSION_TTL_SECONDS", 60 * 60 * 12, minimum=60),
    )
