"""Authentication and authorization for the Person API.

Callers authenticate in one of two ways:

1) Cookie-backed sessions created by ``POST /api/auth/login``. The raw token
   lives only in the HttpOnly cookie; the database stores its SHA256 hash.
2) HTTP Basic credentials checked against the stored password material
   (see :mod:`personapi.db.users`).

Authorization is role + permission based. A route declares the roles it
accepts and the permission it needs via :func:`require_permission`, which
returns a FastAPI dependency evaluated before the handler body.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import hashlib
import secrets
from typing import Callable

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from personapi.config import Settings
from personapi.db.connect import get_session_dep
from personapi.db.models import AuthSession, AuthUser, Permission, UserRole
from personapi.db.users import authenticate
from personapi.logging import get_logger

logger = get_logger(__name__)

_BASIC = HTTPBasic(auto_error=False)
_BASIC_CHALLENGE = {"WWW-Authenticate": "Basic"}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def create_session(db: Session, *, user: AuthUser, ttl_seconds: int) -> str:
    """Store a new session for ``user`` and return the raw token."""

    token = secrets.token_urlsafe(32)
    now = datetime.now(UTC)
    db.add(
        AuthSession(
            user_id=user.id,
            token_hash=_token_digest(token),
            created_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
        )
    )
    db.commit()
    return token


def delete_session(db: Session, *, token: str) -> None:
    db.execute(delete(AuthSession).where(AuthSession.token_hash == _token_digest(token)))
    db.commit()


def set_session_cookie(response: Response, *, token: str, settings: Settings) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, *, settings: Settings) -> None:
    response.delete_cookie(settings.session_cookie_name, path="/")


def user_for_token(db: Session, token: str) -> AuthUser | None:
    """Return the active owner of an unexpired session ``token``."""

    stmt = (
        select(AuthSession)
        .where(AuthSession.token_hash == _token_digest(token))
        .where(AuthSession.expires_at > datetime.now(UTC))
    )
    session_row = db.scalars(stmt).first()
    if session_row is None or not session_row.user.is_active:
        return None
    return session_row.user


def get_current_user(
    request: Request,
    db: Session = Depends(get_session_dep),
    credentials: HTTPBasicCredentials | None = Depends(_BASIC),
    settings: Settings = Depends(get_settings),
) -> AuthUser | None:
    """Resolve the caller from the session cookie, then from HTTP Basic."""

    token = request.cookies.get(settings.session_cookie_name)
    if token:
        user = user_for_token(db, token)
        if user is not None:
            return user

    if credentials is not None:
        return authenticate(db, credentials.username, credentials.password, settings=settings)
    return None


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated.",
        headers=_BASIC_CHALLENGE,
    )


def require_user(user: AuthUser | None = Depends(get_current_user)) -> AuthUser:
    if user is None:
        raise _unauthorized()
    return user


def check_permission(
    user: AuthUser,
    *,
    roles: frozenset[UserRole],
    permission: Permission,
) -> None:
    """Raise 403 unless ``user`` holds one of ``roles`` and ``permission``."""

    if user.role not in roles or permission not in user.role.permissions:
        logger.warning(
            "access denied for %s (role=%s, needs %s)",
            user.username,
            user.role.value,
            permission.value,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied.",
        )


def require_permission(
    *roles: UserRole,
    permission: Permission,
    enabled: bool = True,
) -> Callable[..., AuthUser | None]:
    """Build a dependency enforcing ``roles`` and ``permission``.

    With ``enabled`` false the dependency never resolves a caller, so no
    database session is opened and no credentials are checked.
    """

    if not enabled:

        def open_guard(request: Request) -> None:
            request.state.user = None
            return None

        return open_guard

    accepted = frozenset(roles)

    def guard(
        request: Request,
        user: AuthUser | None = Depends(get_current_user),
    ) -> AuthUser:
        if user is None:
            raise _unauthorized()
        check_permission(user, roles=accepted, permission=permission)
        request.state.user = user
        return user

    return guard
