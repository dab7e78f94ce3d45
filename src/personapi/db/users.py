"""Stored login credentials.

Passwords are kept as PBKDF2-HMAC-SHA256 material: a random per-user salt,
the derived key and the iteration count it was derived with, all on the
:class:`~personapi.db.models.AuthUser` row. An optional server-side pepper
(``Settings.password_pepper``) is mixed into the secret before derivation.
"""

from __future__ import annotations

import base64
import hashlib
import secrets

from sqlalchemy import select
from sqlalchemy.orm import Session

from personapi.config import Settings, load_settings
from personapi.db.models import AuthUser, UserRole

SALT_BYTES = 16
KEY_BYTES = 32


def _secret(password: str, pepper: str) -> bytes:
    secret = password.encode("utf-8")
    if pepper:
        secret += hashlib.sha256(pepper.encode("utf-8")).digest()
    return secret


def hash_password(
    password: str,
    *,
    settings: Settings | None = None,
    salt: bytes | None = None,
) -> tuple[str, str, int]:
    """Return ``(salt_b64, hash_b64, iterations)`` for ``password``."""

    settings = settings or load_settings()
    if salt is None:
        salt = secrets.token_bytes(SALT_BYTES)
    iterations = settings.password_iterations
    derived = hashlib.pbkdf2_hmac(
        "sha256",
        _secret(password, settings.password_pepper),
        salt,
        iterations,
        dklen=KEY_BYTES,
    )
    return (
        base64.b64encode(salt).decode("ascii"),
        base64.b64encode(derived).decode("ascii"),
        iterations,
    )


def password_matches(user: AuthUser, password: str, *, pepper: str = "") -> bool:
    try:
        salt = base64.b64decode(user.password_salt, validate=True)
        expected = base64.b64decode(user.password_hash, validate=True)
    except ValueError:
        return False

    derived = hashlib.pbkdf2_hmac(
        "sha256",
        _secret(password, pepper),
        salt,
        user.password_iterations,
        dklen=len(expected),
    )
    return secrets.compare_digest(derived, expected)


def new_user(
    username: str,
    password: str,
    *,
    role: UserRole,
    settings: Settings | None = None,
) -> AuthUser:
    salt_b64, hash_b64, iterations = hash_password(password, settings=settings)
    return AuthUser(
        username=username,
        password_hash=hash_b64,
        password_salt=salt_b64,
        password_iterations=iterations,
        role=role,
        is_active=True,
    )


def find_user(db: Session, username: str) -> AuthUser | None:
    return db.scalars(select(AuthUser).where(AuthUser.username == username)).first()


def authenticate(
    db: Session,
    username: str,
    password: str,
    *,
    settings: Settings | None = None,
) -> AuthUser | None:
    """Return the active user called ``username`` if ``password`` matches."""

    settings = settings or load_settings()
    user = find_user(db, username)
    if user is None or not user.is_active:
        return None
    if not password_matches(user, password, pepper=settings.password_pepper):
        return None
    return user
