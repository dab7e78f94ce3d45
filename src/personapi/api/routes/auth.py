from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from personapi.api.schemas import BootstrapRequest, LoginRequest, UserOut
from personapi.api.security import (
    clear_session_cookie,
    create_session,
    delete_session,
    get_settings,
    require_user,
    set_session_cookie,
)
from personapi.config import Settings
from personapi.db.connect import get_session_dep
from personapi.db.models import AuthUser, UserRole
from personapi.db.users import authenticate, new_user
from personapi.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _user_out(user: AuthUser) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        role=user.role,
        permissions=sorted(p.value for p in user.role.permissions),
        is_active=user.is_active,
    )


def _start_session(db: Session, response: Response, user: AuthUser, settings: Settings) -> None:
    token = create_session(db, user=user, ttl_seconds=settings.session_ttl_seconds)
    set_session_cookie(response, token=token, settings=settings)


@router.post("/bootstrap", response_model=UserOut, status_code=201)
def bootstrap(
    payload: BootstrapRequest,
    response: Response,
    db: Session = Depends(get_session_dep),
    settings: Settings = Depends(get_settings),
):
    """Create the first (admin) user if no users exist yet."""

    if db.scalar(select(func.count()).select_from(AuthUser)):
        raise HTTPException(status_code=409, detail="Users already exist.")

    user = new_user(payload.username, payload.password, role=UserRole.admin, settings=settings)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("bootstrapped admin user %s", user.username)

    _start_session(db, response, user, settings)
    return _user_out(user)


@router.post("/login", response_model=UserOut)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_session_dep),
    settings: Settings = Depends(get_settings),
):
    user = authenticate(db, payload.username, payload.password, settings=settings)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials.")

    _start_session(db, response, user, settings)
    return _user_out(user)


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    db: Session = Depends(get_session_dep),
    settings: Settings = Depends(get_settings),
):
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        delete_session(db, token=token)
    clear_session_cookie(response, settings=settings)
    return {"ok": True}


@router.get("/me", response_model=UserOut)
def me(user: AuthUser = Depends(require_user)):
    return _user_out(user)
