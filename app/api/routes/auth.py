"""Login, logout, session status and registration."""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_session_context, get_session_token
from app.api.errors import unwrap
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import (
    AuthStatusResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    SessionContext,
    UserPublic,
)
from app.services import accounts

router = APIRouter()


@router.post("/login", response_model=UserPublic)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    current_token: Annotated[str | None, Depends(get_session_token)],
) -> UserPublic:
    """
    Authenticate with username and password and start a session.

    The session token is returned only as an HttpOnly cookie.
    """
    settings = get_settings()
    ttl = timedelta(hours=settings.SESSION_TTL_HOURS)
    user, token = unwrap(
        accounts.login(db, body.username, body.password, ttl, previous_token=current_token)
    )
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(ttl.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    current_token: Annotated[str | None, Depends(get_session_token)],
) -> MessageResponse:
    settings = get_settings()
    unwrap(accounts.logout(db, current_token))
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/auth/status", response_model=AuthStatusResponse, response_model_exclude_none=True)
def get_auth_status(
    ctx: Annotated[SessionContext | None, Depends(get_session_context)],
) -> AuthStatusResponse:
    """Report whether the request carries a live session, and whose."""
    return accounts.auth_status(ctx)


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Create an account. New accounts always get role "user"."""
    return unwrap(accounts.register(db, body.username, body.email, body.password))
