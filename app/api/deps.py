"""Session loading and auth guards (require_authenticated, require_admin, require_authenticated_admin)."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.models.user import ROLE_ADMIN
from app.schemas.auth import SessionContext
from app.services.sessions import load_session


def get_session_token(request: Request) -> str | None:
    """Raw session token from the cookie, if any."""
    return request.cookies.get(get_settings().SESSION_COOKIE_NAME) or None


def get_session_context(
    token: Annotated[str | None, Depends(get_session_token)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionContext | None:
    """Dependency: resolve the session cookie to a live session, or None."""
    return load_session(db, token)


def require_authenticated(
    ctx: Annotated[SessionContext | None, Depends(get_session_context)],
) -> SessionContext:
    """Dependency: require a live session. Raises 401 otherwise."""
    if ctx is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return ctx


def require_admin(
    ctx: Annotated[SessionContext | None, Depends(get_session_context)],
) -> SessionContext:
    """Dependency: require a session whose role snapshot is 'admin'. Raises 403 otherwise, even with no session."""
    if ctx is None or ctx.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return ctx


def require_authenticated_admin(
    ctx: Annotated[SessionContext, Depends(require_authenticated)],
) -> SessionContext:
    """Dependency: 401 without a session, then 403 unless the role snapshot is 'admin'."""
    if ctx.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return ctx
