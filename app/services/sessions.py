"""Server-side session store: create, resolve, destroy, and purge login sessions."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, Result
from app.core.security import new_session_token
from app.models import User, UserSession
from app.schemas.auth import SessionContext

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    # Some drivers (SQLite) hand back naive datetimes; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def create_session(
    db: Session,
    user: User,
    ttl: timedelta,
    *,
    now: datetime | None = None,
) -> UserSession:
    """
    Add a session row for user with a fixed expiry of now + ttl.

    Does not commit; the caller owns the transaction. Raises SQLAlchemyError on store failure.
    """
    issued_at = now or _utcnow()
    row = UserSession(
        token=new_session_token(),
        user_id=user.id,
        username=user.username,
        role=user.role,
        created_at=issued_at,
        expires_at=issued_at + ttl,
    )
    db.add(row)
    return row


def load_session(
    db: Session,
    token: str | None,
    *,
    now: datetime | None = None,
) -> SessionContext | None:
    """
    Resolve a cookie token to its session context.

    Returns None for a missing, unknown or expired token. A store failure is logged
    and treated as "no session" so read-only routes keep working.
    """
    if not token:
        return None
    try:
        row = db.get(UserSession, token)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to load session; treating request as unauthenticated")
        return None
    if row is None:
        return None
    expires_at = _as_utc(row.expires_at)
    if expires_at <= (now or _utcnow()):
        return None
    return SessionContext(
        token=row.token,
        user_id=row.user_id,
        username=row.username,
        role=row.role,
        expires_at=expires_at,
    )


def destroy_session(db: Session, token: str) -> Result[None]:
    """Delete the session identified by token. Deleting an unknown token is a no-op success."""
    try:
        db.query(UserSession).filter(UserSession.token == token).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error destroying session")
        return Result.failure(ErrorKind.INTERNAL, "Logout failed")
    return Result.success()


def revoke_user_sessions(db: Session, user_id: int) -> int:
    """Delete every session belonging to user_id. Does not commit."""
    return (
        db.query(UserSession)
        .filter(UserSession.user_id == user_id)
        .delete(synchronize_session=False)
    )


def purge_expired_sessions(db: Session, *, now: datetime | None = None) -> int:
    """
    Delete sessions whose expiry has passed. Idempotent: safe to run repeatedly.

    Returns the number of rows deleted. Raises SQLAlchemyError on store failure.
    """
    cutoff = now or _utcnow()
    deleted_count = (
        db.query(UserSession)
        .filter(UserSession.expires_at <= cutoff)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted_count > 0:
        logger.info(
            "Session purge: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
