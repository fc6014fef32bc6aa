"""Admin user management over the credential store."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, Result
from app.models import Member, User
from app.schemas.user import UserListItem
from app.services.sessions import revoke_user_sessions

logger = logging.getLogger(__name__)


def list_users(db: Session) -> Result[list[UserListItem]]:
    """All users, newest first, without password hashes."""
    try:
        users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error fetching users")
        return Result.failure(ErrorKind.INTERNAL, "Failed to fetch users")
    return Result.success([UserListItem.model_validate(u) for u in users])


def delete_user(db: Session, caller_id: int, target_id: int) -> Result[str]:
    """
    Delete target_id and return its username. An admin cannot delete themselves.

    The user's membership record and open sessions go in the same transaction.
    """
    if target_id == caller_id:
        return Result.failure(ErrorKind.VALIDATION, "Cannot delete your own account")

    try:
        user = db.get(User, target_id)
        if user is None:
            return Result.failure(ErrorKind.NOT_FOUND, "User not found")
        username = user.username
        db.query(Member).filter(Member.user_id == target_id).delete(synchronize_session=False)
        sessions_revoked = revoke_user_sessions(db, target_id)
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting user")
        return Result.failure(ErrorKind.INTERNAL, "Failed to delete user")

    logger.info(
        "User deleted",
        extra={"user_id": target_id, "deleted_by": caller_id, "sessions_revoked": sessions_revoked},
    )
    return Result.success(username)
