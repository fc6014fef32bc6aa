"""Admin-only user management."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.api.errors import unwrap
from app.core.database import get_db
from app.schemas.auth import MessageResponse, SessionContext
from app.schemas.user import UserListItem
from app.services import users

router = APIRouter()


@router.get("", response_model=list[UserListItem])
def list_users(
    _admin: Annotated[SessionContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserListItem]:
    """List all users, newest first (admin only)."""
    return unwrap(users.list_users(db))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Annotated[SessionContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user other than the caller (admin only)."""
    username = unwrap(users.delete_user(db, caller_id=admin.user_id, target_id=user_id))
    return MessageResponse(message=f"User {username} deleted successfully")
