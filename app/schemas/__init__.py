"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthStatusResponse,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    SessionContext,
    UserPublic,
)
from app.schemas.health import HealthResponse
from app.schemas.member import (
    MemberCreateRequest,
    MemberListItem,
    MemberRecord,
    MemberUpdateRequest,
)
from app.schemas.user import UserListItem

__all__ = [
    "AuthStatusResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MemberCreateRequest",
    "MemberListItem",
    "MemberRecord",
    "MemberUpdateRequest",
    "MessageResponse",
    "RegisterRequest",
    "SessionContext",
    "UserListItem",
    "UserPublic",
]
