"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login. Presence is checked by the account service."""

    username: str | None = Field(default=None, description="Username (case-sensitive)")
    password: str | None = Field(default=None, description="Password")


class RegisterRequest(BaseModel):
    """New account details. Any role in the payload is ignored."""

    username: str | None = Field(default=None, description="Unique username")
    email: str | None = Field(default=None, description="Unique email address")
    password: str | None = Field(default=None, description="Password (at least 6 characters)")


class UserPublic(BaseModel):
    """User identity returned to clients (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str


class SessionContext(BaseModel):
    """Resolved session for the current request (role is the login-time snapshot)."""

    token: str
    user_id: int
    username: str
    role: str
    expires_at: datetime


class AuthStatusResponse(BaseModel):
    """Response for GET /auth/status. Identity fields are omitted when not authenticated."""

    model_config = ConfigDict(populate_by_name=True)

    authenticated: bool
    user_id: int | None = Field(default=None, alias="userId")
    username: str | None = None
    role: str | None = None


class MessageResponse(BaseModel):
    """Confirmation payload for operations with no resource to return."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error: str
