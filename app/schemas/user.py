"""Schemas for the admin user-management endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str
    created_at: datetime
