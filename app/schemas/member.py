"""Request/response schemas for membership records ("stories")."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MemberCreateRequest(BaseModel):
    """Submission from the logged-in user; owner comes from the session, not the body."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    song: str | None = Field(default=None, description="Favorite song (free text)")
    story: str | None = None


class MemberUpdateRequest(BaseModel):
    """Admin full replace of a record's four text fields."""

    first_name: str | None = None
    last_name: str | None = None
    favorite_song: str | None = None
    story: str | None = None


class MemberRecord(BaseModel):
    """A stored membership record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int | None
    first_name: str
    last_name: str
    favorite_song: str
    story: str
    created_at: datetime


class MemberListItem(MemberRecord):
    """Record joined with its owner; owner fields are null when the owner is gone."""

    email: str | None = None
    username: str | None = None
