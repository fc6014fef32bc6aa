"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.member import Member
from app.models.session import UserSession
from app.models.user import User

__all__ = ["Base", "Member", "User", "UserSession"]
