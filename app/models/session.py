"""ORM model for server-side login sessions."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class UserSession(Base):
    """
    One logged-in browser, referenced by the opaque token in the session cookie.

    username and role are snapshotted at login; a role change only shows up
    after the user logs in again. Expiry is fixed at creation (no sliding renewal).
    """

    __tablename__ = "sessions"

    token = Column(String(128), primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    username = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
