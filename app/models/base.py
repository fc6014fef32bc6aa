"""SQLAlchemy declarative Base shared by users, members and sessions."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
