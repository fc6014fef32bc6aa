"""Membership records ("stories"): list, one-per-user create, admin update and delete."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, Result
from app.models import Member, User
from app.schemas.member import MemberListItem, MemberRecord

logger = logging.getLogger(__name__)

ALREADY_SUBMITTED = "You have already submitted a story"
MEMBER_NOT_FOUND = "Member not found"


def list_members(db: Session) -> Result[list[MemberListItem]]:
    """All records newest first, left-joined to the owner's email and username."""
    try:
        rows = (
            db.query(Member, User.email, User.username)
            .outerjoin(User, Member.user_id == User.id)
            .order_by(Member.created_at.desc(), Member.id.desc())
            .all()
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error fetching members")
        return Result.failure(ErrorKind.INTERNAL, "Failed to fetch members")

    items = [
        MemberListItem(
            **MemberRecord.model_validate(member).model_dump(),
            email=email,
            username=username,
        )
        for member, email, username in rows
    ]
    return Result.success(items)


def _has_record(db: Session, owner_id: int) -> bool:
    return db.query(Member.id).filter(Member.user_id == owner_id).first() is not None


def create_member(
    db: Session,
    owner_id: int,
    first_name: str | None,
    last_name: str | None,
    song: str | None,
    story: str | None,
) -> Result[MemberRecord]:
    """
    Create owner_id's record. A second submission by the same owner is rejected.

    The existence check rejects the sequential case; the unique constraint on
    members.user_id rejects two submissions that both pass the check.
    """
    if not first_name or not last_name or not song or not story:
        return Result.failure(
            ErrorKind.VALIDATION,
            "First name, last name, song and story are required",
        )

    try:
        if _has_record(db, owner_id):
            return Result.failure(ErrorKind.VALIDATION, ALREADY_SUBMITTED)
        member = Member(
            user_id=owner_id,
            first_name=first_name,
            last_name=last_name,
            favorite_song=song,
            story=story,
        )
        db.add(member)
        db.commit()
        db.refresh(member)
    except IntegrityError:
        db.rollback()
        try:
            duplicate = _has_record(db, owner_id)
        except SQLAlchemyError:
            db.rollback()
            duplicate = False
        if duplicate:
            logger.warning("Concurrent story submission rejected", extra={"user_id": owner_id})
            return Result.failure(ErrorKind.VALIDATION, ALREADY_SUBMITTED)
        logger.exception("Error adding member")
        return Result.failure(ErrorKind.INTERNAL, "Failed to add member")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error adding member")
        return Result.failure(ErrorKind.INTERNAL, "Failed to add member")

    logger.info("Member story submitted", extra={"member_id": member.id, "user_id": owner_id})
    return Result.success(MemberRecord.model_validate(member))


def update_member(
    db: Session,
    member_id: int,
    first_name: str | None,
    last_name: str | None,
    favorite_song: str | None,
    story: str | None,
) -> Result[MemberRecord]:
    """Replace all four text fields of member_id."""
    if not first_name or not last_name or not favorite_song or not story:
        return Result.failure(ErrorKind.VALIDATION, "All fields are required")

    try:
        member = db.get(Member, member_id)
        if member is None:
            return Result.failure(ErrorKind.NOT_FOUND, MEMBER_NOT_FOUND)
        member.first_name = first_name
        member.last_name = last_name
        member.favorite_song = favorite_song
        member.story = story
        db.commit()
        db.refresh(member)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating member")
        return Result.failure(ErrorKind.INTERNAL, "Failed to update member")

    return Result.success(MemberRecord.model_validate(member))


def delete_member(db: Session, member_id: int) -> Result[None]:
    try:
        deleted = (
            db.query(Member)
            .filter(Member.id == member_id)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            db.rollback()
            return Result.failure(ErrorKind.NOT_FOUND, MEMBER_NOT_FOUND)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting member")
        return Result.failure(ErrorKind.INTERNAL, "Failed to delete member")

    logger.info("Member deleted", extra={"member_id": member_id})
    return Result.success()
