"""Membership records: public list, one submission per user, admin edit and delete."""

from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.api.deps import require_authenticated, require_authenticated_admin
from app.api.errors import unwrap
from app.core.database import get_db
from app.schemas.auth import MessageResponse, SessionContext
from app.schemas.member import (
    MemberCreateRequest,
    MemberListItem,
    MemberRecord,
    MemberUpdateRequest,
)
from app.services import members

router = APIRouter()

BodyT = TypeVar("BodyT", bound=BaseModel)


async def _read_body(request: Request, model: type[BodyT]) -> BodyT:
    # Only called from dependencies that depend on a guard, so the body is read after auth.
    try:
        return model.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request") from e


async def member_submission(
    request: Request,
    _ctx: Annotated[SessionContext, Depends(require_authenticated)],
) -> MemberCreateRequest:
    """Dependency: the story submission body, parsed only for a logged-in caller."""
    return await _read_body(request, MemberCreateRequest)


async def member_update(
    request: Request,
    _admin: Annotated[SessionContext, Depends(require_authenticated_admin)],
) -> MemberUpdateRequest:
    """Dependency: the update body, parsed only for an admin caller."""
    return await _read_body(request, MemberUpdateRequest)


@router.get("", response_model=list[MemberListItem])
def list_members(db: Annotated[Session, Depends(get_db)]) -> list[MemberListItem]:
    """All records, newest first, with the owner's username and email."""
    return unwrap(members.list_members(db))


@router.post(
    "",
    response_model=MemberRecord,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": MemberCreateRequest.model_json_schema()}},
        }
    },
)
def create_member(
    ctx: Annotated[SessionContext, Depends(require_authenticated)],
    body: Annotated[MemberCreateRequest, Depends(member_submission)],
    db: Annotated[Session, Depends(get_db)],
) -> MemberRecord:
    """Submit the caller's story. Only one submission per user is accepted."""
    return unwrap(
        members.create_member(
            db,
            owner_id=ctx.user_id,
            first_name=body.first_name,
            last_name=body.last_name,
            song=body.song,
            story=body.story,
        )
    )


@router.put(
    "/{member_id}",
    response_model=MemberRecord,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": MemberUpdateRequest.model_json_schema()}},
        }
    },
)
def update_member(
    member_id: int,
    body: Annotated[MemberUpdateRequest, Depends(member_update)],
    db: Annotated[Session, Depends(get_db)],
) -> MemberRecord:
    return unwrap(
        members.update_member(
            db,
            member_id,
            first_name=body.first_name,
            last_name=body.last_name,
            favorite_song=body.favorite_song,
            story=body.story,
        )
    )


@router.delete("/{member_id}", response_model=MessageResponse)
def delete_member(
    member_id: int,
    _admin: Annotated[SessionContext, Depends(require_authenticated_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    unwrap(members.delete_member(db, member_id))
    return MessageResponse(message="Member deleted successfully")
