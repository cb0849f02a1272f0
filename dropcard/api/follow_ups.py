"""
Follow-up API endpoints.

Follow-ups are messages a user plans to send to one of their contacts.
The prompt endpoint returns the text to hand to a language model; the
model call itself happens on the client.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dropcard.db import (
    contact_to_record,
    create_follow_up,
    delete_follow_up,
    follow_up_to_dict,
    get_contact,
    get_user_follow_ups,
    update_follow_up,
)
from dropcard.db.database import get_session
from dropcard.models.errors import ContactNotFoundError, FollowUpNotFoundError
from dropcard.services.follow_up import FollowUpTone, build_follow_up_prompt

router = APIRouter(prefix="/follow-ups", tags=["follow-ups"])


class FollowUpCreateRequest(BaseModel):
    contact_id: int
    message: str = ""
    tone: FollowUpTone = FollowUpTone.PROFESSIONAL
    context: str = Field(default="", description="Notes about the meeting")


class FollowUpUpdateRequest(BaseModel):
    """Fields to change. Omitted fields keep their value."""

    message: str | None = None
    tone: FollowUpTone | None = None
    context: str | None = None
    completed: bool | None = None


class FollowUpContact(BaseModel):
    id: int
    name: str
    email: str = ""
    company: str = ""


class FollowUpResponse(BaseModel):
    id: int
    contact_id: int
    message: str
    tone: FollowUpTone
    context: str
    completed: bool
    contact: FollowUpContact


class FollowUpListResponse(BaseModel):
    user_id: str
    follow_ups: list[FollowUpResponse] = Field(default_factory=list)


class PromptRequest(BaseModel):
    contact_id: int
    context: str = ""
    tone: FollowUpTone = FollowUpTone.PROFESSIONAL


class PromptResponse(BaseModel):
    """Prompt for drafting a follow-up message."""

    contact_id: int
    tone: FollowUpTone
    prompt: str


class DeleteResponse(BaseModel):
    id: int
    deleted: bool


@router.get("/{user_id}", response_model=FollowUpListResponse)
async def get_follow_ups_endpoint(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> FollowUpListResponse:
    """List a user's follow-ups, newest first."""
    rows = await get_user_follow_ups(session, user_id)
    return FollowUpListResponse(
        user_id=user_id,
        follow_ups=[FollowUpResponse(**follow_up_to_dict(row)) for row in rows],
    )


@router.post(
    "/{user_id}",
    response_model=FollowUpResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_follow_up_endpoint(
    user_id: str,
    request: FollowUpCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> FollowUpResponse:
    """Plan a follow-up for one of the user's contacts."""
    try:
        row = await create_follow_up(
            session,
            user_id,
            request.contact_id,
            request.model_dump(mode="json", exclude={"contact_id"}),
        )
    except ContactNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return FollowUpResponse(**follow_up_to_dict(row))


@router.post("/{user_id}/prompt", response_model=PromptResponse)
async def follow_up_prompt_endpoint(
    user_id: str,
    request: PromptRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PromptResponse:
    """Build the drafting prompt for a follow-up to one of the user's contacts."""
    row = await get_contact(session, user_id, request.contact_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(ContactNotFoundError(request.contact_id, user_id)),
        )
    prompt = build_follow_up_prompt(contact_to_record(row), request.context, request.tone)
    return PromptResponse(contact_id=row.id, tone=request.tone, prompt=prompt)


@router.put("/{user_id}/{follow_up_id}", response_model=FollowUpResponse)
async def update_follow_up_endpoint(
    user_id: str,
    follow_up_id: int,
    request: FollowUpUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> FollowUpResponse:
    """Edit a follow-up or mark it completed."""
    try:
        row = await update_follow_up(
            session,
            user_id,
            follow_up_id,
            request.model_dump(mode="json", exclude_none=True),
        )
    except FollowUpNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return FollowUpResponse(**follow_up_to_dict(row))


@router.delete("/{user_id}/{follow_up_id}", response_model=DeleteResponse)
async def delete_follow_up_endpoint(
    user_id: str,
    follow_up_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    deleted = await delete_follow_up(session, user_id, follow_up_id)
    return DeleteResponse(id=follow_up_id, deleted=deleted)
