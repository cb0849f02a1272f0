"""
Profile API endpoints.

One profile per user; the first update creates it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from dropcard.db import get_profile, profile_to_dict, update_profile
from dropcard.db.database import get_session
from dropcard.services.field_validator import EMAIL_INVALID, validate_email

router = APIRouter(prefix="/profiles", tags=["profiles"])


class ProfileRequest(BaseModel):
    """Profile fields to change. Omitted fields keep their value."""

    full_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


class ProfileResponse(BaseModel):
    user_id: str
    full_name: str = ""
    email: str = ""
    avatar_url: str = ""


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile_endpoint(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProfileResponse:
    """Get a user's profile."""
    row = await get_profile(session, user_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No profile for user '{user_id}'",
        )
    return ProfileResponse(**profile_to_dict(row))


@router.put("/{user_id}", response_model=ProfileResponse)
async def update_profile_endpoint(
    user_id: str,
    request: ProfileRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProfileResponse:
    """Create or update a user's profile."""
    fields = request.model_dump(exclude_none=True)
    email = fields.get("email", "").strip()
    if email and not validate_email(email):
        raise HTTPException(status_code=422, detail={"errors": {"email": EMAIL_INVALID}})

    row = await update_profile(session, user_id, fields)
    return ProfileResponse(**profile_to_dict(row))
