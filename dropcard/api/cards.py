"""
Business card API endpoints.

Card CRUD plus the QR payload a client renders to share a card.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dropcard.config import settings
from dropcard.db import (
    card_to_dict,
    create_card,
    delete_card,
    get_card,
    get_primary_card,
    get_user_cards,
    set_primary_card,
    update_card,
)
from dropcard.db.database import get_session
from dropcard.models.db import BusinessCardDB
from dropcard.models.errors import CardNotFoundError
from dropcard.services.field_validator import validate_card_form
from dropcard.services.payload_codec import encode_card_payload

router = APIRouter(prefix="/cards", tags=["cards"])


class CardRequest(BaseModel):
    """Business card form fields."""

    name: str = ""
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    theme_color: str | None = Field(default=None, examples=["#000000"])


class CardResponse(BaseModel):
    """A stored business card."""

    id: int
    name: str
    title: str = ""
    company: str = ""
    email: str
    phone: str = ""
    website: str = ""
    theme_color: str
    is_primary: bool


class CardListResponse(BaseModel):
    user_id: str
    cards: list[CardResponse] = Field(default_factory=list)


class QRPayloadResponse(BaseModel):
    """Text to render as a QR code for a card."""

    card_id: int
    payload: str = Field(..., description="Compact JSON, reduced if over the size budget")
    payload_bytes: int
    save_enabled: bool = Field(
        ...,
        description="Whether clients may offer saving the rendered code to the device",
    )


class DeleteResponse(BaseModel):
    id: int
    deleted: bool


def _card_response(row: BusinessCardDB) -> CardResponse:
    return CardResponse(**card_to_dict(row))


def _ensure_valid(request: CardRequest) -> None:
    result = validate_card_form(request.model_dump())
    if not result.is_valid:
        raise HTTPException(status_code=422, detail={"errors": result.errors})


def _not_found(card_id: int, user_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(CardNotFoundError(card_id, user_id)),
    )


@router.get("/{user_id}", response_model=CardListResponse)
async def get_cards_endpoint(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardListResponse:
    """List a user's cards, newest first."""
    rows = await get_user_cards(session, user_id)
    return CardListResponse(user_id=user_id, cards=[_card_response(row) for row in rows])


@router.post("/{user_id}", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card_endpoint(
    user_id: str,
    request: CardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Create a card. The user's first card becomes primary."""
    _ensure_valid(request)
    row = await create_card(session, user_id, request.model_dump(exclude_none=True))
    return _card_response(row)


@router.get("/{user_id}/primary", response_model=CardResponse)
async def get_primary_card_endpoint(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Get the card a user shares by default."""
    row = await get_primary_card(session, user_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No primary card for user '{user_id}'",
        )
    return _card_response(row)


@router.put("/{user_id}/{card_id}", response_model=CardResponse)
async def update_card_endpoint(
    user_id: str,
    card_id: int,
    request: CardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Replace a card's fields."""
    _ensure_valid(request)
    try:
        row = await update_card(session, user_id, card_id, request.model_dump(exclude_none=True))
    except CardNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return _card_response(row)


@router.post("/{user_id}/{card_id}/primary", response_model=CardResponse)
async def set_primary_card_endpoint(
    user_id: str,
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Make a card the user's primary card."""
    try:
        row = await set_primary_card(session, user_id, card_id)
    except CardNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return _card_response(row)


@router.delete("/{user_id}/{card_id}", response_model=DeleteResponse)
async def delete_card_endpoint(
    user_id: str,
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    deleted = await delete_card(session, user_id, card_id)
    return DeleteResponse(id=card_id, deleted=deleted)


@router.get("/{user_id}/{card_id}/qr", response_model=QRPayloadResponse)
async def get_card_qr_endpoint(
    user_id: str,
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> QRPayloadResponse:
    """
    QR payload for a card.

    The payload is compact JSON with the card's contact fields; cards too
    large to scan reliably get a reduced payload (name and email only).
    """
    row = await get_card(session, user_id, card_id)
    if row is None:
        raise _not_found(card_id, user_id)

    payload = encode_card_payload(card_to_dict(row))
    return QRPayloadResponse(
        card_id=card_id,
        payload=payload,
        payload_bytes=len(payload.encode("utf-8")),
        save_enabled=settings.enable_save_qr,
    )
