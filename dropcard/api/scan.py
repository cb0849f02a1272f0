"""
Scan intake API endpoints.

Clients send the raw text of a scanned code, or the reply of the OCR
model for a photographed business card. Decoding and reconciliation
happen here so every client gets the same contact shape.
"""

import logging
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dropcard.api.contacts import ContactResponse, contact_response
from dropcard.config import settings
from dropcard.db import create_contact
from dropcard.db.database import get_session
from dropcard.models.contact import ContactRecord
from dropcard.models.scan_result import RawScanResult
from dropcard.services.ocr_result import parse_ocr_response
from dropcard.services.payload_codec import decode_card_payload, is_dropcard_payload
from dropcard.services.reconciler import Channel, reconcile, reconcile_scan

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scan", tags=["scan"])

INVALID_CODE_MESSAGE = "This QR code does not contain valid business card information."


class ScanRequest(BaseModel):
    """Raw text read from a scanned code."""

    text: str = Field(..., description="Scanned content, exactly as read")


class OcrRequest(BaseModel):
    """Reply of the OCR model for a business card photo."""

    response_text: str = Field(
        ...,
        description="Model output, expected to contain a JSON object",
    )


class ContactPreview(BaseModel):
    """A reconciled contact, not yet saved."""

    name: str
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, record: ContactRecord) -> "ContactPreview":
        return cls(**record.to_dict())


class DecodeResponse(BaseModel):
    """Decoded scan with a contact preview when it is a card."""

    kind: Literal["json", "vcard", "raw"]
    is_card: bool
    record: dict[str, Any] | None = None
    text: str | None = None
    contact: ContactPreview | None = None


@router.post("/decode", response_model=DecodeResponse)
async def decode_endpoint(request: ScanRequest) -> DecodeResponse:
    """
    Decode scanned text.

    Never fails for malformed content: unrecognized text is returned
    as kind "raw" for the client to show or discard.
    """
    result = decode_card_payload(request.text)
    is_card = is_dropcard_payload(result)

    if isinstance(result, RawScanResult):
        return DecodeResponse(kind=result.kind, is_card=False, text=result.text)

    return DecodeResponse(
        kind=result.kind,
        is_card=is_card,
        record=result.record,
        contact=ContactPreview.from_record(reconcile_scan(result)) if is_card else None,
    )


@router.post(
    "/{user_id}/contacts",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_scanned_contact_endpoint(
    user_id: str,
    request: ScanRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ContactResponse:
    """
    Decode scanned text and save it as a contact.

    Returns 422 when the code does not hold business card information.
    """
    result = decode_card_payload(request.text)
    if not is_dropcard_payload(result):
        logger.info("scan_rejected", extra={"user_id": user_id, "kind": result.kind})
        raise HTTPException(status_code=422, detail=INVALID_CODE_MESSAGE)

    record = reconcile_scan(result)
    row = await create_contact(session, user_id, record)
    return contact_response(row)


@router.post("/ocr", response_model=ContactPreview)
async def ocr_preview_endpoint(request: OcrRequest) -> ContactPreview:
    """
    Turn an OCR model reply into a contact preview for review.

    Unavailable when camera OCR is disabled.
    """
    if not settings.enable_camera_ocr:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Business card OCR is disabled",
        )

    info = parse_ocr_response(request.response_text)
    return ContactPreview.from_record(reconcile(info, Channel.BUSINESS_CARD))
