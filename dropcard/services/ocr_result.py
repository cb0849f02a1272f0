"""
AI OCR result handling.

The OCR collaborator (a vision model reading a photographed business
card) is external. This module deals with what comes back: free text
that should contain a JSON object, or an exception. Either way the
caller ends up with a ContactRecord it can show for review.
"""

import json
import logging
import re
from collections.abc import Awaitable, Callable, Mapping
from datetime import date
from typing import Any

from dropcard.config import UNKNOWN_CONTACT_NAME
from dropcard.models.contact import ContactRecord
from dropcard.services.reconciler import (
    PROVENANCE_TAGS,
    RAW_TEXT_KEY,
    Channel,
    reconcile,
)

logger = logging.getLogger(__name__)

# Fields requested from the OCR model, in prompt order
OCR_FIELDS: tuple[str, ...] = (
    "name",
    "title",
    "company",
    "email",
    "phone",
    "website",
    "address",
    "linkedin",
    "twitter",
    "fax",
    "mobile",
    "department",
    "notes",
)

# Name used when the model answered but not with parseable JSON
UNPARSED_CONTACT_NAME = "Extracted Contact"

# First "{" through last "}", across lines
_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

OcrExtractor = Callable[[Any], Awaitable[Mapping[str, Any]]]


def parse_ocr_response(text: str) -> dict[str, str]:
    """
    Parse the model's reply into the OCR field shape.

    Models often wrap the JSON in prose or code fences, so the outermost
    brace-delimited block is extracted first. Unparseable replies keep
    the whole text as notes.

    Returns:
        Mapping with every OCR field present (empty string when missing)
        and the original reply under "raw".
    """
    reply = text if isinstance(text, str) else ""

    match = _JSON_OBJECT_PATTERN.search(reply)
    candidate = match.group(0) if match else reply

    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError):
        parsed = None

    if not isinstance(parsed, dict):
        logger.warning("ocr_response_unparseable", extra={"length": len(reply)})
        parsed = {"name": UNPARSED_CONTACT_NAME, "notes": reply}

    info: dict[str, str] = {}
    for field_name in OCR_FIELDS:
        value = parsed.get(field_name)
        info[field_name] = str(value).strip() if value else ""
    info["name"] = info["name"] or UNKNOWN_CONTACT_NAME
    info[RAW_TEXT_KEY] = reply
    return info


def ocr_fallback_record(error: BaseException | str, added_on: date | None = None) -> ContactRecord:
    """
    Manual-entry record used when OCR fails.

    The user fills in the fields by hand; the note explains why.
    """
    record = reconcile({}, Channel.BUSINESS_CARD, added_on=added_on)
    note = f"Automatic extraction failed: {error}. Please enter the details manually."
    return record.with_changes(notes=f"{record.notes}\n{note}")


async def contact_from_ocr(
    extract: OcrExtractor,
    image_ref: Any,
    added_on: date | None = None,
) -> ContactRecord:
    """
    Run the OCR collaborator and reconcile its result.

    Args:
        extract: Async callable returning an OCR-shaped mapping for an image
        image_ref: Whatever the collaborator needs to locate the image
        added_on: Date for the notes preamble

    Returns:
        Reconciled record tagged "business-card", or the manual-entry
        fallback when the collaborator raises.
    """
    try:
        result = await extract(image_ref)
    except Exception as e:
        logger.warning("ocr_extraction_failed", extra={"error": str(e)})
        return ocr_fallback_record(e, added_on=added_on)

    record = reconcile(result, Channel.BUSINESS_CARD, added_on=added_on)
    logger.info(
        "ocr_contact_extracted",
        extra={"has_email": bool(record.email), "tag": PROVENANCE_TAGS[Channel.BUSINESS_CARD]},
    )
    return record
