"""
Contact record reconciliation.

Every acquisition channel hands us a differently shaped record: a JSON
QR payload, a vCard field map, an AI OCR result, or a manual form. This
module folds all of them into one canonical ContactRecord:

    Input mapping (any shape)
         │
         ▼
    1. Copy standard fields (name, email, phone, company, title)
    2. Collect additional fields (everything else with a value)
    3. Build the notes block: dated preamble + one line per extra field
    4. Attach the channel's provenance tag
         │
         ▼
    ContactRecord (canonical)

Nothing captured is dropped: extra fields survive both as metadata and
as readable lines in the notes. Reconciliation never raises.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from dropcard.config import CARD_PAYLOAD_TYPE, UNKNOWN_CONTACT_NAME
from dropcard.models.contact import ContactRecord
from dropcard.models.scan_result import JsonScanResult, ParsedScanResult, VCardScanResult

logger = logging.getLogger(__name__)

STANDARD_FIELDS: tuple[str, ...] = ("name", "email", "phone", "company", "title")

# Key carrying the unparsed source text (OCR output, raw scan)
RAW_TEXT_KEY = "raw"

# Keys that describe the payload itself rather than the person
_PAYLOAD_KEYS = frozenset({RAW_TEXT_KEY, "tags"})

# Canonical ContactRecord fields that are not part of the standard set.
# They are reported in the notes but not duplicated into metadata.
_RECORD_ONLY_FIELDS = frozenset({"website", "notes"})

_UPPERCASE_INSIDE_WORD = re.compile(r"(?<!^)([A-Z])")

# Longest name we derive from raw text
MAX_DERIVED_NAME_LENGTH = 100


class Channel(str, Enum):
    """How a contact was acquired."""

    MANUAL = "manual"
    QR_SCAN = "qr_scan"
    VCARD = "vcard"
    BUSINESS_CARD = "business_card"


# Provenance tag attached per channel (manual entries carry none)
PROVENANCE_TAGS: dict[Channel, str] = {
    Channel.QR_SCAN: "scanned",
    Channel.VCARD: "scanned",
    Channel.BUSINESS_CARD: "business-card",
}

_NOTES_PREAMBLES: dict[Channel, str] = {
    Channel.MANUAL: "Added on {date}",
    Channel.QR_SCAN: "Added via QR scan on {date}",
    Channel.VCARD: "Added via QR scan on {date}",
    Channel.BUSINESS_CARD: "Added from business card scan on {date}",
}


# =============================================================================
# FIELD HELPERS
# =============================================================================


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _format_date(moment: date) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_field_name(key: str) -> str:
    """
    Turn a field key into a label.

    "workPhone" -> "Work Phone", "linkedin" -> "Linkedin".
    """
    spaced = _UPPERCASE_INSIDE_WORD.sub(r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def collect_additional_fields(data: Mapping[str, Any]) -> dict[str, str]:
    """
    Fields outside the standard set that carry a value.

    The raw-text carrier and the payload type marker are skipped.
    """
    additional: dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(key, str) or key in STANDARD_FIELDS or key in _PAYLOAD_KEYS:
            continue
        if key == "type" and value == CARD_PAYLOAD_TYPE:
            continue
        if not value:
            continue
        text = _as_text(value)
        if text:
            additional[key] = text
    return additional


def build_notes(
    additional: Mapping[str, str],
    added_on: date | None = None,
    channel: Channel = Channel.MANUAL,
) -> str:
    """
    Readable notes block for a newly added contact.

    A dated preamble followed by one "<Field Name>: <value>" line per
    additional field, in input order.
    """
    moment = added_on or datetime.now().date()
    lines = [_NOTES_PREAMBLES[channel].format(date=_format_date(moment))]
    lines.extend(f"{format_field_name(key)}: {value}" for key, value in additional.items())
    return "\n".join(lines)


def _derive_name(data: Mapping[str, Any]) -> str:
    name = _as_text(data.get("name"))
    if name:
        return name

    raw = _as_text(data.get(RAW_TEXT_KEY))
    for line in raw.splitlines():
        if line.strip():
            return line.strip()[:MAX_DERIVED_NAME_LENGTH]

    return UNKNOWN_CONTACT_NAME


# =============================================================================
# TAGS
# =============================================================================


def add_tag(tags: Iterable[str], tag: str) -> tuple[str, ...]:
    """
    Append a tag, keeping tags unique.

    The tag is trimmed; blank tags and exact duplicates are no-ops.
    Matching is case-sensitive: "VIP" and "vip" are different tags.
    """
    current = tuple(tags)
    cleaned = tag.strip() if isinstance(tag, str) else ""
    if not cleaned or cleaned in current:
        return current
    return (*current, cleaned)


def remove_tag(tags: Iterable[str], tag: str) -> tuple[str, ...]:
    """Drop every tag exactly equal to `tag` (case-sensitive)."""
    return tuple(existing for existing in tags if existing != tag)


def _merge_tags(*groups: Iterable[Any]) -> tuple[str, ...]:
    merged: tuple[str, ...] = ()
    for group in groups:
        for tag in group:
            if isinstance(tag, str):
                merged = add_tag(merged, tag)
    return merged


# =============================================================================
# RECONCILIATION
# =============================================================================


def reconcile(
    data: Mapping[str, Any] | None,
    channel: Channel = Channel.MANUAL,
    added_on: date | None = None,
) -> ContactRecord:
    """
    Normalize an arbitrary contact-shaped mapping into a ContactRecord.

    Args:
        data: Input fields from any channel. Unknown keys are kept.
        channel: Acquisition channel, decides the provenance tag and notes preamble
        added_on: Date for the notes preamble (defaults to today)

    Returns:
        Canonical record with notes and tags filled in.
    """
    if not isinstance(data, Mapping):
        data = {}

    additional = collect_additional_fields(data)
    metadata = {
        key: value for key, value in additional.items() if key not in _RECORD_ONLY_FIELDS
    }

    incoming_tags = data.get("tags")
    if not isinstance(incoming_tags, list | tuple):
        incoming_tags = ()
    provenance = PROVENANCE_TAGS.get(channel)

    record = ContactRecord(
        name=_derive_name(data),
        title=_as_text(data.get("title")),
        company=_as_text(data.get("company")),
        email=_as_text(data.get("email")),
        phone=_as_text(data.get("phone")),
        website=_as_text(data.get("website")),
        tags=_merge_tags(incoming_tags, [provenance] if provenance else []),
        notes=build_notes(additional, added_on=added_on, channel=channel),
        metadata=metadata,
    )

    logger.debug(
        "contact_reconciled",
        extra={
            "channel": channel.value,
            "additional_fields": list(additional.keys()),
        },
    )
    return record


def reconcile_scan(result: ParsedScanResult, added_on: date | None = None) -> ContactRecord:
    """
    Build a contact from a decoded scan.

    JSON payloads and vCards map field for field. Raw text becomes the
    name fallback and is kept in the notes.
    """
    if isinstance(result, JsonScanResult):
        return reconcile(result.record, Channel.QR_SCAN, added_on=added_on)
    if isinstance(result, VCardScanResult):
        return reconcile(result.record, Channel.VCARD, added_on=added_on)
    return reconcile(
        {RAW_TEXT_KEY: result.text, "notes": result.text},
        Channel.QR_SCAN,
        added_on=added_on,
    )
