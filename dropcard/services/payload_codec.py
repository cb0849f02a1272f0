"""
QR payload encoding and decoding.

Encoding projects a card onto the small set of fields a scanner needs
and serializes it as compact JSON. QR codes become unreliable to scan as
they grow, so a payload over the size budget is replaced by a minimal
one (name, email, type marker). Encoding never raises: whatever happens,
the caller gets a string it can render.

Decoding is delegated to the scan decoder, which accepts any text.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from dropcard.config import CARD_PAYLOAD_TYPE, settings
from dropcard.models.contact import CardPayload, ContactRecord
from dropcard.models.scan_result import JsonScanResult, ParsedScanResult
from dropcard.parsers.scan import decode_scan

logger = logging.getLogger(__name__)


def _text(source: ContactRecord | Mapping[str, Any], name: str) -> str:
    if isinstance(source, Mapping):
        value = source.get(name)
    else:
        value = getattr(source, name, None)
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def build_card_payload(
    source: ContactRecord | Mapping[str, Any] | None,
    default_name: str | None = None,
) -> CardPayload:
    """
    Project a card or contact onto the QR payload fields.

    Missing optional fields become empty strings; a missing name becomes
    the configured default card name.
    """
    fallback_name = default_name or settings.default_card_name
    if source is None:
        return CardPayload(name=fallback_name)

    return CardPayload(
        name=_text(source, "name") or fallback_name,
        title=_text(source, "title"),
        company=_text(source, "company"),
        email=_text(source, "email"),
        phone=_text(source, "phone"),
        website=_text(source, "website"),
    )


def _serialize(data: Mapping[str, str]) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def _byte_length(serialized: str) -> int:
    return len(serialized.encode("utf-8"))


def encode_card_payload(
    source: ContactRecord | Mapping[str, Any] | None,
    max_bytes: int | None = None,
) -> str:
    """
    Serialize a card for embedding in a QR code.

    Args:
        source: ContactRecord or card-shaped mapping (e.g. a stored card)
        max_bytes: Size budget; defaults to the configured budget

    Returns:
        Compact JSON. The full payload when it fits the budget, otherwise
        the minimal {name, email, type} payload.
    """
    budget = settings.qr_max_payload_bytes if max_bytes is None else max_bytes

    try:
        payload = build_card_payload(source)
        serialized = _serialize(payload.to_dict())

        if _byte_length(serialized) > budget:
            logger.warning(
                "qr_payload_over_budget",
                extra={"payload_bytes": _byte_length(serialized), "budget_bytes": budget},
            )
            return _serialize(payload.to_minimal_dict())

        return serialized
    except Exception:
        logger.exception("qr_payload_encode_failed")
        return _serialize({"name": settings.default_card_name, "type": CARD_PAYLOAD_TYPE})


def decode_card_payload(text: Any) -> ParsedScanResult:
    """Decode scanned text. Alias of the scan decoder for symmetry with encode."""
    return decode_scan(text)


def is_dropcard_payload(result: ParsedScanResult) -> bool:
    """
    Whether a decoded scan looks like a business card.

    JSON payloads qualify when they carry a name or an email; vCards
    always qualify; raw text never does.
    """
    if isinstance(result, JsonScanResult):
        return bool(result.record.get("name") or result.record.get("email"))
    return result.kind == "vcard"
