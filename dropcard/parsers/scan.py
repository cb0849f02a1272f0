"""
Decoder for scanned code content.

Scanned text is tried as a JSON object first (DropCard payloads), then
as a vCard, and otherwise kept as raw text. This function is total: any
input, however malformed, yields exactly one result variant.
"""

import json
import logging
from typing import Any

from dropcard.models.scan_result import (
    JsonScanResult,
    ParsedScanResult,
    RawScanResult,
    VCardScanResult,
)
from dropcard.parsers.vcard import parse_vcard

logger = logging.getLogger(__name__)


def decode_scan(text: Any) -> ParsedScanResult:
    """
    Decode scanned text into a structured result.

    Args:
        text: Raw scanned content. Non-string input is treated as its
            string form; None as empty text.

    Returns:
        JsonScanResult for a JSON object, VCardScanResult for a vCard
        with at least one recognized field, RawScanResult otherwise.
    """
    if text is None:
        return RawScanResult(text="")
    if not isinstance(text, str):
        text = str(text)

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        pass
    else:
        if isinstance(parsed, dict):
            return JsonScanResult(record=parsed)
        # Valid JSON but not an object (number, list, string): not a card
        logger.debug("scan_json_not_object", extra={"json_type": type(parsed).__name__})
        return RawScanResult(text=text)

    fields = parse_vcard(text)
    if fields:
        return VCardScanResult(record=fields)

    logger.debug("scan_unrecognized", extra={"length": len(text)})
    return RawScanResult(text=text)
