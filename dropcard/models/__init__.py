from dropcard.models.contact import CONTACT_TEXT_FIELDS, CardPayload, ContactRecord
from dropcard.models.errors import (
    CardNotFoundError,
    ContactNotFoundError,
    DropCardError,
    FollowUpGenerationError,
    FollowUpNotFoundError,
)
from dropcard.models.scan_result import (
    JsonScanResult,
    ParsedScanResult,
    RawScanResult,
    VCardScanResult,
)
from dropcard.models.validation import ValidationResult

__all__ = [
    "CONTACT_TEXT_FIELDS",
    "CardNotFoundError",
    "CardPayload",
    "ContactNotFoundError",
    "ContactRecord",
    "DropCardError",
    "FollowUpGenerationError",
    "FollowUpNotFoundError",
    "JsonScanResult",
    "ParsedScanResult",
    "RawScanResult",
    "VCardScanResult",
    "ValidationResult",
]
