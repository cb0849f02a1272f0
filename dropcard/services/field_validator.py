"""
Field validation for contact and card forms.

All checks are pure functions over strings. Optional fields (phone,
website, and email outside the card flow) are valid when empty; the
form-level validators decide which fields are required.

Phone validation runs two checks and both must pass:
    1. The raw input has an allowed shape (digits, spaces, parens,
       dashes, dots, optional leading +, at least 7 characters).
    2. The normalized number has 7-15 digits, optionally prefixed by +.
The shape check rejects inputs like "call 5551234567" that would
otherwise normalize to a plausible number.
"""

import re
from collections.abc import Mapping
from typing import Any

from dropcard.models.contact import ContactRecord
from dropcard.models.validation import ValidationResult

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

PHONE_FORMAT_PATTERN = re.compile(r"\+?[0-9\s\-().]{7,}")
PHONE_INTERNATIONAL_PATTERN = re.compile(r"\+[0-9]{7,15}")
PHONE_DOMESTIC_PATTERN = re.compile(r"[0-9]{7,15}")

# Optional scheme, dotted domain, optional path
WEBSITE_PATTERN = re.compile(
    r"(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?",
    re.IGNORECASE | re.ASCII,
)

# User-facing messages, keyed by failure
NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Please enter a valid email address"
PHONE_INVALID = "Please enter a valid phone number"
WEBSITE_INVALID = "Please enter a valid website URL"


def validate_email(value: str) -> bool:
    """True iff value looks like local@domain.tld with no whitespace."""
    if not isinstance(value, str):
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None


def normalize_phone(value: str) -> str:
    """Strip everything but digits, keeping a single leading +."""
    if not isinstance(value, str):
        return ""
    digits = re.sub(r"[^0-9]", "", value)
    if value.strip().startswith("+"):
        return f"+{digits}"
    return digits


def validate_phone(value: str) -> bool:
    """Validate an optional phone number. Empty is valid."""
    if value == "":
        return True
    if not isinstance(value, str):
        return False

    if PHONE_FORMAT_PATTERN.fullmatch(value) is None:
        return False

    normalized = normalize_phone(value)
    return (
        PHONE_INTERNATIONAL_PATTERN.fullmatch(normalized) is not None
        or PHONE_DOMESTIC_PATTERN.fullmatch(normalized) is not None
    )


def validate_website(value: str) -> bool:
    """Validate an optional website URL. Empty is valid."""
    if value == "":
        return True
    if not isinstance(value, str):
        return False
    return WEBSITE_PATTERN.fullmatch(value) is not None


def _field(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def validate_contact_form(fields: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a contact add/edit form.

    Name is required. Email, phone and website are optional but must be
    well formed when present.
    """
    result = ValidationResult()

    if not _field(fields, "name").strip():
        result.add("name", NAME_REQUIRED)

    email = _field(fields, "email")
    if email and not validate_email(email):
        result.add("email", EMAIL_INVALID)

    phone = _field(fields, "phone")
    if phone and not validate_phone(phone):
        result.add("phone", PHONE_INVALID)

    website = _field(fields, "website")
    if website and not validate_website(website):
        result.add("website", WEBSITE_INVALID)

    return result


def validate_card_form(fields: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a business card form.

    Same rules as a contact, except the card is what gets shared, so an
    email address is required.
    """
    result = ValidationResult()

    if not _field(fields, "name").strip():
        result.add("name", NAME_REQUIRED)

    email = _field(fields, "email")
    if not email.strip():
        result.add("email", EMAIL_REQUIRED)
    elif not validate_email(email):
        result.add("email", EMAIL_INVALID)

    website = _field(fields, "website")
    if website and not validate_website(website):
        result.add("website", WEBSITE_INVALID)

    phone = _field(fields, "phone")
    if phone and not validate_phone(phone):
        result.add("phone", PHONE_INVALID)

    return result


def is_save_eligible(record: ContactRecord) -> bool:
    """A record may be stored once its contact form validates cleanly."""
    return validate_contact_form(record.to_dict()).is_valid
