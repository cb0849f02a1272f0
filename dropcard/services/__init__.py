"""
DropCard services.

Validation, QR payload encoding, contact reconciliation and follow-up drafting.
"""

from dropcard.services.contact_display import (
    AVATAR_COLORS,
    format_relative_date,
    get_avatar_color,
    get_initials,
)
from dropcard.services.contact_search import (
    collect_tags,
    filter_by_tags,
    search_contacts,
    toggle_tag,
)
from dropcard.services.error_messages import friendly_save_error
from dropcard.services.field_validator import (
    is_save_eligible,
    normalize_phone,
    validate_card_form,
    validate_contact_form,
    validate_email,
    validate_phone,
    validate_website,
)
from dropcard.services.follow_up import (
    FollowUpTone,
    build_follow_up_prompt,
    generate_follow_up_message,
)
from dropcard.services.ocr_result import (
    contact_from_ocr,
    ocr_fallback_record,
    parse_ocr_response,
)
from dropcard.services.payload_codec import (
    build_card_payload,
    decode_card_payload,
    encode_card_payload,
    is_dropcard_payload,
)
from dropcard.services.reconciler import (
    PROVENANCE_TAGS,
    STANDARD_FIELDS,
    Channel,
    add_tag,
    build_notes,
    collect_additional_fields,
    format_field_name,
    reconcile,
    reconcile_scan,
    remove_tag,
)

__all__ = [
    "AVATAR_COLORS",
    "Channel",
    "FollowUpTone",
    "PROVENANCE_TAGS",
    "STANDARD_FIELDS",
    "add_tag",
    "build_card_payload",
    "build_follow_up_prompt",
    "build_notes",
    "collect_additional_fields",
    "collect_tags",
    "contact_from_ocr",
    "decode_card_payload",
    "encode_card_payload",
    "filter_by_tags",
    "format_field_name",
    "format_relative_date",
    "friendly_save_error",
    "generate_follow_up_message",
    "get_avatar_color",
    "get_initials",
    "is_dropcard_payload",
    "is_save_eligible",
    "normalize_phone",
    "ocr_fallback_record",
    "parse_ocr_response",
    "reconcile",
    "reconcile_scan",
    "remove_tag",
    "search_contacts",
    "toggle_tag",
    "validate_card_form",
    "validate_contact_form",
    "validate_email",
    "validate_phone",
    "validate_website",
]
