"""
User-facing messages for failed contact saves.

Storage errors arrive as free-form strings. They are classified by
keyword, first match wins, in the order below.
"""

import re

# (keywords, message) in priority order
_CLASSIFIED_MESSAGES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("network", "fetch"),
        "Network connection issue. Please check your internet connection and try again.",
    ),
    (
        ("unauthorized", "auth"),
        "Authentication expired. Please log out and log back in.",
    ),
    (
        ("validation", "invalid"),
        "Please check that all required fields are filled correctly.",
    ),
    (
        ("duplicate", "already exists"),
        "A contact with this information already exists.",
    ),
    (
        ("permission", "forbidden"),
        "You don't have permission to perform this action.",
    ),
    (
        ("database", "sql"),
        "Database error occurred. Please try again in a moment.",
    ),
    (
        ("rate limit", "too many"),
        "Too many requests. Please wait a moment and try again.",
    ),
)

SERVER_ERROR_MESSAGE = "Server is temporarily unavailable. Please try again later."

_SERVER_ERROR_PATTERN = re.compile(r"server|\b5\d\d\b")

# Errors at least this long are assumed to be technical, not user-readable
MAX_ECHOED_ERROR_LENGTH = 100


def _generic_message(edit_mode: bool) -> str:
    action = "update" if edit_mode else "create"
    return f"Failed to {action} contact. Please try again."


def friendly_save_error(error: BaseException | str | None, edit_mode: bool = False) -> str:
    """
    Map a raw save error to a message suitable for an alert.

    Args:
        error: Exception or error string from the store
        edit_mode: True when updating an existing contact

    Returns:
        Classified message; short readable errors are echoed back;
        anything else gets a generic retry message.
    """
    if not error:
        return _generic_message(edit_mode)

    raw = str(error)
    lowered = raw.lower()

    for keywords, message in _CLASSIFIED_MESSAGES:
        if any(keyword in lowered for keyword in keywords):
            return message

    if _SERVER_ERROR_PATTERN.search(lowered):
        return SERVER_ERROR_MESSAGE

    if (
        len(raw) < MAX_ECHOED_ERROR_LENGTH
        and "error:" not in lowered
        and "exception" not in lowered
    ):
        prefix = "Update" if edit_mode else "Creation"
        return f"{prefix} failed: {raw}"

    return _generic_message(edit_mode)
