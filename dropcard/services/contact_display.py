"""
Derived display fields for contacts: initials, avatar color, last-contact date.
"""

from datetime import UTC, date, datetime
from typing import Any

# Avatar palette. Index is the trimmed name length mod 16, so equal-length
# names share a color.
AVATAR_COLORS: tuple[str, ...] = (
    "#EF4444",
    "#F97316",
    "#F59E0B",
    "#EAB308",
    "#84CC16",
    "#22C55E",
    "#10B981",
    "#14B8A6",
    "#06B6D4",
    "#0EA5E9",
    "#3B82F6",
    "#6366F1",
    "#8B5CF6",
    "#A855F7",
    "#D946EF",
    "#EC4899",
)

NO_RECENT_CONTACT = "No recent contact"

_MS_PER_DAY = 1000 * 60 * 60 * 24


def get_initials(name: Any) -> str:
    """
    Up to two uppercase initials from a name.

    "  John   Doe  " and "John Doe" both give "JD". Returns "?" for
    None, non-strings and blank names.
    """
    if not name or not isinstance(name, str) or not name.strip():
        return "?"

    initials = "".join(word[0] for word in name.split()).upper()[:2]
    return initials or "?"


def get_avatar_color(name: Any) -> str:
    """Deterministic palette color from the trimmed name length."""
    if not name or not isinstance(name, str) or not name.strip():
        return AVATAR_COLORS[0]
    return AVATAR_COLORS[len(name.strip()) % len(AVATAR_COLORS)]


def _to_datetime(value: str | date | datetime | float) -> datetime:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, int | float) and not isinstance(value, bool):
        # Epoch milliseconds
        moment = datetime.fromtimestamp(value / 1000, UTC)
    elif isinstance(value, str):
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported date value: {type(value).__name__}")

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


def format_relative_date(
    value: str | date | datetime | float | None,
    now: datetime | None = None,
) -> str:
    """
    Human-readable distance to the last contact date.

    The day count is the floored absolute difference in milliseconds,
    not a calendar difference, so future dates read the same as past ones.
    Naive datetimes are treated as UTC and numbers as epoch milliseconds.
    Unparseable strings and unsupported types count as no recent contact.
    """
    if not value:
        return NO_RECENT_CONTACT

    try:
        moment = _to_datetime(value)
    except (TypeError, ValueError, OverflowError, OSError):
        return NO_RECENT_CONTACT

    current = _to_datetime(now) if now is not None else datetime.now(UTC)
    delta_ms = abs((current - moment).total_seconds()) * 1000
    days = int(delta_ms // _MS_PER_DAY)

    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    return f"{days // 30} months ago"
