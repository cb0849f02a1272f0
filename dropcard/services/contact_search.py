"""
In-memory filtering for a contact list.

Search and tag filters compose: callers apply the text search first,
then the tag filter, as the contacts list does.
"""

from collections.abc import Iterable, Sequence

from dropcard.models.contact import ContactRecord
from dropcard.services.reconciler import add_tag, remove_tag

# Fields matched by free-text search
SEARCH_FIELDS: tuple[str, ...] = ("name", "email", "company", "title")


def search_contacts(contacts: Sequence[ContactRecord], query: str) -> list[ContactRecord]:
    """Case-insensitive substring match over name, email, company and title."""
    if not query or not query.strip():
        return list(contacts)

    needle = query.strip().lower()
    return [
        contact
        for contact in contacts
        if any(needle in getattr(contact, name).lower() for name in SEARCH_FIELDS)
    ]


def filter_by_tags(
    contacts: Sequence[ContactRecord], selected: Iterable[str]
) -> list[ContactRecord]:
    """Keep contacts carrying at least one selected tag. No selection keeps all."""
    wanted = set(selected)
    if not wanted:
        return list(contacts)
    return [contact for contact in contacts if wanted.intersection(contact.tags)]


def collect_tags(contacts: Iterable[ContactRecord]) -> list[str]:
    """Every tag in use, in first-seen order."""
    seen: dict[str, None] = {}
    for contact in contacts:
        for tag in contact.tags:
            seen.setdefault(tag, None)
    return list(seen)


def toggle_tag(selected: Iterable[str], tag: str) -> tuple[str, ...]:
    """Select a tag filter, or deselect it if already selected."""
    current = tuple(selected)
    if tag in current:
        return remove_tag(current, tag)
    return add_tag(current, tag)
