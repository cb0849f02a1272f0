"""
Contact and card payload domain models.

A ContactRecord is the canonical shape every acquisition channel
(manual entry, QR scan, vCard, AI OCR) is normalized into before it
reaches storage. Records are never edited in place: an edit produces a
new record that supersedes the old one in the store.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from dropcard.config import CARD_PAYLOAD_TYPE

# Canonical string fields of a ContactRecord, in display order
CONTACT_TEXT_FIELDS: tuple[str, ...] = (
    "name",
    "title",
    "company",
    "email",
    "phone",
    "website",
)


@dataclass(frozen=True, slots=True)
class ContactRecord:
    """
    Canonical normalized contact.

    Attributes:
        name: Display name (required for saving, may be blank while editing)
        title: Job title
        company: Company or organization
        email: Email address
        phone: Phone number as entered
        website: Website URL
        tags: Unique tags in insertion order
        notes: Free-form notes, possibly synthesized from extra fields
        metadata: Extra fields outside the canonical set (address, linkedin, ...)
    """

    name: str
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    tags: tuple[str, ...] = ()
    notes: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def with_changes(self, **changes: Any) -> "ContactRecord":
        """Return a new record superseding this one."""
        return replace(self, **changes)

    def with_tags(self, tags: tuple[str, ...] | list[str]) -> "ContactRecord":
        """Return a new record carrying the given tags."""
        return replace(self, tags=tuple(tags))

    def to_dict(self) -> dict[str, Any]:
        """Persistence shape: plain JSON-compatible values."""
        return {
            "name": self.name,
            "title": self.title,
            "company": self.company,
            "email": self.email,
            "phone": self.phone,
            "website": self.website,
            "notes": self.notes,
            "tags": list(self.tags),
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True, slots=True)
class CardPayload:
    """
    QR-embeddable projection of a card or contact.

    Derived fresh at share time and never persisted.
    """

    name: str
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    type: str = CARD_PAYLOAD_TYPE

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "title": self.title,
            "company": self.company,
            "email": self.email,
            "phone": self.phone,
            "website": self.website,
            "type": self.type,
        }

    def to_minimal_dict(self) -> dict[str, str]:
        """Reduced form used when the full payload is too large to scan."""
        return {"name": self.name, "email": self.email, "type": self.type}
