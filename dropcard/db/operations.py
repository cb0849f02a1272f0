"""
Database CRUD operations.

Provides async functions for creating, reading, updating, and deleting
contacts, business cards, profiles and follow-ups. Every query is scoped
to a user id.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dropcard.config import DEFAULT_THEME_COLOR
from dropcard.models.contact import ContactRecord
from dropcard.models.db import BusinessCardDB, ContactDB, FollowUpDB, ProfileDB
from dropcard.models.errors import (
    CardNotFoundError,
    ContactNotFoundError,
    FollowUpNotFoundError,
)

logger = logging.getLogger(__name__)

# Optional card columns stored as NULL when blank
_OPTIONAL_CARD_FIELDS: tuple[str, ...] = ("title", "company", "phone", "website")


def _escape_like(query: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# --- Contact Operations ---


def _apply_record(row: ContactDB, record: ContactRecord) -> None:
    row.name = record.name
    row.title = record.title
    row.company = record.company
    row.email = record.email
    row.phone = record.phone
    row.website = record.website
    row.notes = record.notes
    row.tags = list(record.tags)
    row.extra = dict(record.metadata)


async def create_contact(
    session: AsyncSession, user_id: str, record: ContactRecord
) -> ContactDB:
    """Insert a new contact for a user."""
    row = ContactDB(user_id=user_id)
    _apply_record(row, record)
    session.add(row)
    await session.flush()
    logger.info("contact_created", extra={"user_id": user_id, "contact_id": row.id})
    return row


async def get_contact(session: AsyncSession, user_id: str, contact_id: int) -> ContactDB | None:
    """
    Get one of a user's contacts.

    Returns None if the contact does not exist or belongs to another user.
    """
    result = await session.execute(
        select(ContactDB).where(ContactDB.id == contact_id, ContactDB.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def list_contacts(session: AsyncSession, user_id: str) -> list[ContactDB]:
    """All of a user's contacts, newest first."""
    result = await session.execute(
        select(ContactDB)
        .where(ContactDB.user_id == user_id)
        .order_by(ContactDB.created_at.desc(), ContactDB.id.desc())
    )
    return list(result.scalars().all())


async def update_contact(
    session: AsyncSession, user_id: str, contact_id: int, record: ContactRecord
) -> ContactDB:
    """
    Replace a contact with a new record.

    Every canonical column is overwritten; the new record supersedes
    the old one entirely.

    Raises ContactNotFoundError if the contact does not exist for the user.
    """
    row = await get_contact(session, user_id, contact_id)
    if row is None:
        raise ContactNotFoundError(contact_id, user_id)

    _apply_record(row, record)
    await session.flush()
    logger.info("contact_updated", extra={"user_id": user_id, "contact_id": contact_id})
    return row


async def delete_contact(session: AsyncSession, user_id: str, contact_id: int) -> bool:
    """
    Delete a contact.

    Returns True if deleted, False if not found.
    """
    row = await get_contact(session, user_id, contact_id)
    if row is None:
        return False

    await session.execute(delete(FollowUpDB).where(FollowUpDB.contact_id == contact_id))
    await session.delete(row)
    await session.flush()
    logger.info("contact_deleted", extra={"user_id": user_id, "contact_id": contact_id})
    return True


async def search_contacts_db(session: AsyncSession, user_id: str, query: str) -> list[ContactDB]:
    """
    Case-insensitive search over name, email, company and title.

    A blank query returns every contact.
    """
    if not query or not query.strip():
        return await list_contacts(session, user_id)

    pattern = f"%{_escape_like(query.strip())}%"
    result = await session.execute(
        select(ContactDB)
        .where(
            ContactDB.user_id == user_id,
            or_(
                ContactDB.name.ilike(pattern, escape="\\"),
                ContactDB.email.ilike(pattern, escape="\\"),
                ContactDB.company.ilike(pattern, escape="\\"),
                ContactDB.title.ilike(pattern, escape="\\"),
            ),
        )
        .order_by(ContactDB.created_at.desc(), ContactDB.id.desc())
    )
    return list(result.scalars().all())


async def get_contacts_by_tag(session: AsyncSession, user_id: str, tag: str) -> list[ContactDB]:
    """
    Contacts carrying an exact (case-sensitive) tag, newest first.

    Tags live in a JSON column; matching happens here rather than in SQL
    so it behaves the same on every backend.
    """
    contacts = await list_contacts(session, user_id)
    return [row for row in contacts if tag in (row.tags or [])]


def contact_to_record(row: ContactDB) -> ContactRecord:
    """Convert a database contact to a domain record."""
    return ContactRecord(
        name=row.name,
        title=row.title or "",
        company=row.company or "",
        email=row.email or "",
        phone=row.phone or "",
        website=row.website or "",
        tags=tuple(row.tags or ()),
        notes=row.notes or "",
        metadata={str(key): str(value) for key, value in (row.extra or {}).items()},
    )


# --- Business Card Operations ---


def _apply_card_fields(row: BusinessCardDB, fields: Mapping[str, Any]) -> None:
    if "name" in fields:
        row.name = str(fields["name"] or "").strip()
    if "email" in fields:
        row.email = str(fields["email"] or "").strip()
    for name in _OPTIONAL_CARD_FIELDS:
        if name in fields:
            value = str(fields[name] or "").strip()
            setattr(row, name, value or None)
    if fields.get("theme_color"):
        row.theme_color = str(fields["theme_color"])


async def get_card(session: AsyncSession, user_id: str, card_id: int) -> BusinessCardDB | None:
    """Get one of a user's cards, or None."""
    result = await session.execute(
        select(BusinessCardDB).where(
            BusinessCardDB.id == card_id,
            BusinessCardDB.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_user_cards(session: AsyncSession, user_id: str) -> list[BusinessCardDB]:
    """All of a user's cards, newest first."""
    result = await session.execute(
        select(BusinessCardDB)
        .where(BusinessCardDB.user_id == user_id)
        .order_by(BusinessCardDB.created_at.desc(), BusinessCardDB.id.desc())
    )
    return list(result.scalars().all())


async def get_primary_card(session: AsyncSession, user_id: str) -> BusinessCardDB | None:
    """The card a user shares by default, or None."""
    result = await session.execute(
        select(BusinessCardDB).where(
            BusinessCardDB.user_id == user_id,
            BusinessCardDB.is_primary.is_(True),
        )
    )
    return result.scalars().first()


async def create_card(
    session: AsyncSession, user_id: str, fields: Mapping[str, Any]
) -> BusinessCardDB:
    """
    Create a business card.

    The card becomes primary if the user has no primary card yet.
    """
    has_primary = await get_primary_card(session, user_id) is not None

    row = BusinessCardDB(
        user_id=user_id,
        name="",
        email="",
        theme_color=DEFAULT_THEME_COLOR,
        is_primary=not has_primary,
    )
    _apply_card_fields(row, fields)
    session.add(row)
    await session.flush()
    logger.info(
        "card_created",
        extra={"user_id": user_id, "card_id": row.id, "is_primary": row.is_primary},
    )
    return row


async def update_card(
    session: AsyncSession, user_id: str, card_id: int, fields: Mapping[str, Any]
) -> BusinessCardDB:
    """
    Update a card's fields.

    Only keys present in `fields` are changed.
    Raises CardNotFoundError if the card does not exist for the user.
    """
    row = await get_card(session, user_id, card_id)
    if row is None:
        raise CardNotFoundError(card_id, user_id)

    _apply_card_fields(row, fields)
    await session.flush()
    return row


async def delete_card(session: AsyncSession, user_id: str, card_id: int) -> bool:
    """
    Delete a card.

    Returns True if deleted, False if not found.
    """
    row = await get_card(session, user_id, card_id)
    if row is None:
        return False

    await session.delete(row)
    await session.flush()
    return True


async def set_primary_card(session: AsyncSession, user_id: str, card_id: int) -> BusinessCardDB:
    """
    Make a card the user's only primary card.

    Raises CardNotFoundError if the card does not exist for the user.
    """
    row = await get_card(session, user_id, card_id)
    if row is None:
        raise CardNotFoundError(card_id, user_id)

    await session.execute(
        update(BusinessCardDB)
        .where(BusinessCardDB.user_id == user_id, BusinessCardDB.id != card_id)
        .values(is_primary=False)
        .execution_options(synchronize_session="fetch")
    )
    row.is_primary = True
    await session.flush()
    return row


def card_to_dict(row: BusinessCardDB) -> dict[str, Any]:
    """Card fields with blanks as empty strings, ready for payload encoding."""
    return {
        "id": row.id,
        "name": row.name,
        "title": row.title or "",
        "company": row.company or "",
        "email": row.email,
        "phone": row.phone or "",
        "website": row.website or "",
        "theme_color": row.theme_color,
        "is_primary": row.is_primary,
    }


# --- Profile Operations ---

_PROFILE_FIELDS: tuple[str, ...] = ("full_name", "email")


async def get_profile(session: AsyncSession, user_id: str) -> ProfileDB | None:
    """A user's profile, or None if the user has never saved one."""
    result = await session.execute(select(ProfileDB).where(ProfileDB.user_id == user_id))
    return result.scalar_one_or_none()


async def update_profile(
    session: AsyncSession, user_id: str, fields: Mapping[str, Any]
) -> ProfileDB:
    """
    Create or update a user's profile.

    Only keys present in `fields` are changed; a blank avatar URL is
    stored as NULL.
    """
    row = await get_profile(session, user_id)
    if row is None:
        row = ProfileDB(user_id=user_id, full_name="", email="")
        session.add(row)

    for name in _PROFILE_FIELDS:
        if name in fields:
            setattr(row, name, str(fields[name] or "").strip())
    if "avatar_url" in fields:
        row.avatar_url = str(fields["avatar_url"] or "").strip() or None

    await session.flush()
    logger.info("profile_updated", extra={"user_id": user_id})
    return row


def profile_to_dict(row: ProfileDB) -> dict[str, Any]:
    return {
        "user_id": row.user_id,
        "full_name": row.full_name,
        "email": row.email,
        "avatar_url": row.avatar_url or "",
    }


# --- Follow-up Operations ---

_FOLLOW_UP_FIELDS: tuple[str, ...] = ("message", "tone", "context")


def _apply_follow_up_fields(row: FollowUpDB, fields: Mapping[str, Any]) -> None:
    for name in _FOLLOW_UP_FIELDS:
        if fields.get(name) is not None:
            setattr(row, name, str(fields[name]))
    if fields.get("completed") is not None:
        row.completed = bool(fields["completed"])


async def create_follow_up(
    session: AsyncSession, user_id: str, contact_id: int, fields: Mapping[str, Any]
) -> FollowUpDB:
    """
    Create a follow-up for one of a user's contacts.

    Raises ContactNotFoundError if the contact does not exist for the user.
    """
    contact = await get_contact(session, user_id, contact_id)
    if contact is None:
        raise ContactNotFoundError(contact_id, user_id)

    row = FollowUpDB(
        user_id=user_id,
        contact=contact,
        message="",
        tone="professional",
        context="",
        completed=False,
    )
    _apply_follow_up_fields(row, fields)
    session.add(row)
    await session.flush()
    logger.info(
        "follow_up_created",
        extra={"user_id": user_id, "contact_id": contact_id, "follow_up_id": row.id},
    )
    return row


async def get_follow_up(
    session: AsyncSession, user_id: str, follow_up_id: int
) -> FollowUpDB | None:
    """One of a user's follow-ups with its contact loaded, or None."""
    result = await session.execute(
        select(FollowUpDB)
        .where(FollowUpDB.id == follow_up_id, FollowUpDB.user_id == user_id)
        .options(selectinload(FollowUpDB.contact))
    )
    return result.scalar_one_or_none()


async def get_user_follow_ups(session: AsyncSession, user_id: str) -> list[FollowUpDB]:
    """All of a user's follow-ups with their contacts loaded, newest first."""
    result = await session.execute(
        select(FollowUpDB)
        .where(FollowUpDB.user_id == user_id)
        .options(selectinload(FollowUpDB.contact))
        .order_by(FollowUpDB.created_at.desc(), FollowUpDB.id.desc())
    )
    return list(result.scalars().all())


async def update_follow_up(
    session: AsyncSession, user_id: str, follow_up_id: int, fields: Mapping[str, Any]
) -> FollowUpDB:
    """
    Update a follow-up's message, tone, context or completion.

    Raises FollowUpNotFoundError if the follow-up does not exist for the user.
    """
    row = await get_follow_up(session, user_id, follow_up_id)
    if row is None:
        raise FollowUpNotFoundError(follow_up_id, user_id)

    _apply_follow_up_fields(row, fields)
    await session.flush()
    return row


async def delete_follow_up(session: AsyncSession, user_id: str, follow_up_id: int) -> bool:
    """
    Delete a follow-up.

    Returns True if deleted, False if not found.
    """
    row = await get_follow_up(session, user_id, follow_up_id)
    if row is None:
        return False

    await session.delete(row)
    await session.flush()
    return True


def follow_up_to_dict(row: FollowUpDB) -> dict[str, Any]:
    """Follow-up fields plus a summary of its contact (contact must be loaded)."""
    contact = row.contact
    return {
        "id": row.id,
        "contact_id": row.contact_id,
        "message": row.message,
        "tone": row.tone,
        "context": row.context,
        "completed": row.completed,
        "contact": {
            "id": contact.id,
            "name": contact.name,
            "email": contact.email,
            "company": contact.company,
        },
    }
