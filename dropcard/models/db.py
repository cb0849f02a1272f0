"""
SQLAlchemy ORM models for persistent storage.

Rows mirror the ContactRecord and business card shapes, plus user profiles
and follow-ups. Every row is scoped to a user; the user id is an opaque
string from the auth layer.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from dropcard.config import DEFAULT_THEME_COLOR


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ContactDB(Base):
    """
    A contact collected by a user.

    Canonical fields are columns; fields outside the canonical set are
    kept in `extra` so nothing captured from a scan is lost.
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)

    name: Mapped[str] = mapped_column(String(255), index=True)
    title: Mapped[str] = mapped_column(String(255), default="")
    company: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str] = mapped_column(String(320), default="")
    phone: Mapped[str] = mapped_column(String(64), default="")
    website: Mapped[str] = mapped_column(String(2048), default="")
    notes: Mapped[str] = mapped_column(Text, default="")

    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    extra: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<ContactDB(id={self.id}, user_id={self.user_id}, name={self.name})>"


class BusinessCardDB(Base):
    """
    A business card owned by a user.

    A user may hold several cards; at most one of them is primary.
    """

    __tablename__ = "business_cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)

    name: Mapped[str] = mapped_column(String(255))
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(320))
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    website: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    theme_color: Mapped[str] = mapped_column(String(16), default=DEFAULT_THEME_COLOR)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<BusinessCardDB(id={self.id}, user_id={self.user_id}, primary={self.is_primary})>"


class ProfileDB(Base):
    """
    A user's profile, one row per user.

    The row is created on first update; until then the user has no profile.
    """

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str] = mapped_column(String(320), default="")
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<ProfileDB(user_id={self.user_id}, full_name={self.full_name})>"


class FollowUpDB(Base):
    """
    A follow-up message planned for one of a user's contacts.

    Deleted together with its contact (see delete_contact).
    """

    __tablename__ = "follow_ups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"), index=True
    )

    message: Mapped[str] = mapped_column(Text, default="")
    tone: Mapped[str] = mapped_column(String(32), default="professional")
    context: Mapped[str] = mapped_column(Text, default="")
    completed: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Contact the follow-up is about
    contact: Mapped["ContactDB"] = relationship()

    def __repr__(self) -> str:
        return f"<FollowUpDB(id={self.id}, contact_id={self.contact_id}, done={self.completed})>"
