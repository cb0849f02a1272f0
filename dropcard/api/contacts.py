"""
Contacts API endpoints.

CRUD over a user's contacts. Input is validated with the same rules as
the contact form; responses carry the derived display fields.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dropcard.db import (
    contact_to_record,
    create_contact,
    delete_contact,
    get_contact,
    get_contacts_by_tag,
    list_contacts,
    search_contacts_db,
    update_contact,
)
from dropcard.db.database import get_session
from dropcard.models.contact import ContactRecord
from dropcard.models.db import ContactDB
from dropcard.models.errors import ContactNotFoundError
from dropcard.services.contact_display import get_avatar_color, get_initials
from dropcard.services.contact_search import collect_tags
from dropcard.services.field_validator import validate_contact_form
from dropcard.services.reconciler import add_tag

router = APIRouter(prefix="/contacts", tags=["contacts"])


class ContactRequest(BaseModel):
    """Contact form fields."""

    name: str = ""
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(
        default_factory=dict,
        description="Extra fields outside the canonical set (address, linkedin, ...)",
    )

    def to_record(self) -> ContactRecord:
        tags: tuple[str, ...] = ()
        for tag in self.tags:
            tags = add_tag(tags, tag)
        return ContactRecord(
            name=self.name.strip(),
            title=self.title.strip(),
            company=self.company.strip(),
            email=self.email.strip(),
            phone=self.phone.strip(),
            website=self.website.strip(),
            tags=tags,
            notes=self.notes,
            metadata=dict(self.metadata),
        )


class ContactResponse(BaseModel):
    """A stored contact with display fields."""

    id: int
    user_id: str
    name: str
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
    initials: str = Field(..., description="Up to two initials for the avatar")
    avatar_color: str = Field(..., description="Hex avatar color")


class ContactListResponse(BaseModel):
    """A user's contacts plus every tag in use."""

    user_id: str
    contacts: list[ContactResponse] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    id: int
    deleted: bool


def contact_response(row: ContactDB) -> ContactResponse:
    """Build the API shape for a stored contact."""
    record = contact_to_record(row)
    return ContactResponse(
        id=row.id,
        user_id=row.user_id,
        name=record.name,
        title=record.title,
        company=record.company,
        email=record.email,
        phone=record.phone,
        website=record.website,
        notes=record.notes,
        tags=list(record.tags),
        metadata=record.metadata,
        initials=get_initials(record.name),
        avatar_color=get_avatar_color(record.name),
    )


def ensure_valid(record: ContactRecord) -> None:
    """Reject a record the contact form would not accept."""
    result = validate_contact_form(record.to_dict())
    if not result.is_valid:
        raise HTTPException(
            status_code=422,
            detail={"errors": result.errors},
        )


@router.get("/{user_id}", response_model=ContactListResponse)
async def get_contacts_endpoint(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    q: Annotated[str | None, Query(description="Search name, email, company, title")] = None,
    tag: Annotated[str | None, Query(description="Only contacts with this exact tag")] = None,
) -> ContactListResponse:
    """List a user's contacts, optionally searched or filtered by tag."""
    if tag:
        rows = await get_contacts_by_tag(session, user_id, tag)
        if q:
            matching = {row.id for row in await search_contacts_db(session, user_id, q)}
            rows = [row for row in rows if row.id in matching]
    else:
        rows = await search_contacts_db(session, user_id, q or "")

    all_rows = await list_contacts(session, user_id)
    return ContactListResponse(
        user_id=user_id,
        contacts=[contact_response(row) for row in rows],
        tags=collect_tags(contact_to_record(row) for row in all_rows),
    )


@router.post(
    "/{user_id}",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contact_endpoint(
    user_id: str,
    request: ContactRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ContactResponse:
    """Create a contact from form fields."""
    record = request.to_record()
    ensure_valid(record)
    row = await create_contact(session, user_id, record)
    return contact_response(row)


@router.get("/{user_id}/{contact_id}", response_model=ContactResponse)
async def get_contact_endpoint(
    user_id: str,
    contact_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ContactResponse:
    """Get a single contact."""
    row = await get_contact(session, user_id, contact_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(ContactNotFoundError(contact_id, user_id)),
        )
    return contact_response(row)


@router.put("/{user_id}/{contact_id}", response_model=ContactResponse)
async def update_contact_endpoint(
    user_id: str,
    contact_id: int,
    request: ContactRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ContactResponse:
    """Replace a contact with the submitted fields."""
    record = request.to_record()
    ensure_valid(record)
    try:
        row = await update_contact(session, user_id, contact_id, record)
    except ContactNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return contact_response(row)


@router.delete("/{user_id}/{contact_id}", response_model=DeleteResponse)
async def delete_contact_endpoint(
    user_id: str,
    contact_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a contact. Deleting a missing contact reports deleted=False."""
    deleted = await delete_contact(session, user_id, contact_id)
    return DeleteResponse(id=contact_id, deleted=deleted)
