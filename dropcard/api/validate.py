"""
Form validation endpoints.

Lets clients check a form with the server's rules before submitting.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from dropcard.services.field_validator import validate_card_form, validate_contact_form

router = APIRouter(prefix="/validate", tags=["validate"])


class FormFields(BaseModel):
    name: str = ""
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""


class ValidationResponse(BaseModel):
    """Field errors; an empty mapping means the form may be saved."""

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)


@router.post("/contact", response_model=ValidationResponse)
async def validate_contact_endpoint(fields: FormFields) -> ValidationResponse:
    result = validate_contact_form(fields.model_dump())
    return ValidationResponse(valid=result.is_valid, errors=result.errors)


@router.post("/card", response_model=ValidationResponse)
async def validate_card_endpoint(fields: FormFields) -> ValidationResponse:
    """Card rules: as for contacts, plus a required email."""
    result = validate_card_form(fields.model_dump())
    return ValidationResponse(valid=result.is_valid, errors=result.errors)
