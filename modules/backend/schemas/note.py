"""
Note Schemas.

Pydantic schemas for note request parsing and response bodies.
Response bodies use camelCase keys (userId, isStarred, createdAt, totalCount).
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from modules.backend.schemas.base import CamelModel

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 10000


def _clean_title(value: Any) -> Any:
    """Strip a title, rejecting one that is empty or only whitespace."""
    if isinstance(value, str):
        if not value.strip():
            raise PydanticCustomError("title_required", "Title is required")
        return value.strip()
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# =============================================================================
# Requests
# =============================================================================


class NoteCreate(BaseModel):
    """Validated fields for creating a note. The owner comes from the caller's identity."""

    title: str = Field(
        ...,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
        examples=["Groceries"],
    )
    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Free-text body",
        examples=["Milk, eggs, coffee"],
    )

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("title_required", "Title is required")
        return _clean_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class NoteUpdate(CamelModel):
    """Partial update. Only fields present in the request are applied."""

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
    )
    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Free-text body",
    )
    is_starred: bool | None = Field(
        default=None,
        description="Starred flag",
    )

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_blank(cls, value: Any) -> Any:
        # None is left for _not_null
        if value is None:
            return value
        return _clean_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("title", "is_starred")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class FieldErrors(BaseModel):
    """Per-field validation messages for a rejected form."""

    errors: dict[str, list[str]]


def validate_note_form(form: Mapping[str, Any]) -> NoteCreate | FieldErrors:
    """
    Parse raw form fields into a NoteCreate.

    Returns either the validated data or the field errors, never raises
    for bad input. Fields other than title and description are ignored.
    """
    data = {
        "title": form.get("title"),
        "description": form.get("description"),
    }
    try:
        return NoteCreate.model_validate(data)
    except PydanticValidationError as exc:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            errors.setdefault(field, []).append(error["msg"])
        return FieldErrors(errors=errors)


# =============================================================================
# Responses
# =============================================================================


class NoteResponse(CamelModel):
    """Schema for a note in API responses."""

    id: int = Field(description="Note identifier")
    user_id: int = Field(description="Owning user identifier")
    title: str = Field(description="Note title")
    description: str | None = Field(description="Free-text body")
    is_starred: bool = Field(description="Whether the note is starred")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")

    model_config = ConfigDict(from_attributes=True)


class NotePageResponse(CamelModel):
    """One page of the current user's notes."""

    notes: list[NoteResponse]
    page: int
    limit: int
    total_count: int
    total_pages: int


class NoteDetailResponse(CamelModel):
    """Body of the note detail view."""

    note: NoteResponse


class NoteMutationResponse(CamelModel):
    """Body returned after a note is created, updated or toggled."""

    success: bool = True
    note: NoteResponse


class ActionErrorResponse(BaseModel):
    """Error body used by the form-action endpoints."""

    error: str


class FormErrorResponse(BaseModel):
    """Body returned when a submitted form fails validation."""

    success: bool = False
    errors: dict[str, list[str]]
