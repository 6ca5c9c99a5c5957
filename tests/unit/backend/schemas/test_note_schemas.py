"""
Unit Tests for Note Schemas.

Form validation and wire format of notes.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from modules.backend.schemas.note import (
    FieldErrors,
    NoteCreate,
    NotePageResponse,
    NoteResponse,
    NoteUpdate,
    validate_note_form,
)


class TestValidateNoteForm:
    """Tests for the form boundary validator."""

    def test_valid_form_returns_note_create(self):
        """Should return NoteCreate for a valid form."""
        result = validate_note_form({"title": "Groceries", "description": "Milk"})

        assert isinstance(result, NoteCreate)
        assert result.title == "Groceries"
        assert result.description == "Milk"

    def test_title_is_stripped(self):
        """Should strip surrounding whitespace from the title."""
        result = validate_note_form({"title": "  Padded  "})

        assert result.title == "Padded"

    def test_blank_description_becomes_none(self):
        """Should store a blank description as None."""
        result = validate_note_form({"title": "T", "description": "   "})

        assert result.description is None

    @pytest.mark.parametrize("form", [{}, {"title": ""}, {"title": "   "}, {"title": None}])
    def test_missing_or_blank_title_is_field_error(self, form):
        """Should report a missing or blank title as a field error."""
        result = validate_note_form(form)

        assert isinstance(result, FieldErrors)
        assert result.errors == {"title": ["Title is required"]}

    def test_overlong_title_is_field_error(self):
        """Should report an overlong title as a field error."""
        result = validate_note_form({"title": "x" * 256})

        assert isinstance(result, FieldErrors)
        assert "title" in result.errors

    def test_extra_fields_ignored(self):
        """Should ignore fields other than title and description."""
        result = validate_note_form({"title": "T", "userId": "99", "isStarred": "true"})

        assert isinstance(result, NoteCreate)
        assert set(result.model_dump()) == {"title", "description"}


class TestNoteUpdate:
    """Tests for the partial update schema."""

    def test_accepts_camel_case(self):
        """Should accept camelCase keys."""
        update = NoteUpdate.model_validate({"isStarred": True})

        assert update.model_dump(exclude_unset=True) == {"is_starred": True}

    def test_unset_fields_are_excluded(self):
        """Should leave unsent fields out of the dump."""
        assert NoteUpdate().model_dump(exclude_unset=True) == {}

    @pytest.mark.parametrize("field", ["title", "isStarred"])
    def test_null_not_allowed_for_required_columns(self, field):
        """Should reject null for non-nullable columns."""
        with pytest.raises(PydanticValidationError, match="Field cannot be null"):
            NoteUpdate.model_validate({field: None})

    def test_description_can_be_cleared(self):
        """Should allow clearing the description with null."""
        update = NoteUpdate.model_validate({"description": None})

        assert update.model_dump(exclude_unset=True) == {"description": None}

    def test_empty_title_rejected(self):
        """Should reject an empty title."""
        with pytest.raises(PydanticValidationError):
            NoteUpdate.model_validate({"title": ""})

    @pytest.mark.parametrize("title", ["   ", "\t\n"])
    def test_whitespace_title_rejected(self, title):
        """Should reject a title that is only whitespace, as creation does."""
        with pytest.raises(PydanticValidationError, match="Title is required"):
            NoteUpdate.model_validate({"title": title})

    def test_title_is_stripped(self):
        """Should strip surrounding whitespace from an updated title."""
        update = NoteUpdate.model_validate({"title": "  Renamed  "})

        assert update.title == "Renamed"

    def test_blank_description_clears(self):
        """Should treat a blank description as clearing it."""
        update = NoteUpdate.model_validate({"description": "   "})

        assert update.model_dump(exclude_unset=True) == {"description": None}


class TestNoteResponse:
    """Tests for the wire format."""

    def test_serializes_camel_case(self, make_note):
        """Should serialize notes with camelCase keys."""
        note = make_note(id=3, user_id=9, is_starred=True)

        data = NoteResponse.model_validate(note).model_dump(by_alias=True)

        assert set(data) == {
            "id", "userId", "title", "description", "isStarred", "createdAt", "updatedAt",
        }
        assert data["userId"] == 9
        assert data["isStarred"] is True

    def test_page_response_keys(self, make_note):
        """Should serialize the page body with camelCase keys."""
        page = NotePageResponse(
            notes=[NoteResponse.model_validate(make_note())],
            page=1,
            limit=10,
            total_count=1,
            total_pages=1,
        )

        data = page.model_dump(by_alias=True, mode="json")

        assert data["totalCount"] == 1
        assert data["totalPages"] == 1
        assert data["notes"][0]["createdAt"] == datetime(2026, 1, 1, 12).isoformat()
