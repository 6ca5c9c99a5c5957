"""
Notes API Endpoints.

Page listing, creation, detail view, update and delete for the current
user's notes. Every endpoint requires a bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response
from fastapi.responses import JSONResponse

from modules.backend.core.dependencies import CurrentUserId, DbSession
from modules.backend.core.exceptions import DatabaseError, NotFoundError
from modules.backend.core.logging import get_logger
from modules.backend.core.pagination import PaginationParams, get_pagination_params
from modules.backend.models.note import MAX_NOTE_ID
from modules.backend.schemas.note import (
    ActionErrorResponse,
    FieldErrors,
    FormErrorResponse,
    NoteDetailResponse,
    NoteMutationResponse,
    NotePageResponse,
    NoteResponse,
    NoteUpdate,
    validate_note_form,
)
from modules.backend.services.note import NoteService

router = APIRouter()
logger = get_logger(__name__)

NoteId = Annotated[int, Path(ge=1, le=MAX_NOTE_ID, description="Note ID")]


@router.get(
    "",
    response_model=NotePageResponse,
    summary="List notes (paginated)",
    description="One page of the caller's notes, starred first then newest first.",
)
async def list_notes(
    db: DbSession,
    user_id: CurrentUserId,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> NotePageResponse:
    """List the caller's notes."""
    service = NoteService(db)
    result = await service.list_notes_page(
        user_id,
        limit=pagination.limit,
        offset=pagination.offset,
    )

    return NotePageResponse(
        notes=[NoteResponse.model_validate(note) for note in result.items],
        page=pagination.page,
        limit=pagination.limit,
        total_count=result.total,
        total_pages=result.total_pages,
    )


@router.post(
    "",
    response_model=NoteMutationResponse,
    summary="Create a note",
    description="Create a note from form fields `title` and `description`.",
    responses={
        400: {"model": FormErrorResponse},
        500: {"model": ActionErrorResponse},
    },
)
async def create_note(
    request: Request,
    db: DbSession,
    user_id: CurrentUserId,
) -> NoteMutationResponse | JSONResponse:
    """Create a note owned by the caller."""
    form = await request.form()
    parsed = validate_note_form(form)

    if isinstance(parsed, FieldErrors):
        logger.info(
            "Note form rejected",
            extra={"user_id": user_id, "fields": sorted(parsed.errors)},
        )
        return JSONResponse(
            status_code=400,
            content=FormErrorResponse(errors=parsed.errors).model_dump(),
        )

    service = NoteService(db)
    try:
        note = await service.create_note(parsed, user_id)
    except DatabaseError:
        await db.rollback()
        return JSONResponse(
            status_code=500,
            content=ActionErrorResponse(error="Failed to create note").model_dump(),
        )

    return NoteMutationResponse(note=NoteResponse.model_validate(note))


@router.get(
    "/{note_id}",
    response_model=NoteDetailResponse,
    summary="Get a note",
    description="Detail view. 404 if the note does not exist, 401 if it belongs to someone else.",
)
async def get_note(
    note_id: NoteId,
    db: DbSession,
    user_id: CurrentUserId,
) -> NoteDetailResponse:
    """Get one of the caller's notes."""
    service = NoteService(db)
    note = await service.get_note_for_user(note_id, user_id)
    return NoteDetailResponse(note=NoteResponse.model_validate(note))


@router.patch(
    "/{note_id}",
    response_model=NoteMutationResponse,
    summary="Update a note",
    description="Update an owned note. Only provided fields are changed.",
)
async def update_note(
    note_id: NoteId,
    data: NoteUpdate,
    db: DbSession,
    user_id: CurrentUserId,
) -> NoteMutationResponse:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, user_id, data)
    if note is None:
        raise NotFoundError("Note not found")
    return NoteMutationResponse(note=NoteResponse.model_validate(note))


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete an owned note.",
)
async def delete_note(
    note_id: NoteId,
    db: DbSession,
    user_id: CurrentUserId,
) -> Response:
    """Delete a note."""
    service = NoteService(db)
    if not await service.delete_note(note_id, user_id):
        raise NotFoundError("Note not found")
    return Response(status_code=204)
