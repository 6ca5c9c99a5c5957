"""
Star Toggle Endpoint.

Form action that flips the starred flag of one of the caller's notes.
The new value is always computed by the database; a submitted
``isStarred`` field is ignored.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from modules.backend.core.dependencies import CurrentUserId, DbSession
from modules.backend.core.exceptions import DatabaseError
from modules.backend.core.logging import get_logger
from modules.backend.core.utils import parse_int
from modules.backend.models.note import MAX_NOTE_ID
from modules.backend.schemas.note import (
    ActionErrorResponse,
    NoteMutationResponse,
    NoteResponse,
)
from modules.backend.services.note import NoteService

router = APIRouter()
logger = get_logger(__name__)

TOGGLE_STAR_INTENT = "toggleStar"


def _action_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ActionErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/star",
    response_model=NoteMutationResponse,
    summary="Toggle a note's star",
    description="Form fields: `noteId`, `intent=toggleStar`.",
    responses={
        400: {"model": ActionErrorResponse},
        404: {"model": ActionErrorResponse},
        500: {"model": ActionErrorResponse},
    },
)
async def toggle_star(
    request: Request,
    db: DbSession,
    user_id: CurrentUserId,
) -> NoteMutationResponse | JSONResponse:
    """Toggle the starred flag on a note owned by the caller."""
    form = await request.form()
    raw_note_id = form.get("noteId")

    if form.get("intent") != TOGGLE_STAR_INTENT or not raw_note_id:
        return _action_error(400, "Invalid request")

    note_id = parse_int(raw_note_id)
    if note_id is None or not 1 <= note_id <= MAX_NOTE_ID:
        return _action_error(400, "Invalid note ID")

    service = NoteService(db)
    try:
        note = await service.toggle_star(note_id, user_id)
    except DatabaseError:
        await db.rollback()
        return _action_error(500, "Failed to toggle star")

    if note is None:
        logger.info(
            "Star toggle on missing note",
            extra={"note_id": note_id, "user_id": user_id},
        )
        return _action_error(404, "Note not found")

    return NoteMutationResponse(note=NoteResponse.model_validate(note))
