"""
Note Service.

Business logic layer for notes. Every operation takes the caller's user
id explicitly; nothing here reads identity from request context.

Not-found is a return value (None or False), not an exception, except in
get_note_for_user which implements the detail-view contract.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import AuthorizationError, NotFoundError
from modules.backend.core.pagination import PagedResult
from modules.backend.models.note import Note
from modules.backend.repositories.note import NoteRepository
from modules.backend.schemas.note import NoteCreate, NoteUpdate
from modules.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Wraps NoteRepository with argument checks, logging, and conversion
    of storage failures into DatabaseError.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create_note(self, data: NoteCreate, user_id: int) -> Note:
        """
        Create a new, unstarred note owned by user_id.

        Returns:
            The persisted note with its generated id and created_at

        Raises:
            DatabaseError: If the insert fails
        """
        self._log_operation("Creating note", user_id=user_id)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                user_id=user_id,
                title=data.title,
                description=data.description,
                is_starred=False,
            ),
        )

        self._log_debug("Note created", note_id=note.id, user_id=user_id)
        return note

    async def get_note(self, note_id: int) -> Note | None:
        """
        Get a note by ID regardless of owner.

        Callers must compare note.user_id with the requesting user
        before exposing the note; see get_note_for_user.
        """
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id_or_none(note_id),
        )

    async def get_note_for_user(self, note_id: int, user_id: int) -> Note:
        """
        Get a note for display to user_id.

        Raises:
            NotFoundError: If no note has this id
            AuthorizationError: If the note belongs to another user
        """
        note = await self.get_note(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        if note.user_id != user_id:
            self._logger.warning(
                "Note requested by non-owner",
                extra={"note_id": note_id, "user_id": user_id},
            )
            raise AuthorizationError("Note does not belong to the current user")
        return note

    async def list_notes_page(
        self,
        user_id: int,
        limit: int = 10,
        offset: int = 0,
    ) -> PagedResult[Note]:
        """
        List one page of user_id's notes, starred first then newest first.

        Args:
            user_id: Owner
            limit: Page size, 0 for a count-only result
            offset: Rows to skip

        Returns:
            PagedResult with the page and the owner's total note count

        Raises:
            ValidationError: If limit or offset is negative
        """
        self._validate_non_negative(limit=limit, offset=offset)
        self._log_debug("Listing notes", user_id=user_id, limit=limit, offset=offset)

        return await self._execute_db_operation(
            "list_notes_page",
            self.repo.get_page_by_owner(user_id, limit=limit, offset=offset),
        )

    async def toggle_star(self, note_id: int, user_id: int) -> Note | None:
        """
        Flip the starred flag of an owned note.

        Returns:
            The updated note, or None if user_id owns no such note
        """
        self._log_operation("Toggling note star", note_id=note_id, user_id=user_id)

        return await self._execute_db_operation(
            "toggle_star",
            self.repo.toggle_star(note_id, user_id),
        )

    async def update_note(
        self,
        note_id: int,
        user_id: int,
        data: NoteUpdate,
    ) -> Note | None:
        """
        Update the fields present in data on an owned note.

        Returns:
            The updated note, or None if user_id owns no such note
        """
        update_data = data.model_dump(exclude_unset=True)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            user_id=user_id,
            fields=sorted(update_data),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update_owned(note_id, user_id, **update_data),
        )

    async def delete_note(self, note_id: int, user_id: int) -> bool:
        """
        Delete an owned note.

        Returns:
            True if the note was removed, False if user_id owns no such note
        """
        self._log_operation("Deleting note", note_id=note_id, user_id=user_id)

        return await self._execute_db_operation(
            "delete_note",
            self.repo.delete_owned(note_id, user_id),
        )
