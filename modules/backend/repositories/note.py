"""
Note Repository.

Data access layer for notes. Every method except get_by_id_or_none is
scoped by (note id, user id): a note is never returned, changed or
removed on behalf of a user who does not own it.
"""

from typing import Any

from sqlalchemy import delete, not_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.pagination import PagedResult
from modules.backend.models.note import Note
from modules.backend.repositories.base import BaseRepository

# Columns a caller may change after creation
UPDATABLE_FIELDS = frozenset({"title", "description", "is_starred"})


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits get_by_id_or_none, create and count from BaseRepository
    and adds the owner-scoped queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_owned(
        self,
        note_id: int,
        user_id: int,
        populate_existing: bool = False,
    ) -> Note | None:
        """
        Get a note only if it belongs to user_id.

        Args:
            note_id: Note ID
            user_id: Owner to scope by
            populate_existing: Overwrite any copy already in the session
                with the row as stored (needed after a bulk UPDATE)
        """
        stmt = select(Note).where(Note.id == note_id, Note.user_id == user_id)
        if populate_existing:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_page_by_owner(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> PagedResult[Note]:
        """
        Get one page of a user's notes plus the user's total note count.

        Ordering is starred first, then newest first; id breaks ties
        between notes created in the same instant.

        Args:
            user_id: Owner to scope by
            limit: Maximum number of notes to return (0 returns none)
            offset: Number of notes to skip

        Returns:
            PagedResult whose total ignores limit and offset
        """
        result = await self.session.execute(
            select(Note)
            .where(Note.user_id == user_id)
            .order_by(Note.is_starred.desc(), Note.created_at.desc(), Note.id.desc())
            .limit(limit)
            .offset(offset)
        )
        notes = list(result.scalars().all())
        total = await self.count_by_owner(user_id)

        return PagedResult(items=notes, total=total, limit=limit, offset=offset)

    async def count_by_owner(self, user_id: int) -> int:
        """Count all notes owned by user_id."""
        return await self.count(Note.user_id == user_id)

    async def toggle_star(self, note_id: int, user_id: int) -> Note | None:
        """
        Flip is_starred on an owned note.

        The negation is evaluated by the database in a single conditional
        UPDATE, so concurrent toggles of the same note cannot lose an update.

        Returns:
            The updated note, or None if user_id owns no such note
        """
        result = await self.session.execute(
            update(Note)
            .where(Note.id == note_id, Note.user_id == user_id)
            .values(is_starred=not_(Note.is_starred))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get_owned(note_id, user_id, populate_existing=True)

    async def update_owned(
        self,
        note_id: int,
        user_id: int,
        **fields: Any,
    ) -> Note | None:
        """
        Apply a partial update to an owned note.

        Args:
            note_id: Note ID
            user_id: Owner to scope by
            **fields: Subset of UPDATABLE_FIELDS

        Returns:
            The updated note, or None if user_id owns no such note

        Raises:
            ValueError: If a field outside UPDATABLE_FIELDS is given
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
        if not fields:
            return await self.get_owned(note_id, user_id)

        result = await self.session.execute(
            update(Note)
            .where(Note.id == note_id, Note.user_id == user_id)
            .values(**fields)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get_owned(note_id, user_id, populate_existing=True)

    async def delete_owned(self, note_id: int, user_id: int) -> bool:
        """
        Physically delete an owned note.

        Returns:
            True if a row was removed, False if user_id owns no such note
        """
        result = await self.session.execute(
            delete(Note)
            .where(Note.id == note_id, Note.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
