"""
Note Model.

A user-owned note. Every query against this table is scoped by user_id;
see repositories/note.py.
"""

from sqlalchemy import Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, IntegerIdMixin, TimestampMixin

# Largest id the INTEGER primary key can hold on every supported backend
MAX_NOTE_ID = 2**31 - 1


class Note(IntegerIdMixin, TimestampMixin, Base):
    """
    Note database model.

    ``id`` and ``created_at`` are assigned on insert and never change.
    ``user_id`` is the owning user's opaque integer identity.
    """

    __tablename__ = "notes"
    __table_args__ = (
        # Serves the owner page query: WHERE user_id ORDER BY is_starred, created_at
        Index("ix_notes_owner_order", "user_id", "is_starred", "created_at"),
        # Ids are never reused, even after the newest row is deleted
        {"sqlite_autoincrement": True},
    )

    user_id: Mapped[int] = mapped_column(
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    is_starred: Mapped[bool] = mapped_column(
        default=False,
        server_default=false(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, user_id={self.user_id}, title={self.title!r})>"
