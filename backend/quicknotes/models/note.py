"""
QuickNotes — Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; `init_models()` creates it.
Who:   Used by NoteStore for CRUD operations.

Table Design:
    - UUID primary key, generated in Python so every backend assigns ids
      the same way; never reused.
    - title/content: TEXT, NOT NULL; blank values are rejected before insert.
    - category: short label from `Category`, defaults to 'Others'.
    - created_at/updated_at: timezone-aware UTC timestamps set by the store.

    Index on created_at DESC serves the only list query (newest first).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from quicknotes.database import Base
from quicknotes.models.category import DEFAULT_CATEGORY


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user-authored title/content record with a category tag and timestamps.

    Lifecycle:
        1. Created by NoteStore.create (id and both timestamps assigned)
        2. Mutated only by NoteStore.update (updated_at bumped)
        3. Hard-deleted by NoteStore.delete
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_CATEGORY,
    )

    # Stored in UTC; SQLite hands these back naive, see NoteStore._as_utc
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title='{self.title}', "
            f"category='{self.category}', created_at='{self.created_at}')>"
        )


# Serves the only list query (newest first)
Index("idx_notes_created_at", Note.created_at.desc())
