"""
QuickNotes — Note Store
========================

What:  The persistence abstraction over notes: list, get, create, update,
       delete. Owns identity assignment and timestamps.
How:   Wraps one AsyncSession. Each mutating operation is a single-record
       write committed before returning; there are no multi-note
       transactions.
Who:   Called by the notes route handlers through `get_note_store`.

Error Handling Strategy:
    - Payload problems come back from `validate_note_fields` as a failed
      result and are raised as ValidationError (400).
    - Unknown or malformed ids raise NotFoundError (404).
    - SQLAlchemy errors roll the session back and are wrapped in
      DatabaseError (500); the original error is logged, never returned.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, List, Mapping, NoReturn, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.database import get_db_session
from quicknotes.exceptions import DatabaseError, NotFoundError, ValidationError
from quicknotes.models.note import Note, utcnow
from quicknotes.schemas.note import NoteResponse
from quicknotes.services.validation import ValidationResult, validate_note_fields

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; every stored value is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        category=note.category,
        created_at=_as_utc(note.created_at),
        updated_at=_as_utc(note.updated_at),
    )


def _raise_if_invalid(result: ValidationResult) -> None:
    if not result.ok:
        raise ValidationError(message=result.message, field=result.field)


class NoteStore:
    """
    Ordered collection of notes keyed by id.

    Invariants upheld here:
        - ids are UUID4 values assigned on create and never change
        - title/content of a stored note are never blank
        - created_at never changes; updated_at strictly increases on update
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[NoteResponse]:
        """All notes, newest first by creation time."""
        try:
            result = await self.session.execute(
                select(Note).order_by(Note.created_at.desc())
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            await self._fail("listing notes", e)
        return [_to_response(note) for note in notes]

    async def get(self, note_id: str) -> NoteResponse:
        """
        Fetch one note.

        Raises:
            NotFoundError: No note has this id (or the id is malformed).
            DatabaseError: Query execution failed.
        """
        note = await self._load(note_id)
        return _to_response(note)

    async def create(
        self,
        title: Optional[str],
        content: Optional[str],
        category: Optional[str] = None,
    ) -> NoteResponse:
        """
        Validate and persist a new note.

        The store assigns the id and sets created_at == updated_at.

        Raises:
            ValidationError: Blank/missing title or content, unknown category.
            DatabaseError: Insert failed; nothing is persisted.
        """
        result = validate_note_fields(
            {"title": title, "content": content, "category": category}
        )
        _raise_if_invalid(result)

        now = utcnow()
        note = Note(id=uuid.uuid4(), created_at=now, updated_at=now, **result.fields)
        try:
            self.session.add(note)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("creating note", e)

        logger.info("Note created: %s (category=%s)", note.id, note.category)
        return _to_response(note)

    async def update(self, note_id: str, fields: Mapping[str, Any]) -> NoteResponse:
        """
        Replace the supplied fields of an existing note and bump updated_at.

        Args:
            note_id: Id of the note to change.
            fields:  Only the keys the client sent; absent keys stay unchanged.

        Raises:
            ValidationError: Nothing editable supplied, or a supplied value is invalid.
            NotFoundError:   No note has this id.
            DatabaseError:   Write failed; the stored note is unchanged.
        """
        result = validate_note_fields(fields, partial=True)
        _raise_if_invalid(result)

        note = await self._load(note_id)
        for name, value in result.fields.items():
            setattr(note, name, value)

        previous = _as_utc(note.updated_at)
        now = utcnow()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        note.updated_at = now

        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("updating note", e, note_id=note_id)

        logger.info("Note updated: %s (%s)", note.id, ", ".join(sorted(result.fields)))
        return _to_response(note)

    async def delete(self, note_id: str) -> None:
        """
        Permanently remove a note.

        Raises:
            NotFoundError: No note has this id.
            DatabaseError: Delete failed.
        """
        note = await self._load(note_id)
        try:
            await self.session.delete(note)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("deleting note", e, note_id=note_id)
        logger.info("Note deleted: %s", note_id)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _load(self, note_id: str) -> Note:
        try:
            key = uuid.UUID(str(note_id))
        except ValueError:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        try:
            note = await self.session.get(Note, key)
        except SQLAlchemyError as e:
            await self._fail("fetching note", e, note_id=note_id)

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def _fail(self, action: str, error: Exception, note_id: Optional[str] = None) -> NoReturn:
        logger.error("Database error %s: %s", action, str(error), exc_info=True)
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback failed after error %s", action)
        context = {"error_type": type(error).__name__}
        if note_id is not None:
            context["note_id"] = str(note_id)
        raise DatabaseError(context=context) from error


async def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    """FastAPI dependency yielding a NoteStore bound to the request's session."""
    return NoteStore(db)
