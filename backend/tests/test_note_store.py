"""
QuickNotes — Note Store Tests
==============================

What:  Tests for NoteStore (list, get, create, update, delete).
How:   Most tests run against a real SQLite file through aiosqlite; failure
       paths use the mock session from conftest.

What we test:
    ✅ Create assigns id and equal timestamps, defaults category
    ✅ List is newest-first
    ✅ Update changes only supplied fields and strictly bumps updated_at
    ✅ Failed validation / unknown ids leave the store unchanged
    ✅ Delete removes the note permanently
    ✅ SQLAlchemy errors become DatabaseError after a rollback
"""

import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from quicknotes.exceptions import DatabaseError, NotFoundError, ValidationError
from quicknotes.models.note import Note
from quicknotes.services.note_store import NoteStore


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_assigns_identity_and_timestamps(self, store):
        note = await store.create("Meeting", "Discuss Q3 roadmap", "Work")

        assert isinstance(note.id, uuid.UUID)
        assert note.title == "Meeting"
        assert note.content == "Discuss Q3 roadmap"
        assert note.category == "Work"
        assert note.created_at == note.updated_at
        assert note.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_without_category_uses_others(self, store):
        note = await store.create("Idea", "Build a birdhouse")
        assert note.category == "Others"

    @pytest.mark.asyncio
    async def test_create_blank_title_persists_nothing(self, store):
        with pytest.raises(ValidationError) as exc_info:
            await store.create("   ", "content")

        assert exc_info.value.message == "Title and content are required"
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_create_unknown_category(self, store):
        with pytest.raises(ValidationError):
            await store.create("T", "C", "Groceries")


class TestList:

    @pytest.mark.asyncio
    async def test_empty_store(self, store):
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_newest_first(self, store):
        first = await store.create("First", "one")
        second = await store.create("Second", "two")
        third = await store.create("Third", "three")

        notes = await store.list()

        assert [n.id for n in notes] == [third.id, second.id, first.id]


class TestGet:

    @pytest.mark.asyncio
    async def test_get_returns_created_note(self, store):
        created = await store.create("Shopping", "Milk", "Personal")
        fetched = await store.get(str(created.id))
        assert fetched == created

    @pytest.mark.asyncio
    async def test_unknown_id(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await store.get(str(uuid.uuid4()))
        assert exc_info.value.message == "Note not found"

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.get("not-a-uuid")


class TestUpdate:

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, store):
        created = await store.create("Shopping", "Milk", "Personal")

        updated = await store.update(str(created.id), {"content": "Milk, eggs"})

        assert updated.id == created.id
        assert updated.title == "Shopping"
        assert updated.content == "Milk, eggs"
        assert updated.category == "Personal"
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_updated_at_strictly_increases_on_repeat(self, store):
        created = await store.create("T", "C")
        first = await store.update(str(created.id), {"title": "T1"})
        second = await store.update(str(created.id), {"title": "T2"})
        assert second.updated_at > first.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_category_is_normalized(self, store):
        created = await store.create("T", "C")
        updated = await store.update(str(created.id), {"category": "ideas"})
        assert updated.category == "Ideas"

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_note_unchanged(self, store):
        created = await store.create("T", "C", "Work")

        with pytest.raises(ValidationError):
            await store.update(str(created.id), {"title": ""})

        assert await store.get(str(created.id)) == created

    @pytest.mark.asyncio
    async def test_empty_update(self, store):
        created = await store.create("T", "C")
        with pytest.raises(ValidationError):
            await store.update(str(created.id), {})

    @pytest.mark.asyncio
    async def test_unknown_id(self, store):
        await store.create("T", "C")
        with pytest.raises(NotFoundError):
            await store.update(str(uuid.uuid4()), {"title": "X"})
        assert [n.title for n in await store.list()] == ["T"]


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_note(self, store):
        keep = await store.create("Keep", "me")
        gone = await store.create("Drop", "me")

        await store.delete(str(gone.id))

        assert [n.id for n in await store.list()] == [keep.id]
        with pytest.raises(NotFoundError):
            await store.get(str(gone.id))

    @pytest.mark.asyncio
    async def test_delete_twice(self, store):
        note = await store.create("T", "C")
        await store.delete(str(note.id))
        with pytest.raises(NotFoundError):
            await store.delete(str(note.id))


class TestDatabaseFailures:
    """SQLAlchemy errors must never leak past the store."""

    @pytest.mark.asyncio
    async def test_list_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await NoteStore(mock_db_session).list()

        assert exc_info.value.message == "Server error"
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_commit_failure(self, mock_db_session):
        mock_db_session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

        with pytest.raises(DatabaseError):
            await NoteStore(mock_db_session).create("T", "C")

        mock_db_session.add.assert_called_once()
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_failure(self, mock_db_session):
        mock_db_session.get.side_effect = OperationalError("SELECT", {}, Exception("timeout"))

        with pytest.raises(DatabaseError):
            await NoteStore(mock_db_session).get(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_delete_failure(self, mock_db_session, sample_note_data):
        mock_db_session.get.return_value = MagicMock(spec=Note, **sample_note_data)
        mock_db_session.commit.side_effect = OperationalError("DELETE", {}, Exception("locked"))

        with pytest.raises(DatabaseError):
            await NoteStore(mock_db_session).delete(str(sample_note_data["id"]))

        mock_db_session.delete.assert_awaited_once()
        mock_db_session.rollback.assert_awaited_once()
