"""
QuickNotes — Notes Route Handlers
==================================

What:  The JSON REST surface under /api/notes.
How:   Each handler parses input, calls the Note Store, and returns the
       result. Errors raised by the store are mapped to status codes by the
       global exception handlers in main.py.
Who:   Called by the browser client (quicknotes.client) and any other HTTP
       consumer.

Endpoints:
    GET    /api/notes        → 200 [note, ...]           newest first
    GET    /api/notes/{id}   → 200 note | 404
    POST   /api/notes        → 201 note | 400
    PUT    /api/notes/{id}   → 200 note | 400 | 404
    DELETE /api/notes/{id}   → 200 {"message"} | 404
    Any store failure        → 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from quicknotes.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from quicknotes.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Note not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid note fields", "model": ErrorResponse}}


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses=_SERVER_ERROR,
    summary="List all notes",
    description="Returns every note, newest first by creation time.",
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[NoteResponse]:
    """
    List every note.

    What:  The whole collection, newest first. There is no paging; clients
           search and filter the list locally.
    Who:   The browser client fetches this on first visit, after every
           mutation, and on Retry.
    """
    return await store.list()


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a single note by ID",
)
async def get_note(note_id: str, store: NoteStore = Depends(get_note_store)) -> NoteResponse:
    """
    Args:
        note_id: Taken as a plain string; ids that are not well-formed UUIDs
                 are reported as 404 by the store, like any unknown id.
    """
    return await store.get(note_id)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Create a note",
    description="Title and content are required; category defaults to 'Others'.",
)
async def create_note(
    payload: NoteCreate,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    """
    Create a note.

    What:  Stores a new note and returns it with its server-assigned id and
           createdAt == updatedAt.
    How:   Every body field is optional at the schema level so that missing
           title/content produce our 400 message, not a schema error.
    """
    return await store.create(
        title=payload.title,
        content=payload.content,
        category=payload.category,
    )


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Update a note",
    description=(
        "Replaces the fields present in the body. Title and content, when sent, "
        "must not be empty. id and createdAt never change."
    ),
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    """
    Update a note in place.

    What:  Replaces the fields present in the body and bumps updatedAt.
    How:   The body is validated before the id is looked up, so an invalid
           body is a 400 even for an unknown id.
    """
    # Only keys the client actually sent take part in the update
    return await store.update(note_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a note",
)
async def delete_note(note_id: str, store: NoteStore = Depends(get_note_store)) -> MessageResponse:
    """Permanently remove a note. There is no soft delete or undo."""
    await store.delete(note_id)
    return MessageResponse(message="Note deleted")
