"""
QuickNotes — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract between client and server.
How:   FastAPI parses request bodies into these models, serializes responses
       through them, and derives the OpenAPI docs from them.
Who:   Used by route handlers, the Note Store, and the browser client.

Design Decision:
    Request bodies declare every field optional. Presence and emptiness are
    checked by `validate_note_fields`, so a missing title is answered with
    our 400 body instead of FastAPI's schema error.

    Timestamps go over the wire as camelCase (createdAt/updatedAt);
    Python code uses snake_case names.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""

    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body (required, non-empty)")
    category: Optional[str] = Field(
        default=None,
        description="One of Work, Personal, Ideas, Others. Defaults to Others.",
    )


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/notes/{id}.

    Only the keys present in the body are replaced; the route passes
    `model_dump(exclude_unset=True)` to the store.
    """

    title: Optional[str] = Field(default=None, description="New title (non-empty if present)")
    content: Optional[str] = Field(default=None, description="New body (non-empty if present)")
    category: Optional[str] = Field(default=None, description="New category label")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a stored note.

    Returned by every notes endpoint except DELETE, and parsed back by the
    browser client.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: uuid.UUID = Field(description="Server-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    category: str = Field(description="Category label")
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(alias="updatedAt", description="Last update time (UTC ISO 8601)")


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. {"message": "Note deleted"}."""

    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Note not found",
            "request_id": "1a2b3c4d"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
