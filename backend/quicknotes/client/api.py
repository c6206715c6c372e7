"""
QuickNotes Client — Notes API Client
=====================================

What:  Async HTTP client for the five /api/notes endpoints.
How:   Thin wrapper over httpx.AsyncClient. Successful responses are parsed
       into NoteResponse; error responses raise NotesAPIError carrying the
       server's `message`, so the UI can show it verbatim.
Who:   NotesController.

No automatic retries: a failed call surfaces immediately and the user
decides whether to retry.
"""

import logging
from typing import Any, List, Mapping, Optional

import httpx

from quicknotes.config import settings
from quicknotes.middleware.request_id import REQUEST_ID_HEADER, request_id_var
from quicknotes.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Unable to reach the notes service"


class NotesAPIError(Exception):
    """
    A notes API call failed.

    Attributes:
        message:      Text safe to show the user (the server's message when it sent one)
        status_code:  HTTP status, or None when the server was never reached
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotesAPIClient:
    """
    Usage:
        async with NotesAPIClient() as api:
            notes = await api.list_notes()

    `transport` lets tests route calls straight into an ASGI app.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "NotesAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Endpoints ─────────────────────────────────────────────────────────

    async def list_notes(self) -> List[NoteResponse]:
        data = await self._request("GET", "/api/notes")
        return [NoteResponse.model_validate(item) for item in data]

    async def get_note(self, note_id: str) -> NoteResponse:
        data = await self._request("GET", f"/api/notes/{note_id}")
        return NoteResponse.model_validate(data)

    async def create_note(self, payload: Mapping[str, Any]) -> NoteResponse:
        data = await self._request("POST", "/api/notes", json=dict(payload))
        return NoteResponse.model_validate(data)

    async def update_note(self, note_id: str, payload: Mapping[str, Any]) -> NoteResponse:
        data = await self._request("PUT", f"/api/notes/{note_id}", json=dict(payload))
        return NoteResponse.model_validate(data)

    async def delete_note(self, note_id: str) -> str:
        data = await self._request("DELETE", f"/api/notes/{note_id}")
        return data.get("message", "Note deleted")

    # ── Internals ─────────────────────────────────────────────────────────

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        # Same correlation id as the page request that triggered this call
        rid = request_id_var.get("")
        headers = {REQUEST_ID_HEADER: rid} if rid else None
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, str(e))
            raise NotesAPIError(UNREACHABLE_MESSAGE) from e

        if response.is_error:
            raise NotesAPIError(_error_message(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise NotesAPIError(
                "The notes service sent an unreadable response",
                status_code=response.status_code,
            ) from e


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status {response.status_code}"
