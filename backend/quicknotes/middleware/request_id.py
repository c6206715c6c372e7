"""
QuickNotes — Request ID Middleware
===================================

What:  Gives each incoming request a short correlation id and echoes it back
       in the X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID when it looks like an id
       (letters, digits, '.', '_' or '-', at most 64 characters), otherwise
       generates one. The id lives in a ContextVar for loggers, error
       handlers and NotesAPIClient, and in request.state for route handlers.
Who:   Applied to every request of the API app and the client app.

The browser client forwards its own id on every API call, so one click in
the UI produces matching log lines in both processes. Error bodies carry
the same id as `request_id`.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_ACCEPTED_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: str | None) -> str:
    """The caller's id if it is safe to log and echo, else a fresh one."""
    if supplied and _ACCEPTED_ID.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
