"""
QuickNotes Client — HTML Front End
===================================

What:  The browser-facing notes page: list, search/filter, create/edit form,
       delete confirmation, theme toggle.
How:   A separate FastAPI app rendering one Jinja2 template. It reaches the
       notes only through the JSON API (NotesAPIClient over HTTP), never the
       database. View settings (search, category filter, theme, edit and
       confirm targets) travel in the query string.
Who:   Served by `python -m quicknotes.client` or
       `uvicorn quicknotes.client.web:app`.

Routes:
    GET  /               list page; ?q=&category=&theme=&edit=<id>&confirm=<id>&refresh=1
    POST /submit         create or update from the form, then redirect (303)
    POST /delete/{id}    delete after confirmation, then redirect (303)

Note list cache:
    The app keeps the last list fetched from the API (NoteListCache).
    Searching, filtering, switching theme, opening the edit form or the
    delete modal all render from that copy without calling the API. The
    copy is replaced after every submit or delete and dropped whenever the
    API reports a failure; `refresh=1` (the Retry link) forces a fetch.

A failed submit or delete re-renders the page with the error and the
user's draft intact instead of redirecting.
"""

import dataclasses
import logging
from contextlib import asynccontextmanager
from functools import partial
from pathlib import Path
from typing import AsyncGenerator, Optional, Tuple
from urllib.parse import urlencode

import httpx
import uvicorn
from fastapi import Depends, FastAPI, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.routing import APIRouter
from fastapi.templating import Jinja2Templates

from quicknotes.client.api import NotesAPIClient
from quicknotes.client.controller import NotesController
from quicknotes.client.state import (
    ALL_CATEGORIES,
    CATEGORY_FILTERS,
    Draft,
    ViewState,
    edit_note,
    filtered_notes,
    find_note,
    notes_loaded,
    request_delete,
    set_filter,
    set_search,
    toggle_theme,
)
from quicknotes.config import settings
from quicknotes.logging_config import setup_logging
from quicknotes.middleware.logging import RequestLoggingMiddleware
from quicknotes.middleware.request_id import RequestIDMiddleware
from quicknotes.models.category import Category
from quicknotes.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter()


class NoteListCache:
    """The client app's copy of GET /api/notes, or None when it must be fetched."""

    def __init__(self) -> None:
        self.notes: Optional[Tuple[NoteResponse, ...]] = None

    def update_from(self, controller: NotesController) -> None:
        """Keep the controller's list if it matches the server, else forget it."""
        if controller.notes_current:
            self.notes = controller.state.notes
        else:
            self.notes = None


# ── View helpers ──────────────────────────────────────────────────────────

def view_from_params(
    q: str = "",
    category: str = ALL_CATEGORIES,
    theme: str = "light",
    confirm: Optional[str] = None,
) -> ViewState:
    state = set_filter(set_search(ViewState(), q), category)
    if theme == "dark":
        state = toggle_theme(state)
    if confirm:
        state = request_delete(state, confirm)
    return state


def view_url(state: ViewState, **overrides: Optional[str]) -> str:
    """
    URL of the list page showing `state`'s search, filter, theme and edit
    target, with `overrides` (q, category, theme, edit, confirm, refresh)
    applied. None drops a key.
    """
    params = {
        "q": state.search_query or None,
        "category": state.filter_category if state.filter_category != ALL_CATEGORIES else None,
        "theme": "dark" if state.dark_mode else None,
        "edit": state.draft.edit_id,
    }
    params.update(overrides)
    query = urlencode({key: value for key, value in params.items() if value})
    return f"/?{query}" if query else "/"


def render(request: Request, state: ViewState, status_code: int = status.HTTP_200_OK) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "state": state,
            "notes": filtered_notes(state),
            "filters": CATEGORY_FILTERS,
            "choices": Category.labels(),
            "view_url": partial(view_url, state),
        },
        status_code=status_code,
    )


async def get_api_client(request: Request) -> AsyncGenerator[NotesAPIClient, None]:
    async with NotesAPIClient(
        base_url=request.app.state.api_base_url,
        transport=request.app.state.api_transport,
    ) as api:
        yield api


def get_note_cache(request: Request) -> NoteListCache:
    return request.app.state.note_cache


def _controller(api: NotesAPIClient, state: ViewState, cache: NoteListCache) -> NotesController:
    """A controller starting from the cached list when there is one."""
    if cache.notes is None:
        return NotesController(api, state)
    return NotesController(api, notes_loaded(state, cache.notes), notes_current=True)


# ── Routes ────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    q: str = "",
    category: str = ALL_CATEGORIES,
    theme: str = "light",
    edit: Optional[str] = None,
    confirm: Optional[str] = None,
    refresh: bool = False,
    api: NotesAPIClient = Depends(get_api_client),
    cache: NoteListCache = Depends(get_note_cache),
) -> HTMLResponse:
    """
    Render the notes page.

    What:  List, form and modal for the view described by the query string.
    How:   Served from the cached list; the API is only asked when nothing is
           cached yet or `refresh` is set.
    """
    controller = _controller(api, view_from_params(q, category, theme, confirm), cache)
    if refresh or not controller.notes_current:
        await controller.load()
        cache.update_from(controller)
    state = controller.state

    if edit:
        note = find_note(state, edit)
        if note is not None:
            state = edit_note(state, note)

    return render(request, state)


@router.post("/submit", response_class=HTMLResponse)
async def submit(
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    category: str = Form(""),
    edit_id: str = Form(""),
    q: str = Form(""),
    filter_category: str = Form(ALL_CATEGORIES),
    theme: str = Form("light"),
    api: NotesAPIClient = Depends(get_api_client),
    cache: NoteListCache = Depends(get_note_cache),
):
    """
    Create a note, or update the one named by `edit_id`.

    What:  Handles the note form.
    How:   Blank fields are answered locally. Otherwise the API is called and
           the list re-fetched; success redirects back to the same view.
    """
    draft = Draft(title=title, content=content, category=category, edit_id=edit_id or None)
    state = dataclasses.replace(view_from_params(q, filter_category, theme), draft=draft)
    controller = _controller(api, state, cache)

    state = await controller.submit()
    cache.update_from(controller)
    if state.error:
        return render(request, await _with_notes(controller, cache))

    return RedirectResponse(view_url(state), status_code=status.HTTP_303_SEE_OTHER)


@router.post("/delete/{note_id}", response_class=HTMLResponse)
async def delete(
    request: Request,
    note_id: str,
    q: str = Form(""),
    filter_category: str = Form(ALL_CATEGORIES),
    theme: str = Form("light"),
    api: NotesAPIClient = Depends(get_api_client),
    cache: NoteListCache = Depends(get_note_cache),
):
    """
    Delete a note; only posted from the confirmation modal.

    How:   Deletes through the API, re-fetches, and redirects back to the
           same view. A failure re-renders with the server's message.
    """
    state = view_from_params(q, filter_category, theme, confirm=note_id)
    controller = _controller(api, state, cache)

    state = await controller.delete()
    cache.update_from(controller)
    if state.error:
        return render(request, await _with_notes(controller, cache))

    return RedirectResponse(view_url(state), status_code=status.HTTP_303_SEE_OTHER)


async def _with_notes(controller: NotesController, cache: NoteListCache) -> ViewState:
    """
    The controller's state with an up-to-date list next to the error
    already on screen. Re-fetches only when the list may be stale.
    """
    if controller.notes_current:
        return controller.state
    error = controller.state.error
    await controller.load()
    cache.update_from(controller)
    return dataclasses.replace(controller.state, error=error)


# ── Application factory ──────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("QuickNotes client using API at %s", app.state.api_base_url)
    yield


def create_client_app(
    api_base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the HTML front end.

    Args:
        api_base_url: Where the JSON API lives (default: settings.api_base_url)
        transport:    Optional httpx transport, e.g. ASGITransport in tests
    """
    app = FastAPI(title="QuickNotes", docs_url=None, redoc_url=None, lifespan=lifespan)
    app.state.api_base_url = api_base_url or settings.api_base_url
    app.state.api_transport = transport
    app.state.note_cache = NoteListCache()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(router)
    return app


app = create_client_app()


def run() -> None:
    uvicorn.run(
        "quicknotes.client.web:app",
        host=settings.host,
        port=settings.client_port,
        log_level=settings.log_level.lower(),
    )
