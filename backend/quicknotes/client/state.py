"""
QuickNotes Client — View State
===============================

What:  Everything the notes page shows, as one immutable `ViewState`, plus
       the pure functions that move it from one state to the next.
How:   Each function takes a ViewState (and an input) and returns a new one
       via dataclasses.replace. None of them touch the network; the
       controller calls the API and feeds results back in.
Who:   NotesController and the HTML routes in quicknotes.client.web.

State Shape:
    notes            cached copy of GET /api/notes (replaced after every
                     mutation, never patched optimistically)
    draft            the form: empty (create mode) or filled from a note
                     (edit mode, remembered by `edit_id`)
    error            message shown above the form, with a Retry affordance
    is_loading       a request is in flight (controller-side; the page shows
                     its own busy indicator while the browser waits)
    search_query     free-text filter, local only
    filter_category  "All" or one category label, local only
    dark_mode        display-only theme flag
    confirm_delete   id awaiting confirmation in the delete modal
"""

import dataclasses
from typing import Iterable, List, Optional, Tuple

from quicknotes.models.category import DEFAULT_CATEGORY, Category
from quicknotes.schemas.note import NoteResponse

ALL_CATEGORIES = "All"
CATEGORY_FILTERS: Tuple[str, ...] = (ALL_CATEGORIES, *Category.labels())

LOAD_ERROR_MESSAGE = "Unable to load notes. Please try again."
REQUIRED_MESSAGE = "Title and content are required"


@dataclasses.dataclass(frozen=True)
class Draft:
    """The create/edit form. An empty category means "not chosen yet"."""

    title: str = ""
    content: str = ""
    category: str = ""
    edit_id: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.edit_id is not None


@dataclasses.dataclass(frozen=True)
class Submission:
    """A validated draft, ready to be sent as POST (note_id None) or PUT."""

    payload: dict
    note_id: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class ViewState:
    notes: Tuple[NoteResponse, ...] = ()
    draft: Draft = Draft()
    error: Optional[str] = None
    is_loading: bool = False
    search_query: str = ""
    filter_category: str = ALL_CATEGORIES
    dark_mode: bool = False
    confirm_delete: Optional[str] = None


# ── Loading ───────────────────────────────────────────────────────────────

def start_loading(state: ViewState) -> ViewState:
    return dataclasses.replace(state, is_loading=True)


def notes_loaded(state: ViewState, notes: Iterable[NoteResponse]) -> ViewState:
    return dataclasses.replace(state, notes=tuple(notes), error=None, is_loading=False)


def load_failed(state: ViewState, message: str = LOAD_ERROR_MESSAGE) -> ViewState:
    """The cached list is kept; the page offers Retry."""
    return dataclasses.replace(state, error=message, is_loading=False)


def request_failed(state: ViewState, message: str) -> ViewState:
    return dataclasses.replace(state, error=message, is_loading=False)


# ── Draft form ────────────────────────────────────────────────────────────

def set_draft_field(state: ViewState, name: str, value: str) -> ViewState:
    if name not in ("title", "content", "category"):
        raise ValueError(f"Unknown draft field '{name}'")
    return dataclasses.replace(state, draft=dataclasses.replace(state.draft, **{name: value}))


def edit_note(state: ViewState, note: NoteResponse) -> ViewState:
    """Switch the form to edit mode, pre-filled from `note`."""
    draft = Draft(
        title=note.title,
        content=note.content,
        category=note.category or "",
        edit_id=str(note.id),
    )
    return dataclasses.replace(state, draft=draft)


def clear_form(state: ViewState) -> ViewState:
    """Back to an empty create-mode form; also dismisses the error."""
    return dataclasses.replace(state, draft=Draft(), error=None)


def prepare_submission(state: ViewState) -> Tuple[ViewState, Optional[Submission]]:
    """
    Validate the draft before anything is sent.

    Returns:
        (state with an error, None) when title or content is blank, otherwise
        (loading state, Submission). The category falls back to "Others".
    """
    draft = state.draft
    if not draft.title.strip() or not draft.content.strip():
        return dataclasses.replace(state, error=REQUIRED_MESSAGE), None

    payload = {
        "title": draft.title,
        "content": draft.content,
        "category": draft.category or DEFAULT_CATEGORY,
    }
    return start_loading(state), Submission(payload=payload, note_id=draft.edit_id)


def submission_succeeded(state: ViewState) -> ViewState:
    return dataclasses.replace(state, draft=Draft(), error=None, is_loading=False)


# ── Delete confirmation ───────────────────────────────────────────────────

def request_delete(state: ViewState, note_id: str) -> ViewState:
    """Open the confirmation modal; nothing is deleted yet."""
    return dataclasses.replace(state, confirm_delete=note_id)


def cancel_delete(state: ViewState) -> ViewState:
    return dataclasses.replace(state, confirm_delete=None)


def delete_finished(state: ViewState) -> ViewState:
    return dataclasses.replace(state, confirm_delete=None, is_loading=False)


# ── Display ───────────────────────────────────────────────────────────────

def toggle_theme(state: ViewState) -> ViewState:
    return dataclasses.replace(state, dark_mode=not state.dark_mode)


def set_search(state: ViewState, query: str) -> ViewState:
    return dataclasses.replace(state, search_query=query)


def set_filter(state: ViewState, category: str) -> ViewState:
    if category not in CATEGORY_FILTERS:
        category = ALL_CATEGORIES
    return dataclasses.replace(state, filter_category=category)


def matches(note: NoteResponse, query: str, category: str) -> bool:
    """Case-insensitive substring on title or content, AND the category filter."""
    needle = query.lower()
    matches_search = needle in note.title.lower() or needle in note.content.lower()
    matches_category = category == ALL_CATEGORIES or note.category == category
    return matches_search and matches_category


def filtered_notes(state: ViewState) -> List[NoteResponse]:
    return [
        note
        for note in state.notes
        if matches(note, state.search_query, state.filter_category)
    ]


def find_note(state: ViewState, note_id: str) -> Optional[NoteResponse]:
    for note in state.notes:
        if str(note.id) == note_id:
            return note
    return None
