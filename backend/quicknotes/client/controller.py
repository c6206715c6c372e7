"""
QuickNotes Client — Controller
===============================

What:  Runs the page's actions (load, submit, delete) against the API.
How:   Holds the current ViewState, moves it with the pure functions from
       `quicknotes.client.state`, and calls NotesAPIClient in between.
       Every successful mutation is followed by a full re-fetch of the list.
       `notes_current` tells the caller whether state.notes still matches
       the server, so the page can keep serving it without a request.
Who:   The HTML routes in quicknotes.client.web.
"""

import logging
from typing import Optional

from quicknotes.client.api import NotesAPIClient, NotesAPIError
from quicknotes.client.state import (
    ViewState,
    delete_finished,
    load_failed,
    notes_loaded,
    prepare_submission,
    request_failed,
    start_loading,
    submission_succeeded,
)

logger = logging.getLogger(__name__)


class NotesController:

    def __init__(
        self,
        api: NotesAPIClient,
        state: Optional[ViewState] = None,
        notes_current: bool = False,
    ):
        self.api = api
        self.state = state or ViewState()
        # True while state.notes is known to match the server
        self.notes_current = notes_current

    async def load(self) -> ViewState:
        """Fetch all notes into the cached list."""
        self.state = start_loading(self.state)
        try:
            notes = await self.api.list_notes()
        except NotesAPIError as e:
            logger.warning("Loading notes failed: %s", e.message)
            self.state = load_failed(self.state)
            self.notes_current = False
        else:
            self.state = notes_loaded(self.state, notes)
            self.notes_current = True
        return self.state

    async def submit(self) -> ViewState:
        """
        Send the draft as a create (no edit id) or update, then re-fetch.

        A blank title or content never leaves the client. On a failed
        request the draft is kept and the server's message is shown.
        """
        self.state, submission = prepare_submission(self.state)
        if submission is None:
            return self.state

        self.notes_current = False
        try:
            if submission.note_id is None:
                await self.api.create_note(submission.payload)
            else:
                await self.api.update_note(submission.note_id, submission.payload)
        except NotesAPIError as e:
            self.state = request_failed(self.state, e.message)
            return self.state

        self.state = submission_succeeded(self.state)
        return await self.load()

    async def delete(self) -> ViewState:
        """Delete the note awaiting confirmation, then re-fetch."""
        note_id = self.state.confirm_delete
        if note_id is None:
            return self.state

        self.notes_current = False
        self.state = start_loading(self.state)
        try:
            await self.api.delete_note(note_id)
        except NotesAPIError as e:
            self.state = request_failed(delete_finished(self.state), e.message)
            return self.state

        self.state = delete_finished(self.state)
        return await self.load()
