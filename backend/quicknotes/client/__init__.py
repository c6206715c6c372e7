"""
QuickNotes Client
==================

The browser front end. It talks to the notes API over HTTP only.

Modules:
    - state:      ViewState and the pure functions that update it
    - api:        NotesAPIClient (httpx) for /api/notes
    - controller: NotesController, runs load/submit/delete
    - web:        FastAPI + Jinja2 page rendering the view
"""
