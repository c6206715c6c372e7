"""
QuickNotes — Application Package Initializer
=============================================

What: Marks the `quicknotes` directory as a Python package.
Who:  Imported by uvicorn, pytest, and the browser client app.

Architecture Note:
    The server follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Note Store (services layer)    │  ← Validation, identity, timestamps
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The browser client lives in `quicknotes.client` and talks to the
    routes only over HTTP.
"""

__version__ = "1.0.0"
