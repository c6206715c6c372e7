"""
QuickNotes — Route Package
===========================

Route Inventory:
    - notes.py:  CRUD endpoints under /api/notes
    - health.py: GET /health (store connectivity, uptime)

Routes handle HTTP only; validation, identity and timestamps live in the
Note Store (quicknotes.services.note_store).
"""
