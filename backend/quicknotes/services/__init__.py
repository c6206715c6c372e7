"""
QuickNotes — Services Layer
============================

What:  Note logic sitting between routes (HTTP) and the database.

Service Inventory:
    - validation: validate_note_fields, the single create/update rule set
    - note_store: NoteStore, list/get/create/update/delete over one session
"""
