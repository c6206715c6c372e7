"""
QuickNotes — Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id for logs and error bodies
    2. Logging: method, path, status, duration with that id
    3. GZip / CORS: FastAPI's stock middleware (API app only)
"""
