"""
QuickNotes — Logging Configuration
===================================

What:  One logging setup shared by the API server and the browser client.
When:  Called once from each app's lifespan, before anything else logs.

Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
"""

import logging
import sys

from quicknotes.config import settings


def setup_logging() -> None:
    """Configure the root logger from settings.log_level, writing to stdout."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Per-operation chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
