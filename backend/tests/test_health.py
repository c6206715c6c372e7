"""
QuickNotes — Health Check Tests
================================

What:  Tests for GET /health.
How:   Real SQLite store for the healthy path, a patched engine for the
       unreachable one.
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from quicknotes import __version__


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == __version__
        assert data["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_database_unreachable(self, test_client):
        broken = MagicMock()
        broken.connect.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        with patch("quicknotes.routes.health.engine", broken):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"
