"""
Playlist API: Health Check Tests
"""

from unittest.mock import MagicMock, patch

import pytest

from playlist_api import __version__


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__

    @pytest.mark.asyncio
    async def test_unreachable_database_is_unhealthy(self, test_client, database):
        broken_engine = MagicMock()
        broken_engine.connect.side_effect = OSError("database is down")

        with patch.object(database, "engine", broken_engine):
            response = await test_client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
