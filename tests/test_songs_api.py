"""
Playlist API: /songs Endpoint Tests
======================================

What:  HTTP-level tests for the song routes.
How:   HTTPX AsyncClient over ASGITransport against an app bound to a fresh
       in-memory database.
"""

import asyncio

import pytest


class TestSongsScenario:

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_client, sample_song_data):
        """POST → GET → PUT → DELETE → GET (404)."""
        response = await test_client.post("/songs", json=sample_song_data)
        assert response.status_code == 201
        assert response.json() == sample_song_data
        assert response.headers["location"] == "/songs/1"

        response = await test_client.get("/songs/1")
        assert response.status_code == 200
        assert response.json() == sample_song_data

        response = await test_client.put(
            "/songs/1", json={"id": 1, "name": "New", "artist": "New"}
        )
        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "New", "artist": "New"}

        response = await test_client.delete("/songs/1")
        assert response.status_code == 204
        assert response.content == b""

        response = await test_client.get("/songs/1")
        assert response.status_code == 404


class TestSongsList:

    @pytest.mark.asyncio
    async def test_empty_initially(self, test_client):
        response = await test_client.get("/songs")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_lists_created_songs(self, test_client, sample_song_data):
        await test_client.post("/songs", json=sample_song_data)
        await test_client.post("/songs", json={"id": 2, "name": "Other", "artist": "B"})

        response = await test_client.get("/songs")

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Test Song", "Other"]


class TestSongsErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, body",
        [("get", None), ("put", {"id": 9, "name": "n", "artist": "a"}), ("delete", None)],
    )
    async def test_missing_song_returns_empty_404(self, test_client, method, body):
        kwargs = {"json": body} if body is not None else {}
        response = await test_client.request(method.upper(), "/songs/9", **kwargs)
        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_duplicate_id_returns_409(self, test_client, sample_song_data):
        await test_client.post("/songs", json=sample_song_data)

        response = await test_client.post(
            "/songs", json={**sample_song_data, "name": "Impostor"}
        )

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"
        assert (await test_client.get("/songs/1")).json()["name"] == "Test Song"

    @pytest.mark.asyncio
    async def test_missing_required_field_returns_422(self, test_client):
        response = await test_client.post("/songs", json={"id": 1, "name": "No Artist"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_non_integer_path_id_returns_422(self, test_client):
        response = await test_client.get("/songs/abc")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_put_without_body_id_uses_path_id(self, test_client, sample_song_data):
        await test_client.post("/songs", json=sample_song_data)

        response = await test_client.put("/songs/1", json={"name": "X", "artist": "Y"})

        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "X", "artist": "Y"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_path_id_beyond_64_bits_returns_422(self, test_client, method):
        kwargs = {"json": {"name": "n", "artist": "a"}} if method == "PUT" else {}
        response = await test_client.request(method, "/songs/99999999999999999999", **kwargs)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_body_id_beyond_64_bits_returns_422(self, test_client):
        response = await test_client.post(
            "/songs", json={"id": 2**70, "name": "n", "artist": "a"}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_largest_64_bit_id_is_accepted(self, test_client):
        big = 2**63 - 1
        response = await test_client.post("/songs", json={"id": big, "name": "n", "artist": "a"})

        assert response.status_code == 201
        assert (await test_client.get(f"/songs/{big}")).json()["id"] == big


class TestSongsConcurrency:

    @pytest.mark.asyncio
    async def test_concurrent_creates_survive_failing_requests(self, test_client):
        """A 404 rolled back mid-flight must not discard another request's insert."""
        creates = [
            test_client.post("/songs", json={"id": i, "name": f"s{i}", "artist": "a"})
            for i in range(1, 21)
        ]
        misses = [test_client.get(f"/songs/{1000 + i}") for i in range(20)]

        responses = await asyncio.gather(*creates, *misses)

        assert [r.status_code for r in responses[:20]] == [201] * 20
        assert [r.status_code for r in responses[20:]] == [404] * 20
        listed = (await test_client.get("/songs")).json()
        assert [s["id"] for s in listed] == list(range(1, 21))
