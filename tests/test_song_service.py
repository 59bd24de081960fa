"""
Playlist API: Song Service Tests
===================================

What:  Tests for SongService CRUD rules against a real in-memory SQLite database.
How:   Writes go through one Database.session() and reads through another, so
       assertions see committed state rather than the identity map.

What we test:
    ✅ Create then get returns the stored name/artist
    ✅ Update overwrites name/artist and ignores the body id
    ✅ Delete removes the row
    ✅ Missing ids raise NotFoundError for get/update/delete
    ✅ Duplicate ids raise ConflictError and keep the first row
"""

import pytest
from sqlalchemy.exc import IntegrityError

from playlist_api.exceptions import ConflictError, NotFoundError
from playlist_api.schemas.song import SongCreate, SongUpdate
from playlist_api.services.song_service import SongService


class TestSongServiceCreate:
    """Tests for create_song / get_song."""

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, database):
        """A created song is readable with identical fields."""
        async with database.session() as db:
            created = await self.service.create_song(
                db, SongCreate(id=7, name="Blue", artist="Joni Mitchell")
            )
        assert created.id == 7

        async with database.session() as db:
            song = await self.service.get_song(db, 7)

        assert song.name == "Blue"
        assert song.artist == "Joni Mitchell"

    @pytest.mark.asyncio
    async def test_create_duplicate_id_conflicts(self, database):
        """Second insert with the same id fails; the first row is kept."""
        async with database.session() as db:
            await self.service.create_song(db, SongCreate(id=1, name="First", artist="A"))

        with pytest.raises(ConflictError):
            async with database.session() as db:
                await self.service.create_song(db, SongCreate(id=1, name="Second", artist="B"))

        async with database.session() as db:
            song = await self.service.get_song(db, 1)
        assert song.name == "First"

    @pytest.mark.asyncio
    async def test_integrity_error_on_flush_becomes_conflict(self, mock_db_session):
        """A racing insert caught at flush time is reported as a conflict."""
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create_song(
                mock_db_session, SongCreate(id=3, name="x", artist="y")
            )

        assert exc_info.value.resource_id == 3
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_song(db_session, 404)
        assert exc_info.value.resource == "song"


class TestSongServiceList:

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        assert await self.service.list_songs(db_session) == []

    @pytest.mark.asyncio
    async def test_list_returns_all_ordered_by_id(self, database):
        async with database.session() as db:
            for song_id in (3, 1, 2):
                await self.service.create_song(
                    db, SongCreate(id=song_id, name=f"S{song_id}", artist="A")
                )

        async with database.session() as db:
            songs = await self.service.list_songs(db)

        assert [s.id for s in songs] == [1, 2, 3]


class TestSongServiceUpdate:

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    async def test_update_overwrites_name_and_artist(self, database):
        async with database.session() as db:
            await self.service.create_song(db, SongCreate(id=1, name="Old", artist="Old"))

        async with database.session() as db:
            updated = await self.service.update_song(
                db, 1, SongUpdate(name="New", artist="New Artist")
            )
        assert updated.id == 1

        async with database.session() as db:
            song = await self.service.get_song(db, 1)
        assert (song.id, song.name, song.artist) == (1, "New", "New Artist")

    @pytest.mark.asyncio
    async def test_update_ignores_body_id(self, database):
        """The path id addresses the row; a different body id changes nothing."""
        async with database.session() as db:
            await self.service.create_song(db, SongCreate(id=1, name="Old", artist="Old"))

        async with database.session() as db:
            updated = await self.service.update_song(
                db, 1, SongUpdate(id=99, name="New", artist="New")
            )
        assert updated.id == 1

        async with database.session() as db:
            with pytest.raises(NotFoundError):
                await self.service.get_song(db, 99)

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_song(db_session, 5, SongUpdate(name="n", artist="a"))


class TestSongServiceDelete:

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    async def test_delete_removes_song(self, database):
        async with database.session() as db:
            await self.service.create_song(db, SongCreate(id=1, name="n", artist="a"))

        async with database.session() as db:
            assert await self.service.delete_song(db, 1) is None

        async with database.session() as db:
            with pytest.raises(NotFoundError):
                await self.service.get_song(db, 1)

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_song(db_session, 1)
