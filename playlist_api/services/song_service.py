"""
Playlist API: Song Service
=============================

What:  CRUD operations over the `Songs` table.
How:   Each method is a single read-modify-write inside the caller's
       AsyncSession. Changes are flushed here; the session dependency
       commits (or rolls back) when the request finishes.
Who:   Called by the /songs route handlers.

Error Handling:
    - Missing id → NotFoundError (the only condition checked before acting)
    - Duplicate id on create → ConflictError
    - Any other storage failure propagates unchanged
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_api.exceptions import ConflictError, NotFoundError
from playlist_api.models.song import Song
from playlist_api.schemas.song import SongCreate, SongResponse, SongUpdate

logger = logging.getLogger(__name__)


class SongService:
    """
    Business logic layer for song operations.

    Responsibilities:
        - list_songs():  every song, ordered by id
        - get_song():    single lookup with not-found handling
        - create_song(): insert with a caller-supplied id
        - update_song(): overwrite name/artist of an existing song
        - delete_song(): remove a song (playlists are left untouched)
    """

    async def _get_or_raise(self, db: AsyncSession, song_id: int) -> Song:
        song = await db.get(Song, song_id)
        if song is None:
            logger.debug("Song %s not found", song_id)
            raise NotFoundError(resource="song", resource_id=song_id)
        return song

    async def list_songs(self, db: AsyncSession) -> List[SongResponse]:
        result = await db.execute(select(Song).order_by(Song.id))
        return [SongResponse.model_validate(song) for song in result.scalars().all()]

    async def get_song(self, db: AsyncSession, song_id: int) -> SongResponse:
        """
        Retrieve a single song by id.

        Raises:
            NotFoundError: no song with that id (→ 404)
        """
        song = await self._get_or_raise(db, song_id)
        return SongResponse.model_validate(song)

    async def create_song(self, db: AsyncSession, payload: SongCreate) -> SongResponse:
        """
        Insert a new song.

        The id is supplied by the caller. An existing row with the same id is
        reported as a conflict; the first insert wins and is left unchanged.

        Raises:
            ConflictError: a song with payload.id already exists (→ 409)
        """
        if await db.get(Song, payload.id) is not None:
            raise ConflictError(resource="song", resource_id=payload.id)

        song = Song(id=payload.id, name=payload.name, artist=payload.artist)
        db.add(song)
        try:
            await db.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same id
            raise ConflictError(
                resource="song",
                resource_id=payload.id,
                context={"original_error": type(e).__name__},
            ) from e

        logger.info("Song %s created: %s by %s", song.id, song.name, song.artist)
        return SongResponse.model_validate(song)

    async def update_song(
        self, db: AsyncSession, song_id: int, payload: SongUpdate
    ) -> SongResponse:
        """
        Overwrite name and artist of the song addressed by `song_id`.

        `payload.id` is ignored; the row is always located by the path id.

        Raises:
            NotFoundError: no song with that id (→ 404)
        """
        song = await self._get_or_raise(db, song_id)
        song.name = payload.name
        song.artist = payload.artist
        await db.flush()

        logger.info("Song %s updated", song.id)
        return SongResponse.model_validate(song)

    async def delete_song(self, db: AsyncSession, song_id: int) -> None:
        """
        Delete a song.

        Playlists referencing the id keep it in their song list.

        Raises:
            NotFoundError: no song with that id (→ 404)
        """
        song = await self._get_or_raise(db, song_id)
        await db.delete(song)
        await db.flush()
        logger.info("Song %s deleted", song_id)


song_service = SongService()
