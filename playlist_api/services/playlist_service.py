"""
Playlist API: Playlist Service
=================================

What:  CRUD operations over the `Playlists` table, plus song association.
How:   Same stateless pattern as SongService: every method receives the
       request's AsyncSession, flushes its change, and leaves the commit to
       the session dependency.
Who:   Called by the /playlists route handlers.

Song ids inside a playlist are opaque integers:
    - create/update store whatever list the client sends (duplicates and
      unknown ids included)
    - add_song is the only operation that checks the song exists, and the
      only one that de-duplicates
    - deleting either entity never touches the other table
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_api.exceptions import ConflictError, NotFoundError
from playlist_api.models.playlist import Playlist
from playlist_api.models.song import Song
from playlist_api.schemas.playlist import PlaylistCreate, PlaylistResponse, PlaylistUpdate

logger = logging.getLogger(__name__)


class PlaylistService:
    """
    Business logic layer for playlist operations.

    Responsibilities:
        - list_playlists(), get_playlist(), create_playlist(),
          update_playlist(), delete_playlist(): standard per-row CRUD
        - add_song(): append one existing song id, at most once
    """

    async def _get_or_raise(self, db: AsyncSession, playlist_id: int) -> Playlist:
        playlist = await db.get(Playlist, playlist_id)
        if playlist is None:
            logger.debug("Playlist %s not found", playlist_id)
            raise NotFoundError(resource="playlist", resource_id=playlist_id)
        return playlist

    async def list_playlists(self, db: AsyncSession) -> List[PlaylistResponse]:
        result = await db.execute(select(Playlist).order_by(Playlist.id))
        return [PlaylistResponse.model_validate(p) for p in result.scalars().all()]

    async def get_playlist(self, db: AsyncSession, playlist_id: int) -> PlaylistResponse:
        playlist = await self._get_or_raise(db, playlist_id)
        return PlaylistResponse.model_validate(playlist)

    async def create_playlist(
        self, db: AsyncSession, payload: PlaylistCreate
    ) -> PlaylistResponse:
        """
        Insert a new playlist with its initial song list.

        Raises:
            ConflictError: a playlist with payload.id already exists (→ 409)
        """
        if await db.get(Playlist, payload.id) is not None:
            raise ConflictError(resource="playlist", resource_id=payload.id)

        playlist = Playlist(id=payload.id, name=payload.name, songs=list(payload.songs))
        db.add(playlist)
        try:
            await db.flush()
        except IntegrityError as e:
            raise ConflictError(
                resource="playlist",
                resource_id=payload.id,
                context={"original_error": type(e).__name__},
            ) from e

        logger.info("Playlist %s created with %d songs", playlist.id, len(playlist.songs))
        return PlaylistResponse.model_validate(playlist)

    async def update_playlist(
        self, db: AsyncSession, playlist_id: int, payload: PlaylistUpdate
    ) -> PlaylistResponse:
        """
        Replace the name and the entire song list of a playlist.

        The new list is stored as given, not merged with the old one.

        Raises:
            NotFoundError: no playlist with that id (→ 404)
        """
        playlist = await self._get_or_raise(db, playlist_id)
        playlist.name = payload.name
        playlist.songs = list(payload.songs)
        await db.flush()

        logger.info("Playlist %s updated (%d songs)", playlist.id, len(playlist.songs))
        return PlaylistResponse.model_validate(playlist)

    async def delete_playlist(self, db: AsyncSession, playlist_id: int) -> None:
        playlist = await self._get_or_raise(db, playlist_id)
        await db.delete(playlist)
        await db.flush()
        logger.info("Playlist %s deleted", playlist_id)

    async def add_song(self, db: AsyncSession, playlist_id: int, song_id: int) -> None:
        """
        Associate an existing song with a playlist.

        Steps:
            1. Playlist must exist, else NotFoundError("playlist")
            2. Song must exist, else NotFoundError("song")
            3. Append song_id unless already present (repeat calls are no-ops)

        Raises:
            NotFoundError: playlist or song missing (→ 404)
        """
        playlist = await self._get_or_raise(db, playlist_id)

        if await db.get(Song, song_id) is None:
            logger.debug("Song %s not found for playlist %s", song_id, playlist_id)
            raise NotFoundError(resource="song", resource_id=song_id)

        if song_id in playlist.songs:
            logger.debug("Song %s already in playlist %s", song_id, playlist_id)
            return

        # New list object so the JSON column is marked dirty
        playlist.songs = [*playlist.songs, song_id]
        await db.flush()
        logger.info("Song %s added to playlist %s", song_id, playlist_id)


playlist_service = PlaylistService()
