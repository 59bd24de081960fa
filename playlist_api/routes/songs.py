"""
Playlist API: Song Route Handlers
====================================

What:  The five CRUD endpoints for songs.
How:   Each handler delegates to `song_service` with the request-scoped
       session from `get_db_session`.

Status codes:
    GET    /songs        200 list
    GET    /songs/{id}   200 song | 404
    POST   /songs        201 song + Location | 409 | 422
    PUT    /songs/{id}   200 updated song | 404 | 422
    DELETE /songs/{id}   204 | 404
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_api.database import get_db_session
from playlist_api.routes import PathId
from playlist_api.schemas.common import ErrorResponse
from playlist_api.schemas.song import SongCreate, SongResponse, SongUpdate
from playlist_api.services.song_service import song_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/songs", tags=["Songs"])

NOT_FOUND = {404: {"description": "Song not found"}}


@router.get(
    "",
    response_model=List[SongResponse],
    summary="List all songs",
)
async def list_songs(db: AsyncSession = Depends(get_db_session)) -> List[SongResponse]:
    return await song_service.list_songs(db)


@router.get(
    "/{song_id}",
    response_model=SongResponse,
    responses=NOT_FOUND,
    summary="Get a single song by id",
)
async def get_song(song_id: PathId, db: AsyncSession = Depends(get_db_session)) -> SongResponse:
    return await song_service.get_song(db, song_id)


@router.post(
    "",
    response_model=SongResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Song id already in use", "model": ErrorResponse}},
    summary="Create a song",
)
async def create_song(
    payload: SongCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> SongResponse:
    """
    Create a song with a caller-supplied id.

    The Location header points at the new resource, e.g. `/songs/1`.
    """
    song = await song_service.create_song(db, payload)
    response.headers["Location"] = f"{router.prefix}/{song.id}"
    return song


@router.put(
    "/{song_id}",
    response_model=SongResponse,
    responses=NOT_FOUND,
    summary="Replace a song's name and artist",
)
async def update_song(
    song_id: PathId,
    payload: SongUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> SongResponse:
    """Any `id` in the body is ignored; the song is addressed by the path."""
    return await song_service.update_song(db, song_id, payload)


@router.delete(
    "/{song_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
    summary="Delete a song",
)
async def delete_song(song_id: PathId, db: AsyncSession = Depends(get_db_session)) -> Response:
    await song_service.delete_song(db, song_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
