"""
Playlist API: Playlist Route Handlers
========================================

What:  CRUD endpoints for playlists plus the add-song endpoint.
How:   Each handler delegates to `playlist_service` with the request-scoped
       session from `get_db_session`.

Status codes:
    GET    /playlists                              200 list
    GET    /playlists/{id}                         200 playlist | 404
    POST   /playlists                              201 playlist + Location | 409 | 422
    PUT    /playlists/{id}                         200 updated playlist | 404 | 422
    POST   /playlists/{playlistId}/songs/{songId}  204 | 404 (playlist or song)
    DELETE /playlists/{id}                         204 | 404
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_api.database import get_db_session
from playlist_api.routes import PathId
from playlist_api.schemas.common import ErrorResponse
from playlist_api.schemas.playlist import PlaylistCreate, PlaylistResponse, PlaylistUpdate
from playlist_api.services.playlist_service import playlist_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/playlists", tags=["Playlists"])

NOT_FOUND = {404: {"description": "Playlist not found"}}


@router.get(
    "",
    response_model=List[PlaylistResponse],
    summary="List all playlists",
)
async def list_playlists(
    db: AsyncSession = Depends(get_db_session),
) -> List[PlaylistResponse]:
    return await playlist_service.list_playlists(db)


@router.get(
    "/{playlist_id}",
    response_model=PlaylistResponse,
    responses=NOT_FOUND,
    summary="Get a single playlist by id",
)
async def get_playlist(
    playlist_id: PathId,
    db: AsyncSession = Depends(get_db_session),
) -> PlaylistResponse:
    return await playlist_service.get_playlist(db, playlist_id)


@router.post(
    "",
    response_model=PlaylistResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Playlist id already in use", "model": ErrorResponse}},
    summary="Create a playlist",
    description="Song ids in the body are stored as given; they are not checked against /songs.",
)
async def create_playlist(
    payload: PlaylistCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PlaylistResponse:
    playlist = await playlist_service.create_playlist(db, payload)
    response.headers["Location"] = f"{router.prefix}/{playlist.id}"
    return playlist


@router.put(
    "/{playlist_id}",
    response_model=PlaylistResponse,
    responses=NOT_FOUND,
    summary="Replace a playlist's name and song list",
    description="The song list in the body replaces the stored one entirely.",
)
async def update_playlist(
    playlist_id: PathId,
    payload: PlaylistUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PlaylistResponse:
    return await playlist_service.update_playlist(db, playlist_id, payload)


@router.post(
    "/{playlist_id}/songs/{song_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Playlist or song not found"}},
    summary="Add an existing song to a playlist",
    description="Appends the song id once; adding a song already in the playlist is a no-op.",
)
async def add_song_to_playlist(
    playlist_id: PathId,
    song_id: PathId,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await playlist_service.add_song(db, playlist_id, song_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{playlist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
    summary="Delete a playlist",
)
async def delete_playlist(
    playlist_id: PathId,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await playlist_service.delete_playlist(db, playlist_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
