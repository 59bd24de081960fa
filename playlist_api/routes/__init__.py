"""
Playlist API: API Routes Package
===================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - songs.py:      GET/POST /songs, GET/PUT/DELETE /songs/{id}
    - playlists.py:  GET/POST /playlists, GET/PUT/DELETE /playlists/{id},
                     POST /playlists/{playlistId}/songs/{songId}
    - health.py:     GET /health

Routes are thin: they extract path/body parameters, call a service and
choose the status code and headers. Missing resources are reported by the
services as NotFoundError and turned into 404 by the global handler.
"""

from typing import Annotated

from fastapi import Path

from playlist_api.schemas.common import ID_MAX, ID_MIN

# Path ids outside the storable range are rejected with 422 before any lookup
PathId = Annotated[int, Path(ge=ID_MIN, le=ID_MAX)]
