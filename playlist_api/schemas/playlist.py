"""
Playlist API: Playlist Request/Response Schemas
==================================================

What:  Pydantic models defining the JSON contract for /playlists.

Body shape: {"id": int, "name": str, "songs": [int, ...]}
    - `songs` defaults to [] when omitted
    - Song ids are not checked against the Songs table here or in the
      service; only POST /playlists/{id}/songs/{songId} verifies a song exists
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from playlist_api.schemas.common import ID_MAX, ID_MIN


class PlaylistBase(BaseModel):
    name: str = Field(description="Playlist name")
    songs: List[int] = Field(
        default_factory=list,
        description="Ordered song ids (not validated against existing songs)",
    )


class PlaylistCreate(PlaylistBase):
    """Body of POST /playlists."""
    id: int = Field(ge=ID_MIN, le=ID_MAX, description="Caller-chosen unique playlist id")


class PlaylistUpdate(PlaylistBase):
    """Body of PUT /playlists/{id}. Replaces name and the entire song list."""
    id: Optional[int] = Field(default=None, ge=ID_MIN, le=ID_MAX, description="Ignored; the path id wins")


class PlaylistResponse(PlaylistBase):
    id: int = Field(description="Playlist id")

    model_config = {"from_attributes": True}
