"""
Playlist API: Song Request/Response Schemas
==============================================

What:  Pydantic models defining the JSON contract for /songs.
How:   FastAPI validates request bodies against these models (missing
       fields → 422) and serializes responses through SongResponse.

Body shape (all three models): {"id": int, "name": str, "artist": str}
    - SongCreate: id is required (ids are caller-supplied)
    - SongUpdate: id is accepted but optional; the path id is authoritative
"""

from typing import Optional

from pydantic import BaseModel, Field

from playlist_api.schemas.common import ID_MAX, ID_MIN


class SongBase(BaseModel):
    name: str = Field(description="Song title")
    artist: str = Field(description="Performing artist")


class SongCreate(SongBase):
    """Body of POST /songs."""
    id: int = Field(ge=ID_MIN, le=ID_MAX, description="Caller-chosen unique song id")


class SongUpdate(SongBase):
    """
    Body of PUT /songs/{id}.

    Only `name` and `artist` are applied. `id` is tolerated so clients can
    send back the object they fetched, but it never re-addresses the row.
    """
    id: Optional[int] = Field(default=None, ge=ID_MIN, le=ID_MAX, description="Ignored; the path id wins")


class SongResponse(SongBase):
    """A stored song as returned by every /songs endpoint."""
    id: int = Field(description="Song id")

    model_config = {"from_attributes": True}
