"""
Playlist API: Playlist SQLAlchemy Model
==========================================

What:  ORM model representing the `Playlists` table.
Who:   Used by PlaylistService for CRUD and song association.

Table Design:
    - id: caller-supplied integer primary key
    - name: required string
    - songs: JSON array of song ids, stored in a single column

    The song list is a denormalized value, not a relationship. There is no
    foreign key to `Songs` and no cascade: ids may point at songs that never
    existed or have since been deleted. Order is preserved as written.

Change tracking:
    The plain JSON type does not detect in-place mutation (list.append).
    Writers must assign a new list to `Playlist.songs` for the change to
    be flushed.
"""

from typing import List

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from playlist_api.database import Base


class Playlist(Base):
    """
    A named, ordered list of song ids.

    Lifecycle:
        1. Created by POST /playlists with an initial (unchecked) song list
        2. Replaced wholesale by PUT /playlists/{id} (name + entire song list)
        3. Extended one id at a time by POST /playlists/{id}/songs/{songId}
        4. Removed by DELETE /playlists/{id}
    """

    __tablename__ = "Playlists"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
    )

    name: Mapped[str] = mapped_column(String, nullable=False)

    songs: Mapped[List[int]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    def __repr__(self) -> str:
        return f"<Playlist(id={self.id}, name='{self.name}', songs={self.songs})>"
