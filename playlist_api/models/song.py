"""
Playlist API: Song SQLAlchemy Model
======================================

What:  ORM model representing the `Songs` table.
Who:   Used by SongService for CRUD operations, by PlaylistService to confirm
       a song exists before associating it, and by Database.create_schema().

Table Design:
    - id: caller-supplied integer primary key (autoincrement disabled; the
      client chooses the id and a second insert with the same id is a conflict)
    - name, artist: required strings
    - No relationship to Playlists; playlists hold song ids as plain integers
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from playlist_api.database import Base


class Song(Base):
    """
    A single song.

    Lifecycle:
        1. Created by POST /songs with an explicit id
        2. name/artist overwritten by PUT /songs/{id} (id never changes)
        3. Removed by DELETE /songs/{id}; playlists that list its id keep it
    """

    __tablename__ = "Songs"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
    )

    name: Mapped[str] = mapped_column(String, nullable=False)

    artist: Mapped[str] = mapped_column(String, nullable=False)

    def __repr__(self) -> str:
        return f"<Song(id={self.id}, name='{self.name}', artist='{self.artist}')>"
