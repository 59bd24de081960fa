# Services package init
"""
Playlist API: Services Layer
===============================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Stateless service objects whose methods receive the request's
       AsyncSession as their first argument.

Service Inventory:
    - SongService:     list / get / create / update / delete songs
    - PlaylistService: list / get / create / update / delete playlists,
                       plus add_song (the only cross-entity check)
"""
