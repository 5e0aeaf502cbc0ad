"""awa2spotify - Copy AWA playlists to Spotify.

Scrapes an AWA playlist page for its track and artist names, resolves each
track against the Spotify catalog and publishes the matches to a new or an
existing Spotify playlist.
"""

from .cli import main

__all__ = ["main"]
