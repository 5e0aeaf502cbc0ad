"""Spotify module initialization."""

from .client import SpotifyClient
from .resolver import TrackResolver, build_search_query, normalize_artist

__all__ = [
    "SpotifyClient",
    "TrackResolver",
    "build_search_query",
    "normalize_artist",
]
