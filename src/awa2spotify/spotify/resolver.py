"""Resolve scraped tracks to Spotify catalog URIs via search."""

import re
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable

from ..logging import get_logger
from ..models import Track, TrackResolution
from .client import SpotifyClient

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_artist(artist: str) -> str:
    """Rewrite an artist credit into something Spotify search can match.

    Multi-artist credits like "Cymbals/古市 コータロー/内田 晴元" find nothing
    until the slashes become spaces, and "Tomggg feat. Raychel Jay" finds
    nothing until "feat." is dropped. The two substitutions run in that order.
    """
    return artist.replace("/", " ").replace("feat.", "")


def build_search_query(track: Track) -> str:
    query = f"{track.name} {normalize_artist(track.artist)}"
    return _WHITESPACE.sub(" ", query).strip()


class TrackResolver:
    """Matches tracks against the Spotify catalog.
    
    A track is matched only when search returns exactly one result; anything
    else is a miss that gets reported and skipped. Transport and decode
    errors are not misses and propagate to the caller.
    """

    SEARCH_LIMIT = 1

    def __init__(self, client: SpotifyClient, workers: int = 1):
        """Initialize the resolver.
        
        Args:
            client: Authenticated Spotify client
            workers: Number of concurrent searches (1 = sequential)
        """
        self.client = client
        self.workers = max(1, workers)

    def resolve_one(self, track: Track) -> TrackResolution:
        query = build_search_query(track)
        items = self.client.search_tracks(query, limit=self.SEARCH_LIMIT)
        logger.debug("search_result", track=str(track), query=query, count=len(items))

        if len(items) != 1:
            logger.info("track_not_found", track=str(track), candidates=len(items))
            return TrackResolution(track=track, candidates=len(items))

        item = items[0]
        logger.debug("track_resolved", track=str(track), uri=item.uri, link=item.link)
        return TrackResolution(track=track, uri=item.uri, link=item.link, candidates=1)

    def resolve(
        self,
        tracks: Iterable[Track],
        on_result: Callable[[TrackResolution], None] | None = None,
    ) -> list[TrackResolution]:
        """Resolve every track, preserving source order.
        
        Args:
            tracks: Tracks to look up
            on_result: Called once per track, in source order
            
        Returns:
            One TrackResolution per input track
        """
        tracks = list(tracks)
        results: list[TrackResolution] = []

        if self.workers == 1 or len(tracks) <= 1:
            for track in tracks:
                results.append(self._report(self.resolve_one(track), on_result))
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                # map yields in submission order regardless of completion order
                for resolution in pool.map(self.resolve_one, tracks):
                    results.append(self._report(resolution, on_result))

        logger.info(
            "tracks_resolved",
            total=len(results),
            matched=sum(1 for r in results if r.matched),
        )
        return results

    @staticmethod
    def _report(
        resolution: TrackResolution,
        on_result: Callable[[TrackResolution], None] | None,
    ) -> TrackResolution:
        if on_result is not None:
            on_result(resolution)
        return resolution
