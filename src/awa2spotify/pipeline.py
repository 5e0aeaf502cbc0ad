"""Pipeline orchestrator for awa2spotify.

Coordinates the full flow:
1. Scrape the AWA playlist page
2. Create a Spotify playlist (create) or target an existing one (add)
3. Resolve each track through Spotify search
4. Append every resolved URI in one batch

Nothing is rolled back: a playlist created before a failed append stays
as it is.
"""

from typing import Callable

from .config import Settings, get_settings
from .logging import get_logger
from .models import PublishResult, SourcePlaylist, TrackResolution
from .sources import AwaSource, PlaylistSource
from .spotify import SpotifyClient, TrackResolver

logger = get_logger(__name__)

ResultCallback = Callable[[TrackResolution], None]


def parse_playlist_id(url: str) -> str:
    """Return the last path segment of a Spotify playlist URL, verbatim."""
    return url.split("/")[-1]


class Pipeline:
    """Main pipeline orchestrator for awa2spotify."""

    def __init__(
        self,
        settings: Settings | None = None,
        source: PlaylistSource | None = None,
        spotify: SpotifyClient | None = None,
    ):
        """Initialize the pipeline.

        Args:
            settings: Optional settings override
            source: Optional playlist source (defaults to AWA)
            spotify: Optional Spotify client (defaults to one built from the token)
        """
        self.settings = settings or get_settings()
        self._owned: list[AwaSource | SpotifyClient] = []

        if spotify is None:
            spotify = SpotifyClient(
                token=self.settings.require_token(),
                base_url=self.settings.spotify_api_url,
                timeout=self.settings.http_timeout,
            )
            self._owned.append(spotify)
        self.spotify = spotify

        if source is None:
            source = AwaSource(timeout=self.settings.http_timeout)
            self._owned.append(source)
        self.source = source

        self.resolver = TrackResolver(self.spotify, workers=self.settings.search_workers)

    def close(self) -> None:
        for resource in self._owned:
            resource.close()
        self._owned.clear()

    def __enter__(self) -> "Pipeline":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def scrape(self, url: str) -> SourcePlaylist:
        playlist = self.source.scrape(url)
        logger.info("playlist_scraped", url=url, name=playlist.name, tracks=len(playlist.tracks))
        return playlist

    def create(
        self,
        playlist: SourcePlaylist,
        on_result: ResultCallback | None = None,
    ) -> PublishResult:
        """Copy a scraped playlist into a new Spotify playlist.

        The profile lookup runs first; if it fails no playlist is created.

        Args:
            playlist: Scraped playlist, with any name/description overrides applied
            on_result: Called for each track as it is resolved

        Returns:
            PublishResult with the new playlist's ID and link
        """
        user_id = self.spotify.current_user_id()
        created = self.spotify.create_playlist(user_id, playlist.name, playlist.description)
        return self._publish(created.id, created.link, playlist, on_result)

    def add(
        self,
        playlist_id: str,
        playlist: SourcePlaylist,
        on_result: ResultCallback | None = None,
    ) -> PublishResult:
        """Append a scraped playlist's tracks to an existing Spotify playlist."""
        return self._publish(playlist_id, None, playlist, on_result)

    def _publish(
        self,
        playlist_id: str,
        playlist_url: str | None,
        playlist: SourcePlaylist,
        on_result: ResultCallback | None,
    ) -> PublishResult:
        result = PublishResult(
            playlist_id=playlist_id,
            playlist_url=playlist_url,
            resolutions=self.resolver.resolve(playlist.tracks, on_result=on_result),
        )

        logger.info(
            "publishing_tracks",
            playlist_id=playlist_id,
            resolved=len(result.uris),
            missed=len(result.missed),
        )
        self.spotify.add_items(playlist_id, result.uris)
        return result
