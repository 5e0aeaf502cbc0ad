"""Pydantic data models for awa2spotify.

Scraped playlists are immutable once extracted. Every Spotify endpoint
response is decoded into its own model so shape mismatches surface as
validation failures instead of key errors deep inside the pipeline.
"""

from pydantic import BaseModel, ConfigDict, Field


class Track(BaseModel):
    """A track as listed on the source playlist page."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Track title as scraped")
    artist: str = Field(min_length=1, description="Artist credit as scraped")

    def __str__(self) -> str:
        return f"{self.name} / {self.artist}"


class SourcePlaylist(BaseModel):
    """A playlist scraped from the source service."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Playlist name")
    description: str = Field(min_length=1, description="Playlist description, 'read more' suffix removed")
    tracks: tuple[Track, ...] = Field(description="Tracks in page order")
    url: str | None = Field(default=None, description="Page the playlist was scraped from")

    def with_overrides(self, name: str | None = None, description: str | None = None) -> "SourcePlaylist":
        """Return a copy with non-empty name/description overrides applied."""
        update = {}
        if name:
            update["name"] = name
        if description:
            update["description"] = description
        return self.model_copy(update=update) if update else self


# Spotify Web API response shapes


class ExternalUrls(BaseModel):
    spotify: str


class UserProfile(BaseModel):
    """GET /me"""

    id: str


class CreatedPlaylist(BaseModel):
    """POST /users/{user_id}/playlists"""

    id: str
    external_urls: ExternalUrls

    @property
    def link(self) -> str:
        return self.external_urls.spotify


class SearchItem(BaseModel):
    uri: str
    external_urls: ExternalUrls

    @property
    def link(self) -> str:
        return self.external_urls.spotify


class SearchPage(BaseModel):
    items: list[SearchItem]


class SearchResponse(BaseModel):
    """GET /search?type=track"""

    tracks: SearchPage


class SnapshotResponse(BaseModel):
    """POST /playlists/{playlist_id}/tracks"""

    snapshot_id: str


# Pipeline results


class TrackResolution(BaseModel):
    """Outcome of searching the destination catalog for one source track."""

    track: Track
    uri: str | None = Field(default=None, description="Catalog URI when exactly one candidate matched")
    link: str | None = Field(default=None, description="Public link of the matched track")
    candidates: int = Field(ge=0, description="Number of search results returned")

    @property
    def matched(self) -> bool:
        return self.uri is not None


class PublishResult(BaseModel):
    """Result of publishing resolved tracks to a destination playlist."""

    playlist_id: str
    playlist_url: str | None = Field(default=None, description="Public link, known for created playlists")
    resolutions: list[TrackResolution] = Field(default_factory=list)

    @property
    def uris(self) -> list[str]:
        return [r.uri for r in self.resolutions if r.uri is not None]

    @property
    def missed(self) -> list[Track]:
        return [r.track for r in self.resolutions if not r.matched]
