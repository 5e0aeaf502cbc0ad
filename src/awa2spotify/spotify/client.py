"""Spotify Web API client for playlist creation.

Handles:
- Bearer-token authentication on every request
- Current user lookup
- Track search
- Playlist creation and track appends

The token is used as given: there is no refresh, retry or rate-limit
handling. Any non-2xx response raises TransportError before the body is
decoded into a typed result.
"""

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import DecodeError, TransportError
from ..logging import get_logger
from ..models import CreatedPlaylist, SearchItem, SearchResponse, SnapshotResponse, UserProfile

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SpotifyClient:
    """Spotify API client for awa2spotify.
    
    Wraps httpx with bearer auth and structured logging. Construct one per
    run and pass it to whatever needs it.
    """

    BASE_URL = "https://api.spotify.com/v1"

    def __init__(
        self,
        token: str,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the Spotify client.
        
        Args:
            token: OAuth bearer token with playlist-modify scopes
            base_url: Web API root
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SpotifyClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    # Raw transport

    def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET url and return the decoded JSON body."""
        request = self._client.build_request("GET", url, params=params)
        return self._send(request)

    def post(self, url: str, payload: Any) -> Any:
        """POST payload as JSON to url and return the decoded JSON body."""
        request = self._client.build_request("POST", url, json=payload)
        return self._send(request, payload)

    def _send(self, request: httpx.Request, payload: Any = None) -> Any:
        url = str(request.url)
        logger.debug("http_request", method=request.method, url=url, body=payload)
        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            raise TransportError(request.method, url, request_body=payload, reason=str(e)) from e

        body = _decode_body(response)
        logger.debug("http_response", method=request.method, url=url, status=response.status_code, body=body)

        if not response.is_success:
            raise TransportError(
                request.method,
                url,
                status_code=response.status_code,
                request_body=payload,
                response_body=body,
            )
        return body

    @staticmethod
    def decode(model: type[ModelT], data: Any, url: str) -> ModelT:
        """Validate a response body against its expected model."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise DecodeError(url, model.__name__, str(e)) from e

    # Endpoints

    def current_user_id(self) -> str:
        """Get the authenticated user's Spotify ID."""
        endpoint = self.url("/me")
        profile = self.decode(UserProfile, self.get(endpoint), endpoint)
        logger.debug("spotify_user", user_id=profile.id)
        return profile.id

    def create_playlist(self, user_id: str, name: str, description: str) -> CreatedPlaylist:
        """Create a playlist owned by user_id.
        
        Spotify rejects descriptions containing line breaks, so newlines are
        removed before sending.
        """
        endpoint = self.url(f"/users/{user_id}/playlists")
        payload = {"name": name, "description": description.replace("\n", "")}
        playlist = self.decode(CreatedPlaylist, self.post(endpoint, payload), endpoint)
        logger.info("playlist_created", id=playlist.id, url=playlist.link)
        return playlist

    def search_tracks(self, query: str, limit: int = 1) -> list[SearchItem]:
        endpoint = self.url("/search")
        data = self.get(endpoint, params={"q": query, "type": "track", "limit": limit})
        return self.decode(SearchResponse, data, endpoint).tracks.items

    def add_items(self, playlist_id: str, uris: list[str]) -> str:
        """Append uris to a playlist in a single request and return the snapshot ID."""
        endpoint = self.url(f"/playlists/{playlist_id}/tracks")
        snapshot = self.decode(SnapshotResponse, self.post(endpoint, {"uris": uris}), endpoint)
        logger.info("tracks_added", playlist_id=playlist_id, total=len(uris))
        return snapshot.snapshot_id


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
