"""Shared fixtures: page fixtures, settings and a fake Spotify Web API."""

import io
import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from awa2spotify.config import Settings, get_settings
from awa2spotify.logging import configure_logging
from awa2spotify.sources import AwaSource
from awa2spotify.spotify import SpotifyClient

FIXTURES = Path(__file__).parent / "fixtures"

SOURCE_URL = "https://mf.awa.fm/2RDS2S8"

EXPECTED_TRACKS = [
    ("Show Me Love", "Tomggg feat. Raychel Jay"),
    ("Rally", "Cymbals/古市 コータロー/内田 晴元"),
    ("夜に駆ける", "YOASOBI"),
    ("Pretender", "Official髭男dism"),
    ("Plastic Love", "竹内まりや"),
    ("Lemon", "米津玄師"),
    ("白日", "King Gnu"),
    ("丸の内サディスティック", "椎名林檎"),
]

# Search queries the fixture tracks produce, in page order.
QUERIES = [
    "Show Me Love Tomggg Raychel Jay",
    "Rally Cymbals 古市 コータロー 内田 晴元",
    "夜に駆ける YOASOBI",
    "Pretender Official髭男dism",
    "Plastic Love 竹内まりや",
    "Lemon 米津玄師",
    "白日 King Gnu",
    "丸の内サディスティック 椎名林檎",
]

PLAYLIST_ID = "2dpeGxTWfOVysBwuO5bvta"


def match_all(fake_spotify, skip=()):
    """Give every fixture track except those at the skip indexes a unique match."""
    for i, query in enumerate(QUERIES):
        if i not in skip:
            fake_spotify.add_match(query, f"t{i}")


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch):
    """Keep environment-derived settings from leaking between tests."""
    for var in ("TOKEN", "DEBUG", "SEARCH_WORKERS", "LOG_FORMAT", "HTTP_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def playlist_html() -> str:
    return (FIXTURES / "awa_playlist.html").read_text(encoding="utf-8")


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, token="test-token")


class FakeSpotify:
    """In-memory stand-in for the Spotify Web API, served through httpx.MockTransport.

    Records every request. Search results are looked up by the exact
    query string; unknown queries return no items.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.search_results: dict[str, list[dict]] = {}
        self.profile_status = 200
        self.create_status = 201
        self.add_status = 201
        self.search_status = 200

    def add_match(self, query: str, track_id: str, count: int = 1) -> None:
        self.search_results[query] = [
            {
                "uri": f"spotify:track:{track_id}{'' if n == 0 else n}",
                "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
            }
            for n in range(count)
        ]

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    def posted(self, path: str) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and r.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/v1/me":
            if self.profile_status != 200:
                return httpx.Response(self.profile_status, json={"error": {"status": self.profile_status, "message": "Invalid access token"}})
            return httpx.Response(200, json={"id": "awa-fan", "display_name": "AWA Fan"})

        if request.method == "POST" and path == "/v1/users/awa-fan/playlists":
            if self.create_status >= 300:
                return httpx.Response(self.create_status, json={"error": {"status": self.create_status, "message": "Forbidden"}})
            return httpx.Response(
                self.create_status,
                json={
                    "id": "2dpeGxTWfOVysBwuO5bvta",
                    "external_urls": {"spotify": "https://open.spotify.com/playlist/2dpeGxTWfOVysBwuO5bvta"},
                },
            )

        if request.method == "GET" and path == "/v1/search":
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"error": {"status": self.search_status, "message": "Bad request"}})
            items = self.search_results.get(request.url.params["q"], [])
            return httpx.Response(200, json={"tracks": {"items": items, "total": len(items)}})

        if request.method == "POST" and path.startswith("/v1/playlists/") and path.endswith("/tracks"):
            if self.add_status >= 300:
                return httpx.Response(self.add_status, json={"error": {"status": self.add_status, "message": "Not found"}})
            return httpx.Response(self.add_status, json={"snapshot_id": "MTAsZDVmZjMjJhZTVm"})

        return httpx.Response(404, json={"error": {"status": 404, "message": "Service not found"}})


@pytest.fixture
def fake_spotify() -> FakeSpotify:
    return FakeSpotify()


@pytest.fixture
def spotify_client(fake_spotify) -> SpotifyClient:
    client = SpotifyClient("test-token", transport=httpx.MockTransport(fake_spotify.handler))
    yield client
    client.close()


@pytest.fixture
def page_server(playlist_html) -> Callable[..., httpx.Client]:
    """Build an httpx client that serves the playlist page fixture."""

    def build(status: int = 200, html: str | None = None) -> httpx.Client:
        body = playlist_html if html is None else html

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, text=body, headers={"Content-Type": "text/html; charset=utf-8"})

        return httpx.Client(transport=httpx.MockTransport(handler))

    return build


@pytest.fixture
def awa_source(page_server) -> AwaSource:
    return AwaSource(client=page_server())


@pytest.fixture(autouse=True)
def _quiet_logging():
    """Silence structlog unless a test configures it (the CLI does)."""
    configure_logging(level="CRITICAL", stream=io.StringIO())
    yield
