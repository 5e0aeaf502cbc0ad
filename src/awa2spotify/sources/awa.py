"""AWA playlist page scraper.

AWA renders playlist pages server-side, so the playlist can be read from
the HTML with fixed CSS selectors. The class names are generated by the
site's build and will change when the site is redeployed.
"""

import httpx
from bs4 import BeautifulSoup

from ..errors import ExtractionError, TransportError
from ..logging import get_logger
from ..models import SourcePlaylist, Track
from . import BaseSource

logger = get_logger(__name__)

TRACK_COUNT = 8

NAME_SELECTOR = "._38UsOh4Z6h0g6W85obDl_M.-fw-b"
DESCRIPTION_SELECTOR = ".cSux9HGnsrA6Wg6YcZJpP._2VQVMPZjwSZ7gutPRRfXQh._1nQ5k5yMiVg8rurXPOKTTJ"
TRACK_FIELD_SELECTOR = ".c1tzH5-SsFpW2sQBsrLLg._2Fb6XA6X_L7NVOLEUR3qN4"

# Appended to truncated descriptions ("…read more").
READ_MORE_SUFFIX = "…もっと見る"


def strip_read_more(description: str) -> str:
    """Remove the trailing "read more" marker, leaving everything else intact."""
    return description.removesuffix(READ_MORE_SUFFIX)


class AwaSource(BaseSource):
    """Scrapes AWA (awa.fm) playlist pages.
    
    Each page lists its tracks as alternating title/artist elements sharing
    one class; only the first TRACK_COUNT pairs are rendered without
    JavaScript.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
        track_count: int = TRACK_COUNT,
    ):
        """Initialize the AWA source.
        
        Args:
            client: Optional preconfigured HTTP client (no auth headers)
            timeout: Request timeout in seconds when creating a client
            track_count: Number of track/artist pairs to extract
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self.track_count = track_count

    @property
    def name(self) -> str:
        return "awa"

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def fetch(self, url: str) -> str:
        logger.debug("scrape_start", url=url)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise TransportError("GET", url, reason=str(e)) from e

        if response.status_code != httpx.codes.OK:
            raise TransportError(
                "GET",
                url,
                status_code=response.status_code,
                reason=f"status code {response.status_code} is not 200",
            )
        return response.text

    def parse(self, html: str, url: str | None = None) -> SourcePlaylist:
        soup = BeautifulSoup(html, "html.parser")

        name = _first_text(soup, NAME_SELECTOR)
        if not name:
            raise ExtractionError("could not find playlist name")
        logger.debug("scraped_name", name=name)

        description = strip_read_more(_first_text(soup, DESCRIPTION_SELECTOR))
        if not description:
            raise ExtractionError("could not find description")
        logger.debug("scraped_description", description=description)

        tracks = self._extract_tracks(soup)
        return SourcePlaylist(name=name, description=description, tracks=tracks, url=url)

    def _extract_tracks(self, soup: BeautifulSoup) -> tuple[Track, ...]:
        names: list[str] = []
        artists: list[str] = []
        errors: list[str] = []

        # Every element is checked so all problems are reported together.
        for i, element in enumerate(soup.select(TRACK_FIELD_SELECTOR)):
            text = element.get_text()
            if i % 2 == 0:
                names.append(text)
                if not text:
                    errors.append(f"could not find track name, i={i}")
                logger.debug("scraped_track_field", index=i, name=text)
            else:
                artists.append(text)
                if not text:
                    errors.append(f"could not find artist, i={i}")
                logger.debug("scraped_track_field", index=i, artist=text)

        if errors:
            raise ExtractionError(errors)

        found = min(len(names), len(artists))
        if found < self.track_count:
            raise ExtractionError(
                f"expected {self.track_count} tracks, found {found}"
            )

        return tuple(
            Track(name=names[i], artist=artists[i]) for i in range(self.track_count)
        )


def _first_text(soup: BeautifulSoup, selector: str) -> str:
    element = soup.select_one(selector)
    return element.get_text() if element is not None else ""
