"""Playlist source interface and base classes.

A source turns a playlist page URL into a SourcePlaylist. AWA is the only
implementation today.
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from ..models import SourcePlaylist


@runtime_checkable
class PlaylistSource(Protocol):
    """Protocol for services playlists are copied from."""

    @property
    def name(self) -> str:
        """Unique identifier for this source."""
        ...

    def scrape(self, url: str) -> SourcePlaylist:
        """Fetch the playlist page at url and extract its name, description and tracks.
        
        Args:
            url: Public playlist page URL
            
        Returns:
            The extracted playlist
        """
        ...


class BaseSource(ABC):
    """Abstract base class for playlist sources: fetch, then parse."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this source."""
        pass

    @abstractmethod
    def fetch(self, url: str) -> str:
        """Return the HTML of the playlist page."""
        pass

    @abstractmethod
    def parse(self, html: str, url: str | None = None) -> SourcePlaylist:
        """Extract a playlist from page HTML."""
        pass

    def scrape(self, url: str) -> SourcePlaylist:
        return self.parse(self.fetch(url), url)


from .awa import AwaSource  # noqa: E402

__all__ = ["PlaylistSource", "BaseSource", "AwaSource"]
