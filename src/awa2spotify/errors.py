"""Exception hierarchy for awa2spotify.

Transport failures, response-shape mismatches, scrape failures and
configuration problems each have their own type so the CLI can report
them distinctly.
"""

import json
from typing import Any


class Awa2SpotifyError(Exception):
    """Base class for all awa2spotify errors."""


class ConfigurationError(Awa2SpotifyError):
    """Required configuration is missing."""


class TransportError(Awa2SpotifyError):
    """A request failed on the network or returned a non-success status."""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int | None = None,
        request_body: Any = None,
        response_body: Any = None,
        reason: str | None = None,
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.request_body = request_body
        self.response_body = response_body
        self.reason = reason
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.status_code is None:
            head = f"{self.method} {self.url} failed"
        else:
            head = f"{self.method} {self.url} returned status {self.status_code}"
        details = []
        if self.reason:
            details.append(self.reason)
        if self.request_body is not None:
            details.append(f"req={_render(self.request_body)}")
        if self.response_body is not None:
            details.append(f"result={_render(self.response_body)}")
        if not details:
            return head
        return f"{head}: {', '.join(details)}"


class DecodeError(Awa2SpotifyError):
    """A successful response did not have the expected shape."""

    def __init__(self, url: str, model: str, detail: str):
        self.url = url
        self.model = model
        self.detail = detail
        super().__init__(f"unexpected {model} response from {self.url}: {detail}")


class ExtractionError(Awa2SpotifyError):
    """Required fields could not be scraped from a playlist page.

    Carries every problem found during a scan, not just the first.
    """

    def __init__(self, messages: list[str] | str):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


def _render(body: Any) -> str:
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(body)
