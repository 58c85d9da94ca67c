"""Data models for the scrape pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping, Union

from markscrape.scraper.errors import ErrorKind

_CHARSET_RE = re.compile(r"charset=[\"']?([^\"';\s]+)", re.IGNORECASE)


@dataclass(frozen=True)
class ScrapeRequest:
    """A URL that passed syntactic validation."""

    url: str


@dataclass
class FetchResult:
    """The buffered HTTP response for a single URL fetch."""

    url: str
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def encoding(self) -> str:
        """Charset declared in ``Content-Type``, or ``utf-8``."""
        content_type = ""
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                content_type = value
                break
        match = _CHARSET_RE.search(content_type)
        return match.group(1) if match else "utf-8"

    @property
    def text(self) -> str:
        """The body decoded as text; undecodable bytes are replaced."""
        try:
            return self.body.decode(self.encoding, errors="replace")
        except LookupError:
            # Unknown charset label in the header
            return self.body.decode("utf-8", errors="replace")


@dataclass
class ScrapeSuccess:
    url: str
    markdown: str

    ok = True


@dataclass
class ScrapeFailure:
    url: str
    kind: ErrorKind
    error: str
    message: str
    status_code: int

    ok = False


ScrapeOutcome = Union[ScrapeSuccess, ScrapeFailure]
