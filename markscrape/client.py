"""Client for a running markscrape service.

The service answers successful scrapes with ``text/plain`` markdown and
failures with ``{"error", "message"}`` JSON, so the content type decides how a
response is read.
"""

from __future__ import annotations

import httpx

DEFAULT_API_BASE = "http://localhost:8000"


class RemoteScrapeError(Exception):
    """The service reported a failure for the requested URL."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(message or error)


def fetch_markdown(
    url: str,
    api_base: str = DEFAULT_API_BASE,
    timeout: float = 60.0,
) -> str:
    """Ask the service at *api_base* to scrape *url* and return the markdown.

    Raises:
        RemoteScrapeError: The service answered with a JSON error payload.
        httpx.HTTPError: The service itself could not be reached.
    """
    endpoint = api_base.rstrip("/") + "/api/scrape"
    with httpx.Client(timeout=timeout) as client:
        response = client.get(endpoint, params={"url": url})

    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        payload = response.json()
        raise RemoteScrapeError(
            response.status_code,
            payload.get("error", ""),
            payload.get("message") or payload.get("error") or "Unknown error occurred",
        )

    response.raise_for_status()
    return response.text
