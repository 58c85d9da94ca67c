"""Scrape endpoint.

Routes
------
GET     /api/scrape?url=<percent-encoded URL>   → markdown as text/plain

``OPTIONS`` is answered by the application's CORS middleware.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from markscrape.scraper import scrape

router = APIRouter()


@router.get("/scrape", response_class=PlainTextResponse)
def scrape_endpoint(url: Optional[str] = None) -> PlainTextResponse:
    """Fetch *url* and return its main content as markdown.

    Failures are raised as ``ScrapeError`` and rendered as
    ``{"error", "message"}`` JSON by the application's exception handler.
    """
    markdown = scrape(url)
    return PlainTextResponse(markdown, media_type="text/plain; charset=utf-8")
