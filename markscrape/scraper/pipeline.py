"""Scrape pipeline: URL → fetched HTML → main content → cleaned markdown.

``scrape`` orchestrates the stages in strict order:

    validate → fetch → select content → convert → clean → length gate

The first failing stage ends the request with a :class:`ScrapeError`.  There
is no partial output and no retry.
"""

from __future__ import annotations

import logging
from typing import Optional

from markscrape.config import settings
from markscrape.scraper.cleaner import check_content_length, clean_markdown
from markscrape.scraper.converter import converter
from markscrape.scraper.errors import ParseOrConvertError, ScrapeError
from markscrape.scraper.extractor import extract_main_content
from markscrape.scraper.fetcher import fetch_url
from markscrape.scraper.models import (
    ScrapeFailure,
    ScrapeOutcome,
    ScrapeSuccess,
)
from markscrape.scraper.validator import validate_url

logger = logging.getLogger(__name__)


def html_to_markdown(html: str) -> str:
    """Select the main content of *html* and return it as cleaned markdown.

    Raises:
        ParseOrConvertError: Parsing or conversion raised unexpectedly.
    """
    try:
        fragment = extract_main_content(html)
        markdown = converter.convert(fragment)
    except Exception as exc:
        raise ParseOrConvertError() from exc
    return clean_markdown(markdown)


def scrape(url: Optional[str]) -> str:
    """Fetch *url* and return its main content as markdown.

    Raises:
        ScrapeError: A subclass naming the stage and reason of the failure.
    """
    try:
        request = validate_url(url)
        page = fetch_url(request.url)
        markdown = html_to_markdown(page.text)
        return check_content_length(markdown, settings.min_content_length)
    except ParseOrConvertError:
        # The traceback includes the parser/converter error as __cause__
        logger.exception("Content parsing failed for %r", url)
        raise
    except ScrapeError as exc:
        logger.warning(
            "Scrape of %r failed: %s (%s) cause=%r",
            url,
            exc.kind.value,
            exc.message,
            exc.__cause__,
        )
        raise


def run_scrape(url: Optional[str]) -> ScrapeOutcome:
    """Like :func:`scrape` but returns a success/failure value instead of raising."""
    try:
        markdown = scrape(url)
    except ScrapeError as exc:
        return ScrapeFailure(
            url=url or "",
            kind=exc.kind,
            error=exc.error,
            message=exc.message,
            status_code=exc.status_code,
        )
    return ScrapeSuccess(url=url or "", markdown=markdown)
