"""Scraper package: fetch, content selection and markdown conversion."""

from markscrape.scraper.errors import ErrorKind, ScrapeError
from markscrape.scraper.models import ScrapeFailure, ScrapeOutcome, ScrapeSuccess
from markscrape.scraper.pipeline import run_scrape, scrape

__all__ = [
    "scrape",
    "run_scrape",
    "ErrorKind",
    "ScrapeError",
    "ScrapeOutcome",
    "ScrapeSuccess",
    "ScrapeFailure",
]
