"""Content selection: picks the main-content fragment of an HTML page."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Removed unconditionally before any content selector runs.
NOISE_SELECTORS = [
    "script",
    "style",
    "link",
    "meta",
    "noscript",
    "iframe",
    "svg",
    "nav",
    "aside",
    "header",
    "footer",
    ".advertisement",
    ".ads",
    ".social-share",
    ".comments",
]

# Tried in order; the first selector with a match wins, and within a
# selector the first element in document order wins.
CONTENT_SELECTORS = [
    "article",
    "main",
    ".content, .post-content, .entry-content",
    "body",
]


def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* into a queryable document tree."""
    return BeautifulSoup(html, "html.parser")


def remove_noise(soup: BeautifulSoup) -> None:
    """Decompose every element matching :data:`NOISE_SELECTORS`."""
    for element in soup.select(", ".join(NOISE_SELECTORS)):
        # A parent matched earlier may already have taken this one with it
        if element.decomposed:
            continue
        element.decompose()


def select_content(soup: BeautifulSoup) -> Tag | None:
    """Return the first element matched by :data:`CONTENT_SELECTORS`."""
    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            logger.debug("Content selected by %r", selector)
            return element
    return None


def inner_html(element: Tag) -> str:
    """Serialize the children of *element*, without its own tag."""
    return element.decode_contents()


def extract_main_content(html: str) -> str:
    """Return the markup of the page's main content region.

    Noise elements are stripped first, then :data:`CONTENT_SELECTORS` are
    tried in priority order.  If not even ``<body>`` exists (a bare fragment
    such as ``<p>...</p>``) the whole document is returned, still without its
    noise elements.
    """
    soup = parse_html(html)
    remove_noise(soup)
    element = select_content(soup)
    if element is None:
        logger.debug("No content container found; using the whole document")
        return soup.decode()
    return inner_html(element)
