"""Post-processing of converted markdown and the minimum-length gate."""

from __future__ import annotations

import re

from markscrape.scraper.errors import InsufficientContentError

# Three or more newlines, with any whitespace between them.
_EXCESS_NEWLINES = re.compile(r"\n\s*\n\s*\n")
# ``[![alt](src)](href)``: a linked thumbnail image.
_NESTED_IMAGE_LINK = re.compile(r"\[!\[.*?\]\(.*?\)\]\(.*?\)")


def collapse_blank_lines(markdown: str) -> str:
    """Collapse runs of blank lines into exactly one blank line."""
    return _EXCESS_NEWLINES.sub("\n\n", markdown)


def strip_nested_image_links(markdown: str) -> str:
    return _NESTED_IMAGE_LINK.sub("", markdown)


def clean_markdown(markdown: str) -> str:
    """Normalise whitespace and drop converter artifacts."""
    cleaned = collapse_blank_lines(markdown).strip()
    cleaned = strip_nested_image_links(cleaned)
    return cleaned.strip()


def check_content_length(markdown: str, minimum: int) -> str:
    """Return *markdown* unchanged if it has at least *minimum* characters.

    Raises:
        InsufficientContentError: The text is shorter than *minimum*.
    """
    if len(markdown) < minimum:
        raise InsufficientContentError()
    return markdown
