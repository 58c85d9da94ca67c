"""HTML to Markdown conversion."""

from __future__ import annotations

from markdownify import ATX, MarkdownConverter


class HtmlToMarkdown:
    """
    Converts an HTML fragment to Markdown.

    Uses markdownify with ATX headings and fenced code blocks.  Conversion is
    a pure function of the input markup, and an instance keeps only its
    options, so one instance can be shared across concurrent requests.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert("<h1>Title</h1><p>Body</p>")
    """

    def __init__(
        self,
        heading_style: str = ATX,
        bullets: str = "*+-",
        strong_em_symbol: str = "*",
        escape_underscores: bool = True,
        escape_asterisks: bool = True,
    ) -> None:
        """
        Initialize the Markdown converter.

        Args:
            heading_style: markdownify heading style (ATX = ``#`` prefixes)
            bullets: Bullet characters per list nesting level
            strong_em_symbol: Character used for emphasis and strong text
            escape_underscores: Escape ``_`` in text nodes
            escape_asterisks: Escape ``*`` in text nodes
        """
        self._converter = MarkdownConverter(
            heading_style=heading_style,
            bullets=bullets,
            strong_em_symbol=strong_em_symbol,
            escape_underscores=escape_underscores,
            escape_asterisks=escape_asterisks,
        )

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML fragment

        Returns:
            Markdown string, not yet cleaned
        """
        return self._converter.convert(html)


# Shared, stateless instance used by the pipeline.
converter = HtmlToMarkdown()
