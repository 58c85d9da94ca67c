"""markscrape CLI: entry-point for scraping and serving.

Usage:
    python cli/main.py --help

Commands:
    scrape    → run the pipeline for one URL and print the markdown
    serve     → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from markscrape.xxx import
# ...` works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import httpx
import typer

from markscrape.client import RemoteScrapeError, fetch_markdown
from markscrape.config import settings
from markscrape.logging_config import setup_logging
from markscrape.scraper import ScrapeFailure, run_scrape

app = typer.Typer(
    name="markscrape",
    help="Fetch a webpage and print its main content as markdown.",
    no_args_is_help=True,
)


def _fail(error: str, message: str) -> None:
    typer.echo(f"[scrape] {error}: {message}", err=True)
    raise typer.Exit(code=1)


@app.command("scrape")
def scrape(
    url: str = typer.Argument(..., help="URL to scrape."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the markdown to this file instead of stdout."
    ),
    api: Optional[str] = typer.Option(
        None, "--api", help="Base URL of a running markscrape service to use instead of scraping locally."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline progress to stderr."),
) -> None:
    """Scrape a URL and print the cleaned markdown."""
    setup_logging("DEBUG" if verbose else settings.log_level)

    if api:
        try:
            markdown = fetch_markdown(url, api_base=api)
        except RemoteScrapeError as exc:
            _fail(exc.error or f"HTTP {exc.status_code}", exc.message)
        except httpx.HTTPError as exc:
            _fail("Service error", str(exc))
    else:
        outcome = run_scrape(url)
        if isinstance(outcome, ScrapeFailure):
            _fail(outcome.error, outcome.message)
        markdown = outcome.markdown

    if output is not None:
        output.write_text(markdown + "\n", encoding="utf-8")
        typer.echo(f"[scrape] Wrote {len(markdown)} characters to {output}", err=True)
        return
    typer.echo(markdown)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Run the scrape API under uvicorn."""
    import uvicorn

    uvicorn.run("markscrape.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
