"""FastAPI application factory.

Routers
-------
    /api/scrape    fetch a page and return its main content as markdown

Cross-origin requests are allowed from any origin: the API is public and
unauthenticated.  Every response carries the CORS headers, whether or not the
request sent ``Origin``, and every ``OPTIONS`` request is answered with an
empty 200.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from markscrape import __version__
from markscrape.api.routers import scrape as scrape_router
from markscrape.config import settings
from markscrape.logging_config import setup_logging
from markscrape.scraper.errors import ScrapeError

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def scrape_error_handler(request: Request, exc: ScrapeError) -> JSONResponse:
    """Render a classified pipeline failure as ``{error, message}`` JSON."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def allow_any_origin(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    setup_logging(settings.log_level)

    app = FastAPI(
        title="markscrape API",
        description=(
            "Fetches a webpage, strips navigation, ads and scripts, and "
            "returns the main content as markdown."
        ),
        version=__version__,
    )

    app.middleware("http")(allow_any_origin)

    app.add_exception_handler(ScrapeError, scrape_error_handler)

    app.include_router(scrape_router.router, prefix="/api", tags=["scrape"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn markscrape.api.app:app --reload
app = create_app()
