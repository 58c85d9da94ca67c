"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from markscrape.api import app

    uvicorn markscrape.api:app --reload
"""

from markscrape.api.app import app

__all__ = ["app"]
