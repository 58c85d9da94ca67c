"""URL validation: turns raw caller input into a :class:`ScrapeRequest`.

Validation is purely syntactic.  No DNS lookups or reachability probes happen
here, so a rejected URL never causes network activity.
"""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

from markscrape.scraper.errors import InvalidUrlError, MissingUrlError
from markscrape.scraper.models import ScrapeRequest

logger = logging.getLogger(__name__)

# Same as HttpUrl minus its 2083-character cap
_http_url = TypeAdapter(
    Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)]
)


def validate_url(raw: Optional[str]) -> ScrapeRequest:
    """Validate *raw* as an absolute ``http``/``https`` URL with a host.

    Raises:
        MissingUrlError: *raw* is ``None``, empty or only whitespace.
        InvalidUrlError: *raw* is present but not a valid absolute URL.
    """
    if raw is None or not raw.strip():
        raise MissingUrlError()

    candidate = raw.strip()
    try:
        url = _http_url.validate_python(candidate)
    except ValidationError as exc:
        logger.debug("Rejected URL %r: %s", candidate, exc)
        raise InvalidUrlError() from exc

    if not url.host:
        raise InvalidUrlError()

    return ScrapeRequest(url=str(url))
