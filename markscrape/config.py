"""Centralised settings for the markscrape service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).  The defaults reproduce
the reference behaviour of the scrape endpoint.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("MARKSCRAPE_REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("MARKSCRAPE_USER_AGENT", _DEFAULT_USER_AGENT)
    )
    max_response_bytes: int = field(
        default_factory=lambda: int(
            os.environ.get("MARKSCRAPE_MAX_RESPONSE_BYTES", str(10 * 1024 * 1024))
        )
    )
    max_concurrent_fetches: int = field(
        default_factory=lambda: int(os.environ.get("MARKSCRAPE_MAX_CONCURRENT_FETCHES", "8"))
    )

    # ------------------------------------------------------------------
    # Quality gate
    # ------------------------------------------------------------------
    min_content_length: int = field(
        default_factory=lambda: int(os.environ.get("MARKSCRAPE_MIN_CONTENT_LENGTH", "50"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("MARKSCRAPE_LOG_LEVEL", "INFO")
    )


# Module-level singleton; import this everywhere:
#   from markscrape.config import settings
settings = Settings()
