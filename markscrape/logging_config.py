"""Logging setup shared by the API and the CLI."""

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the ``markscrape`` logger and return it.

    Calling it again only changes the level; the handler is installed once.
    """
    logger = logging.getLogger("markscrape")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        # stderr keeps stdout free for markdown piped out of the CLI
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False
    return logger
