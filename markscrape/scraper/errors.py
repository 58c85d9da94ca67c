"""Error taxonomy for the scrape pipeline.

Every failure is terminal for its request.  Each ``ScrapeError`` carries the
classified ``kind``, a short ``error`` title, a user-facing ``message`` and the
HTTP ``status_code`` the API answers with.  The original cause stays on
``__cause__`` for server-side logging and is never shown to the caller.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_URL = "MissingUrl"
    INVALID_URL = "InvalidUrl"
    REDIRECT_NOT_ALLOWED = "RedirectNotAllowed"
    HTTP_ERROR = "HttpError"
    HOST_NOT_FOUND = "HostNotFound"
    CONNECTION_REFUSED = "ConnectionRefused"
    TIMEOUT = "Timeout"
    TLS_ERROR = "TlsError"
    NETWORK_ERROR_OTHER = "NetworkErrorOther"
    RESPONSE_TOO_LARGE = "ResponseTooLarge"
    PARSE_OR_CONVERT_FAILURE = "ParseOrConvertFailure"
    EMPTY_OR_INSUFFICIENT_CONTENT = "EmptyOrInsufficientContent"


class ScrapeError(Exception):
    """Base class for every classified pipeline failure."""

    kind: ErrorKind = ErrorKind.NETWORK_ERROR_OTHER
    error: str = "Scrape failed"
    message: str = "Failed to fetch the webpage"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        kind: ErrorKind | None = None,
        error: str | None = None,
        status_code: int | None = None,
    ) -> None:
        if message is not None:
            self.message = message
        if kind is not None:
            self.kind = kind
        if error is not None:
            self.error = error
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Return the ``{error, message}`` payload surfaced to API callers."""
        return {"error": self.error, "message": self.message}


class MissingUrlError(ScrapeError):
    kind = ErrorKind.MISSING_URL
    error = "Missing URL parameter"
    message = "Please provide a 'url' query parameter"
    status_code = 400


class InvalidUrlError(ScrapeError):
    kind = ErrorKind.INVALID_URL
    error = "Invalid URL"
    message = "Please provide a valid URL starting with http:// or https://"
    status_code = 400


class RedirectNotAllowedError(ScrapeError):
    kind = ErrorKind.REDIRECT_NOT_ALLOWED
    error = "Redirect detected"
    message = "Please use the final URL after redirects"
    status_code = 400

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(
            f"The server redirected to {location}. Please use the final URL after redirects"
        )


class UpstreamHttpError(ScrapeError):
    """The target answered with a non-2xx, non-redirect status."""

    kind = ErrorKind.HTTP_ERROR

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(
            reason or "Failed to fetch the webpage",
            error=f"HTTP {status_code}",
            status_code=status_code,
        )


# Transport-level hints, one per classified failure.
_TRANSPORT_MESSAGES = {
    ErrorKind.HOST_NOT_FOUND: "Domain not found. Please check the URL is correct.",
    ErrorKind.CONNECTION_REFUSED: "Connection refused. The server may be down.",
    ErrorKind.TIMEOUT: "The request took too long to complete. Please try again.",
    ErrorKind.TLS_ERROR: "SSL certificate error. The site may have security issues.",
    ErrorKind.NETWORK_ERROR_OTHER: "Failed to fetch the webpage",
}

_TRANSPORT_KINDS = frozenset(_TRANSPORT_MESSAGES)


class TransportError(ScrapeError):
    """A failure before a well-formed HTTP response was received."""

    error = "Network error"
    status_code = 500

    def __init__(self, kind: ErrorKind) -> None:
        if kind not in _TRANSPORT_KINDS:
            raise ValueError(f"{kind!r} is not a transport error kind")
        if kind is ErrorKind.TIMEOUT:
            super().__init__(
                _TRANSPORT_MESSAGES[kind],
                kind=kind,
                error="Request timeout",
                status_code=408,
            )
        else:
            super().__init__(_TRANSPORT_MESSAGES[kind], kind=kind)


class ResponseTooLargeError(ScrapeError):
    kind = ErrorKind.RESPONSE_TOO_LARGE
    error = "Response too large"
    status_code = 502

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"The webpage is larger than the {limit} byte limit.")


class ParseOrConvertError(ScrapeError):
    kind = ErrorKind.PARSE_OR_CONVERT_FAILURE
    error = "Content parsing failed"
    message = (
        "Failed to parse the webpage content. "
        "The site may use complex JavaScript rendering."
    )
    status_code = 500


class InsufficientContentError(ScrapeError):
    kind = ErrorKind.EMPTY_OR_INSUFFICIENT_CONTENT
    error = "No content extracted"
    message = (
        "The webpage appears to have no readable content "
        "or may be behind a paywall/login"
    )
    status_code = 422
