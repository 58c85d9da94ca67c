"""HTTP fetcher: one GET per call, no redirects, bounded time and size."""

from __future__ import annotations

import logging
import socket
import ssl
import threading
import time
from typing import Iterator

import httpx

from markscrape.config import settings
from markscrape.scraper.errors import (
    ErrorKind,
    InvalidUrlError,
    RedirectNotAllowedError,
    ResponseTooLargeError,
    TransportError,
    UpstreamHttpError,
)
from markscrape.scraper.models import FetchResult

logger = logging.getLogger(__name__)

# Process-wide cap on simultaneous outbound fetches.  Excess callers wait.
_fetch_slots = threading.BoundedSemaphore(max(1, settings.max_concurrent_fetches))

# ---------------------------------------------------------------------------
# Transport error classification
# ---------------------------------------------------------------------------

# Used only when the exception chain carries no structured OS/SSL cause.
_TEXT_PATTERNS = [
    (
        ErrorKind.HOST_NOT_FOUND,
        (
            "name or service not known",
            "nodename nor servname",
            "getaddrinfo failed",
            "temporary failure in name resolution",
            "no address associated",
            "enotfound",
        ),
    ),
    (ErrorKind.CONNECTION_REFUSED, ("connection refused", "actively refused", "econnrefused")),
    (ErrorKind.TIMEOUT, ("timed out", "etimedout")),
    (ErrorKind.TLS_ERROR, ("certificate", "ssl", "tls")),
]


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def classify_transport_error(exc: BaseException) -> ErrorKind:
    """Map a transport-layer exception to an :class:`ErrorKind`.

    The typed httpx exception and the OS/SSL errors underneath it are checked
    first.  The error text is matched only as a last resort.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorKind.TIMEOUT

    chain = list(_exception_chain(exc))
    for cause in chain:
        if isinstance(cause, socket.gaierror):
            return ErrorKind.HOST_NOT_FOUND
        if isinstance(cause, ConnectionRefusedError):
            return ErrorKind.CONNECTION_REFUSED
        if isinstance(cause, ssl.SSLError):
            return ErrorKind.TLS_ERROR
        if isinstance(cause, (TimeoutError, socket.timeout)):
            return ErrorKind.TIMEOUT

    text = " ".join(str(cause) for cause in chain).lower()
    for kind, needles in _TEXT_PATTERNS:
        if any(needle in text for needle in needles):
            return kind
    return ErrorKind.NETWORK_ERROR_OTHER


# ---------------------------------------------------------------------------
# Response handling
# ---------------------------------------------------------------------------

def _check_status(response: httpx.Response) -> None:
    status = response.status_code
    if 300 <= status < 400 and "location" in response.headers:
        raise RedirectNotAllowedError(response.headers["location"])
    if not 200 <= status < 300:
        raise UpstreamHttpError(status, response.reason_phrase)


class _Watchdog:
    """Aborts an in-flight exchange once the total time budget is spent.

    httpx phase timeouts only bound each individual read, so an origin that
    trickles bytes could otherwise hold the request open forever.  The socket
    is captured through the ``trace`` request extension and shut down when the
    timer fires, which wakes any read blocked on it.
    """

    _SOCKET_EVENTS = ("connection.connect_tcp.complete", "connection.start_tls.complete")

    def __init__(self, timeout: float) -> None:
        self.expired = False
        self._sock: socket.socket | None = None
        self._lock = threading.Lock()
        self._timer = threading.Timer(timeout, self._expire)
        self._timer.daemon = True

    def __enter__(self) -> _Watchdog:
        self._timer.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._timer.cancel()

    def trace(self, event: str, info: dict) -> None:
        if event not in self._SOCKET_EVENTS:
            return
        sock = info["return_value"].get_extra_info("socket")
        with self._lock:
            self._sock = sock
            expired = self.expired
        if expired:
            _shutdown(sock)

    def _expire(self) -> None:
        with self._lock:
            self.expired = True
            sock = self._sock
        if sock is not None:
            _shutdown(sock)


def _shutdown(sock: socket.socket) -> None:
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        # Already closed by the client
        pass


def _read_body(response: httpx.Response, deadline: float, limit: int) -> bytes:
    """Accumulate the body, aborting past *limit* bytes or the *deadline*."""
    declared = response.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise ResponseTooLargeError(limit)

    chunks: list[bytes] = []
    size = 0
    for chunk in response.iter_bytes():
        size += len(chunk)
        if size > limit:
            raise ResponseTooLargeError(limit)
        if time.monotonic() > deadline:
            raise TransportError(ErrorKind.TIMEOUT)
        chunks.append(chunk)
    return b"".join(chunks)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_url(url: str) -> FetchResult:
    """Fetch *url* with a single GET and return the buffered response.

    Redirects are never followed.  ``settings.request_timeout`` bounds the
    whole exchange, from connect to the last body byte.  The response and its
    connection are closed on every path, including timeouts and size-limit
    aborts.

    Raises:
        RedirectNotAllowedError: The server answered 3xx with ``Location``.
        UpstreamHttpError: The server answered with any other non-2xx status.
        TransportError: DNS, connection, TLS or timeout failure.
        ResponseTooLargeError: The body exceeded ``settings.max_response_bytes``.
    """
    timeout = settings.request_timeout
    limit = settings.max_response_bytes

    with _fetch_slots:
        logger.info("Fetching %s", url)
        deadline = time.monotonic() + timeout
        with _Watchdog(timeout) as watchdog:
            try:
                with httpx.Client(
                    headers={"User-Agent": settings.user_agent},
                    timeout=httpx.Timeout(timeout),
                    follow_redirects=False,
                ) as client:
                    with client.stream(
                        "GET", url, extensions={"trace": watchdog.trace}
                    ) as response:
                        _check_status(response)
                        body = _read_body(response, deadline, limit)
                        result = FetchResult(
                            url=url,
                            status_code=response.status_code,
                            headers=dict(response.headers),
                            body=body,
                        )
            except httpx.InvalidURL as exc:
                raise InvalidUrlError() from exc
            except httpx.TransportError as exc:
                if watchdog.expired:
                    raise TransportError(ErrorKind.TIMEOUT) from exc
                raise TransportError(classify_transport_error(exc)) from exc
            except httpx.RequestError as exc:
                # Decoding and other request-level failures without a transport cause
                raise TransportError(ErrorKind.NETWORK_ERROR_OTHER) from exc

            # A close-delimited body cut short by the watchdog ends without error
            if watchdog.expired:
                raise TransportError(ErrorKind.TIMEOUT)

    logger.debug("Fetched %s: HTTP %d, %d bytes", url, result.status_code, len(result.body))
    return result
