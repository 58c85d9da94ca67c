"""Tests for the /api/scrape endpoint.

The FastAPI TestClient drives the app in-process; ``respx`` mocks the origin
server that the endpoint fetches from.  No real network calls are made.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import patch

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from markscrape.api.app import create_app
from markscrape.config import settings


_ARTICLE_PAGE = (
    "<html><body><article><h1>Title</h1>"
    "<p>Hello world, this is enough content to pass the gate easily.</p>"
    "</article></body></html>"
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture()
def origin() -> Generator[respx.MockRouter, None, None]:
    """Mocked origin server; only outbound fetches are intercepted."""
    with respx.mock(assert_all_called=False) as router:
        yield router


def _get(client: TestClient, url: str | None, **kwargs) -> httpx.Response:
    params = {"url": url} if url is not None else {}
    return client.get("/api/scrape", params=params, **kwargs)


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------

class TestScrapeSuccess:
    def test_returns_markdown_as_plain_text(self, client, origin) -> None:
        origin.get("https://example.test/a").mock(
            return_value=httpx.Response(200, text=_ARTICLE_PAGE)
        )
        resp = _get(client, "https://example.test/a")

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "text/plain; charset=utf-8"
        assert resp.text == "# Title\n\nHello world, this is enough content to pass the gate easily."

    def test_percent_encoded_target_is_decoded(self, client, origin) -> None:
        route = origin.get("https://example.test/a", params={"q": "x y"}).mock(
            return_value=httpx.Response(200, text=_ARTICLE_PAGE)
        )
        resp = client.get("/api/scrape?url=https%3A%2F%2Fexample.test%2Fa%3Fq%3Dx%2520y")

        assert resp.status_code == 200
        assert route.called


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestScrapeErrors:
    def test_missing_url(self, client) -> None:
        resp = _get(client, None)
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "Missing URL parameter",
            "message": "Please provide a 'url' query parameter",
        }

    def test_empty_url(self, client) -> None:
        resp = _get(client, "")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Missing URL parameter"

    def test_invalid_url_makes_no_fetch(self, client) -> None:
        with patch("markscrape.scraper.pipeline.fetch_url") as mock_fetch:
            resp = _get(client, "definitely not a url")

        mock_fetch.assert_not_called()
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid URL"
        assert "http://" in resp.json()["message"]

    def test_redirect(self, client, origin) -> None:
        origin.get("https://example.test/old").mock(
            return_value=httpx.Response(301, headers={"Location": "https://example.test/new"})
        )
        resp = _get(client, "https://example.test/old")

        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "Redirect detected"
        assert "https://example.test/new" in body["message"]

    def test_upstream_status_is_passed_through(self, client, origin) -> None:
        origin.get("https://example.test/missing").mock(return_value=httpx.Response(404))
        resp = _get(client, "https://example.test/missing")

        assert resp.status_code == 404
        assert resp.json() == {"error": "HTTP 404", "message": "Not Found"}

    def test_upstream_server_error(self, client, origin) -> None:
        origin.get("https://example.test/down").mock(return_value=httpx.Response(503))
        resp = _get(client, "https://example.test/down")

        assert resp.status_code == 503
        assert resp.json()["error"] == "HTTP 503"

    def test_timeout_is_408(self, client, origin) -> None:
        origin.get("https://example.test/slow").mock(side_effect=httpx.ReadTimeout)
        resp = _get(client, "https://example.test/slow")

        assert resp.status_code == 408
        assert resp.json()["error"] == "Request timeout"

    def test_dns_failure_has_specific_hint(self, client, origin) -> None:
        origin.get("https://nowhere.test/").mock(
            side_effect=httpx.ConnectError("[Errno -2] Name or service not known")
        )
        resp = _get(client, "https://nowhere.test/")

        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Network error",
            "message": "Domain not found. Please check the URL is correct.",
        }

    def test_connection_refused_has_specific_hint(self, client, origin) -> None:
        origin.get("https://example.test/").mock(
            side_effect=httpx.ConnectError("[Errno 111] Connection refused")
        )
        resp = _get(client, "https://example.test/")

        assert resp.status_code == 500
        assert resp.json()["message"] == "Connection refused. The server may be down."

    def test_too_large(self, client, origin, monkeypatch) -> None:
        monkeypatch.setattr(settings, "max_response_bytes", 100)
        origin.get("https://example.test/huge").mock(
            return_value=httpx.Response(200, content=b"<p>" + b"x" * 200 + b"</p>")
        )
        resp = _get(client, "https://example.test/huge")

        assert resp.status_code == 502
        assert resp.json()["error"] == "Response too large"

    def test_insufficient_content_is_422(self, client, origin) -> None:
        origin.get("https://example.test/empty").mock(
            return_value=httpx.Response(200, text="<html><body><p>Log in</p></body></html>")
        )
        resp = _get(client, "https://example.test/empty")

        assert resp.status_code == 422
        assert resp.json()["error"] == "No content extracted"

    def test_parse_failure_is_500(self, client, origin) -> None:
        origin.get("https://example.test/a").mock(
            return_value=httpx.Response(200, text=_ARTICLE_PAGE)
        )
        with patch(
            "markscrape.scraper.pipeline.extract_main_content",
            side_effect=ValueError("parser exploded"),
        ):
            resp = _get(client, "https://example.test/a")

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Content parsing failed"
        assert "exploded" not in body["message"]

    def test_error_responses_are_json(self, client) -> None:
        resp = _get(client, "nope")
        assert resp.headers["content-type"].startswith("application/json")


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

class TestCors:
    def test_success_allows_any_origin(self, client, origin) -> None:
        origin.get("https://example.test/a").mock(
            return_value=httpx.Response(200, text=_ARTICLE_PAGE)
        )
        resp = _get(client, "https://example.test/a", headers={"Origin": "https://app.test"})
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_errors_allow_any_origin(self, client) -> None:
        resp = _get(client, None, headers={"Origin": "https://app.test"})
        assert resp.status_code == 400
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_headers_without_origin(self, client, origin) -> None:
        origin.get("https://example.test/a").mock(
            return_value=httpx.Response(200, text=_ARTICLE_PAGE)
        )
        resp = _get(client, "https://example.test/a")

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET, OPTIONS"
        assert resp.headers["access-control-allow-headers"] == "Content-Type"

    def test_error_headers_without_origin(self, client) -> None:
        resp = _get(client, None)
        assert resp.status_code == 400
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_preflight_is_empty_200(self, client) -> None:
        resp = client.options(
            "/api/scrape",
            headers={
                "Origin": "https://app.test",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "GET" in resp.headers["access-control-allow-methods"]

    def test_preflight_for_other_method_is_still_200(self, client) -> None:
        resp = client.options(
            "/api/scrape",
            headers={"Origin": "https://app.test", "Access-Control-Request-Method": "DELETE"},
        )
        assert resp.status_code == 200
        assert resp.content == b""

    def test_plain_options_is_empty_200(self, client) -> None:
        resp = client.options("/api/scrape")
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "*"
