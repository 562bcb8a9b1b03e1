"""Tests for DocumentationCrawler."""

from __future__ import annotations

import requests

from conftest import FakeResponse, FakeSession
from docmapper.crawler import (
    BASIC_FETCH_NOTE,
    NO_URL_NOTE,
    DocumentationCrawler,
    extract_text,
)
from docmapper.models import DependencyRecord

DOCS_URL = "https://pypi.org/project/requests/2.31.0/"
SCRAPE_URL = "https://api.firecrawl.dev/v1/scrape"

PAGE = """<html><head><style>body { color: red; }</style>
<script>var tracking = true;</script></head>
<body><h1>Requests</h1>
<p>HTTP   for&nbsp;Humans &amp; more.</p></body></html>"""


def _dep() -> DependencyRecord:
    return DependencyRecord(ecosystem="pypi", name="requests", version="2.31.0")


class TestExtractText:
    def test_strips_markup(self):
        assert extract_text(PAGE) == "Requests HTTP for Humans & more."

    def test_plain_text(self):
        assert extract_text("  just\n text ") == "just text"


# ── raw fetch ──


class TestBasicFetch:
    def test_success(self, no_sleep):
        session = FakeSession({DOCS_URL: FakeResponse(200, text=PAGE)})
        doc = DocumentationCrawler(session, sleep=no_sleep).crawl(_dep())

        assert doc.url == DOCS_URL
        assert doc.content == "Requests HTTP for Humans & more."
        assert doc.source == "basic_fetch"
        assert doc.note == BASIC_FETCH_NOTE
        assert doc.crawled_at is not None
        assert not doc.failed

    def test_content_truncated(self, no_sleep):
        session = FakeSession({DOCS_URL: FakeResponse(200, text=PAGE)})
        doc = DocumentationCrawler(session, content_limit=8, sleep=no_sleep).crawl(_dep())
        assert doc.content == "Requests"

    def test_rate_limit_retried_with_growing_delay(self, no_sleep):
        session = FakeSession(
            {DOCS_URL: [FakeResponse(429), FakeResponse(403), FakeResponse(200, text=PAGE)]}
        )
        doc = DocumentationCrawler(session, sleep=no_sleep).crawl(_dep())

        assert not doc.failed
        assert len(session.urls()) == 3
        assert no_sleep.calls == [2, 4]

    def test_rate_limit_gives_up_after_three_attempts(self, no_sleep):
        session = FakeSession({DOCS_URL: FakeResponse(429)})
        doc = DocumentationCrawler(session, sleep=no_sleep).crawl(_dep())

        assert doc.failed
        assert doc.error.startswith("Failed to fetch documentation:")
        assert doc.url == DOCS_URL
        assert len(session.urls()) == 3

    def test_other_errors_not_retried(self, no_sleep):
        session = FakeSession({DOCS_URL: FakeResponse(500)})
        doc = DocumentationCrawler(session, sleep=no_sleep).crawl(_dep())

        assert doc.failed
        assert len(session.urls()) == 1
        assert no_sleep.calls == []

    def test_connection_error(self, no_sleep):
        session = FakeSession({DOCS_URL: requests.ConnectionError("refused")})
        doc = DocumentationCrawler(session, sleep=no_sleep).crawl(_dep())
        assert doc.failed
        assert "refused" in doc.error


# ── Firecrawl ──


class TestFirecrawl:
    def test_scrape(self, no_sleep):
        session = FakeSession(
            post_routes={
                SCRAPE_URL: FakeResponse(
                    200, {"success": True, "data": {"markdown": "# Requests"}}
                )
            }
        )
        crawler = DocumentationCrawler(session, firecrawl_api_key="fc-test", sleep=no_sleep)
        doc = crawler.crawl(_dep())

        assert doc.source == "firecrawl"
        assert doc.content == "# Requests"
        _, _, kwargs = session.calls[0]
        assert kwargs["json"] == {
            "url": DOCS_URL,
            "formats": ["markdown"],
            "onlyMainContent": True,
        }
        assert kwargs["headers"]["Authorization"] == "Bearer fc-test"

    def test_custom_base_url(self, no_sleep):
        url = "http://localhost:3002/v1/scrape"
        session = FakeSession(
            post_routes={url: FakeResponse(200, {"success": True, "data": {"markdown": "x"}})}
        )
        crawler = DocumentationCrawler(
            session,
            firecrawl_api_key="k",
            firecrawl_base_url="http://localhost:3002/",
            sleep=no_sleep,
        )
        assert crawler.crawl(_dep()).source == "firecrawl"

    def test_failure_falls_back_to_basic_fetch(self, no_sleep):
        session = FakeSession(
            get_routes={DOCS_URL: FakeResponse(200, text=PAGE)},
            post_routes={SCRAPE_URL: FakeResponse(200, {"success": False, "error": "quota"})},
        )
        crawler = DocumentationCrawler(session, firecrawl_api_key="k", sleep=no_sleep)
        doc = crawler.crawl(_dep())

        assert doc.source == "basic_fetch"
        assert session.urls("POST") == [SCRAPE_URL]
        assert session.urls("GET") == [DOCS_URL]

    def test_http_error_falls_back(self, no_sleep):
        session = FakeSession(
            get_routes={DOCS_URL: FakeResponse(200, text=PAGE)},
            post_routes={SCRAPE_URL: FakeResponse(500)},
        )
        doc = DocumentationCrawler(session, firecrawl_api_key="k", sleep=no_sleep).crawl(_dep())
        assert doc.source == "basic_fetch"


# ── URL derivation and caching ──


class TestCrawl:
    def test_unsupported_ecosystem_noted(self, no_sleep):
        session = FakeSession({})
        dep = DependencyRecord(ecosystem="cobol", name="x", version="1")
        doc = DocumentationCrawler(session, sleep=no_sleep).crawl(dep)
        assert doc.note == NO_URL_NOTE
        assert session.calls == []

    def test_invalid_maven_coordinate_noted(self, no_sleep):
        dep = DependencyRecord(ecosystem="java", name="broken", version="1.0")
        doc = DocumentationCrawler(FakeSession({}), sleep=no_sleep).crawl(dep)
        assert doc.note == NO_URL_NOTE

    def test_cached_per_key(self, no_sleep):
        session = FakeSession({DOCS_URL: FakeResponse(200, text=PAGE)})
        crawler = DocumentationCrawler(session, sleep=no_sleep)

        first = crawler.crawl(_dep())
        second = crawler.crawl(_dep())

        assert first is second
        assert session.urls() == [DOCS_URL]
