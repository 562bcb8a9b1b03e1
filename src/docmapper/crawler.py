"""Documentation crawler: Firecrawl when configured, raw HTML otherwise."""

from __future__ import annotations

import html
import re
import time
from typing import Any
from collections.abc import Callable

import requests
import structlog
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from .models import DependencyRecord, Documentation
from .models.documentation import utcnow
from .registries import RegistryError, UnknownEcosystemError, get_registry_handler, new_session

FIRECRAWL_BASE_URL = "https://api.firecrawl.dev"
FIRECRAWL_TIMEOUT = 30
RAW_FETCH_TIMEOUT = 10
CONTENT_LIMIT = 5000
MAX_ATTEMPTS = 3
RATE_LIMIT_STATUSES = frozenset({403, 429})

NO_URL_NOTE = "No documentation URL available for this ecosystem/package"
BASIC_FETCH_NOTE = (
    "Basic HTML text extraction - consider using Firecrawl API for better results"
)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


class RateLimitedError(RuntimeError):
    """Raised when a documentation host answers 403/429."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"rate limited with status code {status_code}")


class FirecrawlError(RuntimeError):
    """Raised when the Firecrawl API reports an unsuccessful scrape."""


def extract_text(markup: str) -> str:
    """Drop script/style blocks and tags, then collapse whitespace."""
    text = _SCRIPT_RE.sub("", markup)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    return _WHITESPACE_RE.sub(" ", text).strip()


class DocumentationCrawler:
    """Derive a documentation URL per record and fetch its readable content.

    Results are cached for the lifetime of the instance, keyed by
    (ecosystem, name, version).
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        firecrawl_api_key: str | None = None,
        firecrawl_base_url: str = FIRECRAWL_BASE_URL,
        content_limit: int = CONTENT_LIMIT,
        logger: Any | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session = session or new_session()
        self._firecrawl_api_key = firecrawl_api_key
        self._firecrawl_base_url = firecrawl_base_url.rstrip("/")
        self._content_limit = content_limit
        self._log = logger or structlog.get_logger("docmapper.crawler")
        self._sleep = sleep
        self._cache: dict[tuple[str, str, str], Documentation] = {}

    def documentation_url(self, dependency: DependencyRecord) -> str | None:
        try:
            handler = get_registry_handler(dependency.ecosystem)
        except UnknownEcosystemError:
            return None
        return handler.docs_url(self._session, dependency.name, dependency.version)

    def crawl(self, dependency: DependencyRecord) -> Documentation:
        key = dependency.key
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            url = self.documentation_url(dependency)
            if url is None:
                documentation = Documentation.noted(NO_URL_NOTE)
            elif self._firecrawl_api_key:
                documentation = self._crawl_with_firecrawl(dependency, url)
            else:
                documentation = self._fetch_basic(dependency, url)
        except (requests.RequestException, RegistryError, ValueError) as exc:
            self._log.error(
                "crawler.failed",
                ecosystem=dependency.ecosystem,
                name=dependency.name,
                version=dependency.version,
                error=str(exc),
            )
            return Documentation.failure(str(exc))

        self._cache[key] = documentation
        return documentation

    # ---- Firecrawl ----------------------------------------------------------------------

    def _crawl_with_firecrawl(self, dependency: DependencyRecord, url: str) -> Documentation:
        try:
            response = self._session.post(
                f"{self._firecrawl_base_url}/v1/scrape",
                json={"url": url, "formats": ["markdown"], "onlyMainContent": True},
                headers={
                    "Authorization": f"Bearer {self._firecrawl_api_key}",
                    "Content-Type": "application/json",
                },
                timeout=FIRECRAWL_TIMEOUT,
            )
            response.raise_for_status()
            payload = response.json()
            if not isinstance(payload, dict) or not payload.get("success"):
                error = payload.get("error") if isinstance(payload, dict) else None
                raise FirecrawlError(error or "Firecrawl request failed")
            data = payload.get("data") or {}
            markdown = data.get("markdown") if isinstance(data, dict) else None
        except (requests.RequestException, ValueError, FirecrawlError) as exc:
            self._log.warning(
                "crawler.firecrawl_failed",
                name=dependency.name,
                version=dependency.version,
                error=str(exc),
            )
            return self._fetch_basic(dependency, url)

        return Documentation(
            url=url,
            content=markdown or "",
            crawled_at=utcnow(),
            source="firecrawl",
        )

    # ---- Raw fetch ----------------------------------------------------------------------

    def _get_page(self, url: str) -> requests.Response:
        response = self._session.get(url, headers=BROWSER_HEADERS, timeout=RAW_FETCH_TIMEOUT)
        if response.status_code in RATE_LIMIT_STATUSES:
            raise RateLimitedError(response.status_code)
        response.raise_for_status()
        return response

    def _log_rate_limit(self, retry_state: RetryCallState) -> None:
        wait = retry_state.next_action.sleep if retry_state.next_action else 0
        self._log.warning(
            "crawler.rate_limited",
            url=retry_state.args[0] if retry_state.args else None,
            attempt=retry_state.attempt_number,
            retry_in=wait,
        )

    def _fetch_basic(self, dependency: DependencyRecord, url: str) -> Documentation:
        # Only rate-limit responses are retried: waits of 2s then 4s.
        retryer = Retrying(
            retry=retry_if_exception_type(RateLimitedError),
            stop=stop_after_attempt(MAX_ATTEMPTS),
            wait=wait_incrementing(start=2, increment=2),
            sleep=self._sleep,
            before_sleep=self._log_rate_limit,
            reraise=True,
        )
        try:
            response = retryer(self._get_page, url)
        except (requests.RequestException, RateLimitedError) as exc:
            self._log.warning(
                "crawler.fetch_failed",
                name=dependency.name,
                version=dependency.version,
                url=url,
                error=str(exc),
            )
            return Documentation.failure(f"Failed to fetch documentation: {exc}", url=url)

        content = extract_text(response.text)
        return Documentation(
            url=url,
            content=content[: self._content_limit],
            crawled_at=utcnow(),
            source="basic_fetch",
            note=BASIC_FETCH_NOTE,
        )
