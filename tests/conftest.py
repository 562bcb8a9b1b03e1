"""Shared fixtures: fake HTTP sessions and an in-memory package store."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from docmapper.store import PackageStore


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._json = json_data
        self.text = text

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Route GET/POST calls by URL to canned responses.

    A route value may be a FakeResponse, an exception instance to raise, or a
    list of either, consumed one per call.
    """

    def __init__(
        self,
        get_routes: dict[str, Any] | None = None,
        post_routes: dict[str, Any] | None = None,
    ) -> None:
        self.get_routes = dict(get_routes or {})
        self.post_routes = dict(post_routes or {})
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def _dispatch(self, routes: dict[str, Any], method: str, url: str, kwargs: dict) -> Any:
        self.calls.append((method, url, kwargs))
        if url not in routes:
            raise requests.ConnectionError(f"no route for {url}")
        outcome = routes[url]
        if isinstance(outcome, list):
            outcome = outcome.pop(0) if len(outcome) > 1 else outcome[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch(self.get_routes, "GET", url, kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch(self.post_routes, "POST", url, kwargs)

    def urls(self, method: str = "GET") -> list[str]:
        return [url for m, url, _ in self.calls if m == method]


@pytest.fixture
def store():
    with PackageStore("sqlite://") as package_store:
        yield package_store


@pytest.fixture
def no_sleep():
    calls: list[float] = []

    def sleep(seconds: float) -> None:
        calls.append(seconds)

    sleep.calls = calls
    return sleep
