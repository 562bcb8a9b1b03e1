"""Shared HTTP helpers for registry handlers."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

import requests

USER_AGENT = "DocumentationMapper/1.0"
DEFAULT_TIMEOUT = 10

_CONCRETE_VERSION = re.compile(r"^v?\d[0-9A-Za-z.+!_-]*$")


class RegistryError(RuntimeError):
    """Raised when a registry cannot be reached or returns an unusable response."""


def new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
    return session


def get_json(
    session: requests.Session,
    url: str,
    *,
    registry: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """GET ``url`` and decode its JSON body, raising RegistryError on any failure."""
    try:
        response = session.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise RegistryError(f"{registry} fetch failed: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise RegistryError(
            f"{registry} fetch failed: unexpected status code {response.status_code}"
        )

    try:
        return response.json()
    except ValueError as exc:
        raise RegistryError(f"{registry} returned invalid JSON: {exc}") from exc


def quote_segment(value: str, safe: str = "") -> str:
    return quote(value, safe=safe)


def is_concrete_version(version: str) -> bool:
    """True for pinned versions such as ``1.2.3`` or ``v0.4.0``; False for ranges."""
    return bool(_CONCRETE_VERSION.match(version or ""))
