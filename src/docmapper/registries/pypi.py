"""PyPI JSON API handler."""

from __future__ import annotations

from typing import Any

import requests

from .base import RegistryError, get_json, is_concrete_version, quote_segment

API_URL = "https://pypi.org/pypi"
PROJECT_URL = "https://pypi.org/project"


def _info(session: requests.Session, url: str) -> dict[str, Any]:
    data = get_json(session, url, registry="PyPI")
    info = data.get("info") if isinstance(data, dict) else None
    return info if isinstance(info, dict) else {}


def describe(session: requests.Session, name: str, version: str) -> str | None:
    """Look up the release first, then the project when the release is unknown."""
    try:
        info = _info(session, f"{API_URL}/{quote_segment(name)}/{quote_segment(version)}/json")
    except RegistryError as first:
        try:
            info = _info(session, f"{API_URL}/{quote_segment(name)}/json")
        except RegistryError:
            raise first from None

    return info.get("summary") or info.get("description") or None


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    if is_concrete_version(version):
        return f"{PROJECT_URL}/{quote_segment(name)}/{quote_segment(version)}/"
    return f"{PROJECT_URL}/{quote_segment(name)}/"
