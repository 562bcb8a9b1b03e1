"""RubyGems handler."""

from __future__ import annotations

import requests

from .base import get_json, is_concrete_version, quote_segment

API_URL = "https://rubygems.org/api/v1/gems"
GEMS_URL = "https://rubygems.org/gems"


def describe(session: requests.Session, name: str, version: str) -> str | None:
    data = get_json(session, f"{API_URL}/{quote_segment(name)}.json", registry="RubyGems")
    if not isinstance(data, dict):
        return None
    return data.get("info") or data.get("summary") or None


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    if is_concrete_version(version):
        return f"{GEMS_URL}/{quote_segment(name)}/versions/{quote_segment(version)}"
    return f"{GEMS_URL}/{quote_segment(name)}"
