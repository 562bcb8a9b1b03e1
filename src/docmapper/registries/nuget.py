"""NuGet registration API handler."""

from __future__ import annotations

from typing import Any
from collections.abc import Iterable

import requests

from .base import get_json, is_concrete_version, quote_segment

REGISTRATION_URL = "https://api.nuget.org/v3/registration5-semver1"
GALLERY_URL = "https://www.nuget.org/packages"
NOT_LISTED = "NuGet package description not available"


def _catalog_entries(index: dict[str, Any]) -> Iterable[dict[str, Any]]:
    """Yield catalog entries from inlined registration pages, oldest first.

    Large packages only link their pages; those are not followed.
    """
    for page in index.get("items") or []:
        if not isinstance(page, dict):
            continue
        if isinstance(page.get("catalogEntry"), dict):
            yield page["catalogEntry"]
            continue
        for leaf in page.get("items") or []:
            if isinstance(leaf, dict) and isinstance(leaf.get("catalogEntry"), dict):
                yield leaf["catalogEntry"]


def describe(session: requests.Session, name: str, version: str) -> str | None:
    data = get_json(
        session,
        f"{REGISTRATION_URL}/{quote_segment(name.lower())}/index.json",
        registry="NuGet",
    )
    if not isinstance(data, dict):
        return None

    entries = list(_catalog_entries(data))
    if not entries:
        return None

    for entry in entries:
        if str(entry.get("version", "")).lower() == version.lower():
            return str(entry.get("description") or "")
    return str(entries[-1].get("description") or "")


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    if is_concrete_version(version):
        return f"{GALLERY_URL}/{quote_segment(name)}/{quote_segment(version)}"
    return f"{GALLERY_URL}/{quote_segment(name)}"
