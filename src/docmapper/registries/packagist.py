"""Packagist metadata API handler."""

from __future__ import annotations

from typing import Any

import requests

from .base import get_json, quote_segment

METADATA_URL = "https://repo.packagist.org/p2"
PACKAGES_URL = "https://packagist.org/packages"
NOT_LISTED = "Packagist package description not available"


def _select(versions: Any, version: str) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    """Return (matching release, latest release) from a p2 version listing.

    p2 responses list releases newest first; older endpoints key them by version.
    """
    if isinstance(versions, dict):
        releases = [v for v in versions.values() if isinstance(v, dict)]
        match = versions.get(version)
        latest = releases[-1] if releases else None
        return (match if isinstance(match, dict) else None), latest

    if isinstance(versions, list):
        releases = [v for v in versions if isinstance(v, dict)]
        wanted = version.lstrip("v")
        match = next(
            (r for r in releases if str(r.get("version", "")).lstrip("v") == wanted), None
        )
        return match, (releases[0] if releases else None)

    return None, None


def describe(session: requests.Session, name: str, version: str) -> str | None:
    data = get_json(
        session, f"{METADATA_URL}/{quote_segment(name, safe='/')}.json", registry="Packagist"
    )
    packages = data.get("packages") if isinstance(data, dict) else None
    if not isinstance(packages, dict):
        return None

    match, latest = _select(packages.get(name), version)
    if match is None and latest is None:
        return None
    # Minified p2 payloads only repeat a field when it changes, so the latest
    # release is the fallback for a matching release without a description.
    for release in (match, latest):
        if release and release.get("description"):
            return str(release["description"])
    return ""


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    return f"{PACKAGES_URL}/{quote_segment(name, safe='/')}"
