"""Maven Central handler."""

from __future__ import annotations

import requests

from .base import get_json, is_concrete_version, quote_segment

SEARCH_URL = "https://search.maven.org/solrsearch/select"
MVNREPOSITORY_URL = "https://mvnrepository.com/artifact"

INVALID_COORDINATE = "Invalid Maven coordinate format"
NOT_LISTED = "Maven package description not available"


def split_coordinate(name: str) -> tuple[str, str] | None:
    group_id, _, artifact_id = name.partition(":")
    if not group_id or not artifact_id:
        return None
    return group_id, artifact_id


def describe(session: requests.Session, name: str, version: str) -> str | None:
    """Confirm the artifact exists on Maven Central.

    The search API carries no description, so a hit yields a synthesized one.
    """
    coordinate = split_coordinate(name)
    if coordinate is None:
        return INVALID_COORDINATE
    group_id, artifact_id = coordinate

    data = get_json(
        session,
        SEARCH_URL,
        registry="Maven",
        params={"q": f'g:"{group_id}" AND a:"{artifact_id}"', "rows": 1, "wt": "json"},
    )
    response = data.get("response") if isinstance(data, dict) else None
    docs = response.get("docs") if isinstance(response, dict) else None
    if docs:
        return f"Maven package {group_id}:{artifact_id} version {version}"
    return None


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    coordinate = split_coordinate(name)
    if coordinate is None:
        return None
    group_id, artifact_id = coordinate
    url = f"{MVNREPOSITORY_URL}/{quote_segment(group_id)}/{quote_segment(artifact_id)}"
    if is_concrete_version(version):
        url = f"{url}/{quote_segment(version)}"
    return url
