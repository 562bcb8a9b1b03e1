"""Go module handler.

Go has no central description service; modules hosted on GitHub use the
repository description from the GitHub API.
"""

from __future__ import annotations

import os

import requests

from .base import RegistryError, get_json, is_concrete_version, quote_segment

GITHUB_API_URL = "https://api.github.com/repos"
PKG_GO_DEV_URL = "https://pkg.go.dev"


def _github_headers() -> dict[str, str]:
    headers = {"Accept": "application/vnd.github+json"}
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def _github_description(session: requests.Session, name: str) -> str | None:
    parts = name.split("/")
    fallback = f"GitHub Go module {name}"
    if len(parts) < 3:
        return fallback
    owner, repo = parts[1], parts[2]
    try:
        data = get_json(
            session,
            f"{GITHUB_API_URL}/{quote_segment(owner)}/{quote_segment(repo)}",
            registry="GitHub",
            headers=_github_headers(),
        )
    except RegistryError:
        return fallback
    if not isinstance(data, dict):
        return None
    return data.get("description") or None


def describe(session: requests.Session, name: str, version: str) -> str | None:
    if name.startswith("github.com/"):
        return _github_description(session, name)
    return f"Go module {name}@{version}"


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    if name.startswith("github.com/"):
        return f"https://{name}"
    module = quote_segment(name, safe="/")
    if is_concrete_version(version):
        return f"{PKG_GO_DEV_URL}/{module}@{quote_segment(version)}"
    return f"{PKG_GO_DEV_URL}/{module}"
