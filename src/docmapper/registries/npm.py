"""npm registry handler."""

from __future__ import annotations

import re
from typing import Any

import requests
import structlog

from .base import RegistryError, get_json, quote_segment

REGISTRY_URL = "https://registry.npmjs.org"
WEBSITE_URL = "https://www.npmjs.com/package"
REPOSITORY_LOOKUP_TIMEOUT = 5

log = structlog.get_logger("docmapper.crawler")

_SSH_GITHUB = re.compile(r"^(?:ssh://)?git@github\.com[:/]")
_SHORTHAND = re.compile(r"^(?:github:)?([\w.-]+/[\w.-]+)$")


def package_url(name: str) -> str:
    # Scoped packages keep their "@" and escape the slash: @types%2Fnode
    return f"{REGISTRY_URL}/{quote_segment(name, safe='@')}"


def describe(session: requests.Session, name: str, version: str) -> str | None:
    data = get_json(session, package_url(name), registry="NPM")
    if not isinstance(data, dict):
        return None

    versions = data.get("versions")
    if isinstance(versions, dict):
        meta = versions.get(version)
        if isinstance(meta, dict) and meta.get("description"):
            return str(meta["description"])
    return data.get("description") or None


def normalize_repository_url(url: str) -> str:
    """Turn ``git+https://github.com/u/r.git`` style URLs into browsable ones."""
    url = url.strip()
    shorthand = _SHORTHAND.match(url)
    if shorthand:
        return f"https://github.com/{shorthand.group(1)}"
    url = re.sub(r"^git\+", "", url)
    url = _SSH_GITHUB.sub("https://github.com/", url)
    url = re.sub(r"^git://", "https://", url)
    return re.sub(r"\.git$", "", url)


def repository_url(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    repository = data.get("repository")
    if isinstance(repository, dict):
        repository = repository.get("url")
    if not isinstance(repository, str) or not repository:
        return None
    return normalize_repository_url(repository)


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    """Prefer the package's GitHub repository over the npmjs.com page."""
    try:
        data = get_json(
            session, package_url(name), registry="NPM", timeout=REPOSITORY_LOOKUP_TIMEOUT
        )
    except RegistryError as exc:
        log.warning("crawler.repository_lookup_failed", name=name, error=str(exc))
    else:
        repo = repository_url(data)
        if repo and "github.com" in repo:
            return repo

    return f"{WEBSITE_URL}/{quote_segment(name, safe='@/')}"
