"""Per-ecosystem registry handlers.

Each ecosystem contributes a pair of functions: one extracting a package
description from its registry, one deriving the documentation page to crawl.
The registry below maps ecosystems to those functions so callers never branch
on ecosystem names themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias
from collections.abc import Callable

import requests

from ..models import NO_DESCRIPTION, Ecosystem
from . import crates, golang, maven, npm, nuget, packagist, pypi, rubygems
from .base import DEFAULT_TIMEOUT, USER_AGENT, RegistryError, new_session

# (session, name, version) -> description; "" when the listing has none, None when
# the registry does not list the package
DescribeFunction: TypeAlias = Callable[[requests.Session, str, str], "str | None"]
# (session, name, version) -> documentation URL, or None when there is none
DocsUrlFunction: TypeAlias = Callable[[requests.Session, str, str], "str | None"]


@dataclass(slots=True, frozen=True)
class RegistryHandler:
    """Binding of an ecosystem to its description and documentation lookups."""

    ecosystem: Ecosystem
    display_name: str
    describe: DescribeFunction
    docs_url: DocsUrlFunction
    not_listed: str = NO_DESCRIPTION


REGISTRY_HANDLERS: dict[Ecosystem, RegistryHandler] = {
    Ecosystem.NPM: RegistryHandler(Ecosystem.NPM, "npm registry", npm.describe, npm.docs_url),
    Ecosystem.PYPI: RegistryHandler(Ecosystem.PYPI, "PyPI", pypi.describe, pypi.docs_url),
    Ecosystem.RUST: RegistryHandler(
        Ecosystem.RUST, "crates.io", crates.describe, crates.docs_url
    ),
    Ecosystem.RUBY: RegistryHandler(
        Ecosystem.RUBY, "RubyGems", rubygems.describe, rubygems.docs_url
    ),
    Ecosystem.GO: RegistryHandler(Ecosystem.GO, "Go modules", golang.describe, golang.docs_url),
    Ecosystem.JAVA: RegistryHandler(
        Ecosystem.JAVA, "Maven Central", maven.describe, maven.docs_url, maven.NOT_LISTED
    ),
    Ecosystem.DOTNET: RegistryHandler(
        Ecosystem.DOTNET, "NuGet", nuget.describe, nuget.docs_url, nuget.NOT_LISTED
    ),
    Ecosystem.PHP: RegistryHandler(
        Ecosystem.PHP, "Packagist", packagist.describe, packagist.docs_url, packagist.NOT_LISTED
    ),
}


class UnknownEcosystemError(ValueError):
    """Raised when no registry handler exists for an ecosystem value."""


def get_registry_handler(ecosystem: str | Ecosystem) -> RegistryHandler:
    """Return the handler for an ecosystem value, or raise UnknownEcosystemError."""
    resolved = Ecosystem.resolve(ecosystem)
    handler = REGISTRY_HANDLERS.get(resolved) if resolved is not None else None
    if handler is None:
        known = ", ".join(get_known_ecosystems())
        raise UnknownEcosystemError(f"Unsupported ecosystem '{ecosystem}'. Known: {known}")
    return handler


def get_known_ecosystems() -> list[str]:
    return sorted(ecosystem.value for ecosystem in REGISTRY_HANDLERS)


__all__ = [
    "DEFAULT_TIMEOUT",
    "REGISTRY_HANDLERS",
    "USER_AGENT",
    "RegistryError",
    "RegistryHandler",
    "UnknownEcosystemError",
    "get_known_ecosystems",
    "get_registry_handler",
    "new_session",
]
