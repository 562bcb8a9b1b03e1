"""Dependency record model shared by the scanner, fetcher and crawler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from collections.abc import Mapping
from typing import Any


class Ecosystem(str, Enum):
    """Package registries the mapper knows how to query."""

    NPM = "npm"
    PYPI = "pypi"
    RUST = "rust"
    RUBY = "ruby"
    GO = "go"
    JAVA = "java"
    DOTNET = "dotnet"
    PHP = "php"

    @classmethod
    def resolve(cls, value: str | Ecosystem | None) -> Ecosystem | None:
        """Return the ecosystem for a wire value, or None when unsupported."""
        if isinstance(value, Ecosystem):
            return value
        if not value:
            return None
        normalized = str(value).strip().lower()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return None


_ALIASES = {"python": "pypi"}

WORKSPACE_PREFIX = "workspace:"


@dataclass(frozen=True)
class DependencyRecord:
    """A single dependency declared by a manifest file."""

    ecosystem: str
    name: str
    version: str
    source: str = ""
    manifest_path: str = ""
    is_dev_dependency: bool = False

    def __post_init__(self) -> None:
        if not self.ecosystem:
            raise ValueError("Dependency ecosystem must be non-empty")
        if not self.name:
            raise ValueError("Dependency name must be non-empty")

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.ecosystem, self.name, self.version)

    @property
    def is_workspace(self) -> bool:
        """True for internal monorepo packages (``workspace:*`` and friends)."""
        return self.version == "workspace:*" or WORKSPACE_PREFIX in self.version

    def label(self) -> str:
        return f"{self.ecosystem}/{self.name}@{self.version}"

    def to_dict(self) -> dict[str, object]:
        return {
            "ecosystem": self.ecosystem,
            "name": self.name,
            "version": self.version,
            "source": self.source,
            "manifestPath": self.manifest_path,
            "isDevDependency": self.is_dev_dependency,
        }

    @classmethod
    def from_descriptor(cls, item: Mapping[str, Any]) -> DependencyRecord:
        """Build a record from one entry of a dependency-scan JSON document."""
        dependency = item.get("dependency") or {}
        metadata = item.get("metadata") or {}
        return cls(
            ecosystem=str(item.get("ecosystem") or ""),
            name=str(dependency.get("name") or ""),
            version=str(dependency.get("version") or ""),
            source=str(dependency.get("source") or ""),
            manifest_path=str(item.get("manifest_path") or ""),
            is_dev_dependency=bool(metadata.get("dev_dependency", False)),
        )
