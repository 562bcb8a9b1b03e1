"""Manifest parsers keyed by the file names they understand."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import TypeAlias
from collections.abc import Callable

from ..models import DependencyRecord
from . import (
    cargo_toml,
    composer_json,
    gemfile,
    go_mod,
    msbuild_project,
    package_json,
    pom_xml,
    pyproject_toml,
    requirements_txt,
)

ParseFunction: TypeAlias = Callable[[Path], list[DependencyRecord]]

# Registry of manifest parsers, keyed by file name or glob pattern.
MANIFEST_PARSERS: dict[str, ParseFunction] = {
    "package.json": package_json.parse,
    "requirements.txt": requirements_txt.parse,
    "pyproject.toml": pyproject_toml.parse,
    "Cargo.toml": cargo_toml.parse,
    "Gemfile": gemfile.parse,
    "pom.xml": pom_xml.parse,
    "composer.json": composer_json.parse,
    "go.mod": go_mod.parse,
    "*.csproj": msbuild_project.parse,
    "*.fsproj": msbuild_project.parse,
    "*.vbproj": msbuild_project.parse,
}


def get_manifest_parser(path: Path) -> ParseFunction | None:
    """Return the parser for a manifest file name, or None if unrecognized."""
    name = path.name
    parser = MANIFEST_PARSERS.get(name)
    if parser is not None:
        return parser
    for pattern, candidate in MANIFEST_PARSERS.items():
        if fnmatch(name, pattern):
            return candidate
    return None


def get_manifest_patterns() -> list[str]:
    return list(MANIFEST_PARSERS.keys())


__all__ = [
    "MANIFEST_PARSERS",
    "ParseFunction",
    "get_manifest_parser",
    "get_manifest_patterns",
]
