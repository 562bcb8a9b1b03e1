"""Parse pip requirements.txt files."""

from __future__ import annotations

from pathlib import Path

import structlog
from packaging.requirements import InvalidRequirement, Requirement

from ..models import DependencyRecord, Ecosystem

log = structlog.get_logger("docmapper.scanner")

_OPTION_PREFIXES = ("-r", "-c", "-e", "-f", "-i", "--")


def requirement_version(requirement: Requirement) -> str:
    """Collapse a requirement's specifier set into a single version string.

    A lone specifier yields its version (``>=1.0`` → ``1.0``); several are kept
    as the full specifier set; none yields ``*``.
    """
    specifiers = list(requirement.specifier)
    if not specifiers:
        return "*"
    if len(specifiers) == 1:
        return specifiers[0].version
    return str(requirement.specifier)


def parse_requirement(line: str) -> tuple[str, str] | None:
    """Return (name, version) for one requirement string, or None if invalid."""
    try:
        requirement = Requirement(line)
    except InvalidRequirement:
        return None
    return requirement.name, requirement_version(requirement)


def parse(path: Path) -> list[DependencyRecord]:
    records: list[DependencyRecord] = []

    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.split(" #", 1)[0].strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith(_OPTION_PREFIXES):
            continue

        parsed = parse_requirement(line)
        if parsed is None:
            log.debug("scanner.requirement_skipped", line=line, manifest=str(path))
            continue

        name, version = parsed
        records.append(
            DependencyRecord(
                ecosystem=Ecosystem.PYPI.value,
                name=name,
                version=version,
                source="pypi",
                manifest_path=str(path),
            )
        )

    return records
