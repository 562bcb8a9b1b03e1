"""Parse package.json and extract dependencies across sections."""

from __future__ import annotations

import json
import re
from pathlib import Path

from ..models import DependencyRecord, Ecosystem
from ..models.dependency import WORKSPACE_PREFIX

_LEADING_RANGE = re.compile(r"^[^\d]*")
ALIAS_PREFIX = "npm:"

# (section, is_dev)
SECTIONS = (
    ("dependencies", False),
    ("peerDependencies", False),
    ("optionalDependencies", False),
    ("devDependencies", True),
)


def normalize_version(spec: str) -> str:
    """Strip range operators (``^``, ``~``, ``>=``) from an npm version spec.

    ``workspace:`` and ``npm:`` alias specifiers and specs without any digit
    (``*``, ``latest``, ``file:../pkg``) are returned unchanged.
    """
    spec = spec.strip()
    if spec.startswith((WORKSPACE_PREFIX, ALIAS_PREFIX)):
        return spec
    stripped = _LEADING_RANGE.sub("", spec)
    return stripped or spec


def resolve_alias(name: str, spec: str) -> tuple[str, str]:
    """Return the real (package, version) behind ``"alias": "npm:pkg@range"``."""
    spec = spec.strip()
    if not spec.startswith(ALIAS_PREFIX):
        return name, normalize_version(spec)
    target = spec[len(ALIAS_PREFIX) :]
    if not target:
        return name, spec
    # The version separator is the last "@" past a leading scope marker.
    package, sep, version = target[1:].rpartition("@")
    if not sep:
        return target, "*"
    return target[0] + package, normalize_version(version) if version else "*"


def parse(path: Path) -> list[DependencyRecord]:
    """Return dependency records from all dependency sections."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return []

    records: list[DependencyRecord] = []
    for section, is_dev in SECTIONS:
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for alias, spec in deps.items():
            name, version = resolve_alias(alias, str(spec))
            records.append(
                DependencyRecord(
                    ecosystem=Ecosystem.NPM.value,
                    name=name,
                    version=version,
                    source="registry",
                    manifest_path=str(path),
                    is_dev_dependency=is_dev,
                )
            )

    return records
