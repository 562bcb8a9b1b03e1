"""Parse PHP composer.json files."""

from __future__ import annotations

import json
from pathlib import Path

from ..models import DependencyRecord, Ecosystem

SECTIONS = (("require", False), ("require-dev", True))


def _is_platform_package(name: str) -> bool:
    """``php`` and ``ext-*`` entries describe the runtime, not Packagist packages."""
    return name == "php" or name.startswith("ext-")


def parse(path: Path) -> list[DependencyRecord]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return []

    records: list[DependencyRecord] = []
    for section, is_dev in SECTIONS:
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for name, version in deps.items():
            if _is_platform_package(name):
                continue
            records.append(
                DependencyRecord(
                    ecosystem=Ecosystem.PHP.value,
                    name=name,
                    version=str(version),
                    source="packagist.org",
                    manifest_path=str(path),
                    is_dev_dependency=is_dev,
                )
            )

    return records
