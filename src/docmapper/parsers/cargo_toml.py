"""Parse Rust Cargo.toml files."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from ..models import DependencyRecord, Ecosystem

# (table, is_dev)
SECTIONS = (
    ("dependencies", False),
    ("build-dependencies", False),
    ("dev-dependencies", True),
)


def _version(spec: Any) -> str:
    if isinstance(spec, str):
        return spec or "*"
    if isinstance(spec, dict):
        return str(spec.get("version") or "*")
    return "*"


def parse(path: Path) -> list[DependencyRecord]:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    records: list[DependencyRecord] = []

    for section, is_dev in SECTIONS:
        table = data.get(section) or {}
        if not isinstance(table, dict):
            continue
        for name, spec in table.items():
            # `foo = { package = "bar" }` renames a crate; the registry knows it as bar.
            crate = spec.get("package", name) if isinstance(spec, dict) else name
            records.append(
                DependencyRecord(
                    ecosystem=Ecosystem.RUST.value,
                    name=str(crate),
                    version=_version(spec),
                    source="crates.io",
                    manifest_path=str(path),
                    is_dev_dependency=is_dev,
                )
            )

    return records
