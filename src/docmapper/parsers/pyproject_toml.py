"""Parse pyproject.toml (Poetry tables and PEP 621 dependencies)."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from ..models import DependencyRecord, Ecosystem
from .requirements_txt import parse_requirement


def _poetry_version(spec: Any) -> str:
    if isinstance(spec, str):
        return spec or "*"
    if isinstance(spec, dict):
        return str(spec.get("version") or "*")
    if isinstance(spec, list) and spec:
        # Multiple-constraint form: first entry wins.
        return _poetry_version(spec[0])
    return "*"


def _record(path: Path, name: str, version: str, is_dev: bool) -> DependencyRecord:
    return DependencyRecord(
        ecosystem=Ecosystem.PYPI.value,
        name=name,
        version=version,
        source="pypi",
        manifest_path=str(path),
        is_dev_dependency=is_dev,
    )


def _table(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _poetry_tables(poetry: dict[str, Any]) -> list[tuple[dict[str, Any], bool]]:
    tables: list[tuple[dict[str, Any], bool]] = [
        (_table(poetry.get("dependencies")), False),
        (_table(poetry.get("dev-dependencies")), True),
    ]
    for group in _table(poetry.get("group")).values():
        tables.append((_table(_table(group).get("dependencies")), True))
    return tables


def parse(path: Path) -> list[DependencyRecord]:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    records: list[DependencyRecord] = []

    poetry = _table(_table(data.get("tool")).get("poetry"))
    for table, is_dev in _poetry_tables(poetry):
        for name, spec in table.items():
            if name == "python":
                continue
            records.append(_record(path, name, _poetry_version(spec), is_dev))

    dependencies = _table(data.get("project")).get("dependencies")
    if not isinstance(dependencies, list):
        dependencies = []
    for line in dependencies:
        parsed = parse_requirement(str(line))
        if parsed is not None:
            records.append(_record(path, parsed[0], parsed[1], False))

    return records
