"""Parse Maven pom.xml files."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from ..models import DependencyRecord, Ecosystem

_NS = "{http://maven.apache.org/POM/4.0.0}"
_PROP_RE = re.compile(r"\$\{([^}]+)\}")

DEFAULT_VERSION = "latest"


def _text(element: ET.Element | None) -> str | None:
    if element is None or not element.text:
        return None
    return element.text.strip() or None


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[-1]


def _properties(root: ET.Element, ns: str) -> dict[str, str]:
    props: dict[str, str] = {}
    props_el = root.find(f"{ns}properties")
    if props_el is not None:
        for child in props_el:
            if child.text:
                props[_local_name(child.tag)] = child.text.strip()
    version = _text(root.find(f"{ns}version"))
    if version:
        props.setdefault("project.version", version)
    return props


def _resolve(value: str, props: dict[str, str]) -> str:
    return _PROP_RE.sub(lambda m: props.get(m.group(1), m.group(0)), value)


def parse(path: Path) -> list[DependencyRecord]:
    """Return ``groupId:artifactId`` records; ``test``-scoped entries are dev."""
    root = ET.fromstring(path.read_text(encoding="utf-8"))
    ns = _NS if root.tag.startswith(_NS) else ""
    props = _properties(root, ns)

    records: list[DependencyRecord] = []
    for dep_el in root.iter(f"{ns}dependency"):
        group_id = _text(dep_el.find(f"{ns}groupId"))
        artifact_id = _text(dep_el.find(f"{ns}artifactId"))
        if not group_id or not artifact_id:
            continue

        version = _text(dep_el.find(f"{ns}version"))
        scope = _text(dep_el.find(f"{ns}scope"))
        records.append(
            DependencyRecord(
                ecosystem=Ecosystem.JAVA.value,
                name=f"{_resolve(group_id, props)}:{artifact_id}",
                version=_resolve(version, props) if version else DEFAULT_VERSION,
                source="maven_central",
                manifest_path=str(path),
                is_dev_dependency=scope == "test",
            )
        )

    return records
