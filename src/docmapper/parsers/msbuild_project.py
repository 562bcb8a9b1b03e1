"""Parse .NET project files (*.csproj, *.fsproj, *.vbproj)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from ..models import DependencyRecord, Ecosystem

DEFAULT_VERSION = "latest"


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[-1]


def _version(element: ET.Element) -> str | None:
    version = element.get("Version")
    if version:
        return version
    for child in element:
        if _local_name(child.tag) == "Version" and child.text:
            return child.text.strip()
    return None


def parse(path: Path) -> list[DependencyRecord]:
    """Return ``<PackageReference>`` entries; version may be an attribute or child."""
    root = ET.fromstring(path.read_text(encoding="utf-8-sig"))

    records: list[DependencyRecord] = []
    for element in root.iter():
        if _local_name(element.tag) != "PackageReference":
            continue
        name = element.get("Include")
        if not name:
            continue
        records.append(
            DependencyRecord(
                ecosystem=Ecosystem.DOTNET.value,
                name=name,
                version=_version(element) or DEFAULT_VERSION,
                source=".net_nuget",
                manifest_path=str(path),
            )
        )

    return records
