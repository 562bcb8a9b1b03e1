"""Persisted package entry model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from collections.abc import Mapping
from typing import Any

from .dependency import DependencyRecord
from .description import DescriptionResult, DescriptionStatus
from .documentation import Documentation, format_timestamp, parse_timestamp, utcnow

_VALID_STATUSES = {status.value for status in DescriptionStatus}


@dataclass(frozen=True)
class PackageEntry:
    """A dependency with its registry description and crawled documentation."""

    ecosystem: str
    name: str
    version: str
    description: str
    documentation: Documentation
    last_updated: datetime
    source: str = ""
    manifest_path: str = ""
    is_dev_dependency: bool = False
    description_status: str = DescriptionStatus.FOUND.value

    def __post_init__(self) -> None:
        if not self.ecosystem:
            raise ValueError("Package ecosystem must be non-empty")
        if not self.name:
            raise ValueError("Package name must be non-empty")
        if self.last_updated.tzinfo is None:
            raise ValueError("last_updated must be timezone-aware")
        if self.description_status not in _VALID_STATUSES:
            raise ValueError(f"Invalid description status: {self.description_status}")

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.ecosystem, self.name, self.version)

    def to_dict(self) -> dict[str, object]:
        return {
            "ecosystem": self.ecosystem,
            "name": self.name,
            "version": self.version,
            "source": self.source,
            "description": self.description,
            "descriptionStatus": self.description_status,
            "documentation": self.documentation.to_dict(),
            "manifestPath": self.manifest_path,
            "isDevDependency": self.is_dev_dependency,
            "lastUpdated": format_timestamp(self.last_updated),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PackageEntry:
        last_updated = parse_timestamp(data.get("lastUpdated")) or utcnow()
        return cls(
            ecosystem=str(data["ecosystem"]),
            name=str(data["name"]),
            version=str(data.get("version") or ""),
            description=str(data.get("description") or ""),
            documentation=Documentation.from_dict(data.get("documentation")),
            last_updated=last_updated,
            source=str(data.get("source") or ""),
            manifest_path=str(data.get("manifestPath") or ""),
            is_dev_dependency=bool(data.get("isDevDependency", False)),
            description_status=str(
                data.get("descriptionStatus") or DescriptionStatus.FOUND.value
            ),
        )

    @classmethod
    def from_record(
        cls,
        record: DependencyRecord,
        *,
        description: DescriptionResult,
        documentation: Documentation,
        last_updated: datetime | None = None,
    ) -> PackageEntry:
        return cls(
            ecosystem=record.ecosystem,
            name=record.name,
            version=record.version,
            description=description.text,
            documentation=documentation,
            last_updated=last_updated or utcnow(),
            source=record.source,
            manifest_path=record.manifest_path,
            is_dev_dependency=record.is_dev_dependency,
            description_status=description.status.value,
        )
