"""Data models for the documentation mapper."""

from __future__ import annotations

from .dependency import DependencyRecord, Ecosystem
from .description import NO_DESCRIPTION, DescriptionResult, DescriptionStatus
from .documentation import Documentation
from .package_entry import PackageEntry

__all__ = [
    "NO_DESCRIPTION",
    "DependencyRecord",
    "DescriptionResult",
    "DescriptionStatus",
    "Documentation",
    "Ecosystem",
    "PackageEntry",
]
