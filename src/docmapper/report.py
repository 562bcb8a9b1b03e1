"""Aggregate stored entries and scan results into summary reports."""

from __future__ import annotations

from collections import Counter
from typing import Any
from collections.abc import Iterable

from .models import PackageEntry

SAMPLE_SIZE = 5
SAMPLE_DESCRIPTION_LENGTH = 50


def aggregate(entries: Iterable[PackageEntry], sample_size: int = SAMPLE_SIZE) -> dict[str, Any]:
    """Summarize stored entries: totals, counts per ecosystem and description status."""
    entries = list(entries)
    by_ecosystem = Counter(entry.ecosystem for entry in entries)
    by_status = Counter(entry.description_status for entry in entries)
    crawl_failures = sum(1 for entry in entries if entry.documentation.failed)

    sample = [
        {
            "ecosystem": entry.ecosystem,
            "name": entry.name,
            "version": entry.version,
            "description": entry.description[:SAMPLE_DESCRIPTION_LENGTH],
        }
        for entry in entries[:sample_size]
    ]

    return {
        "totals": {
            "packages": len(entries),
            "documentationErrors": crawl_failures,
        },
        "byEcosystem": dict(sorted(by_ecosystem.items())),
        "byDescriptionStatus": dict(sorted(by_status.items())),
        "sample": sample,
    }


def summarize_results(results: Iterable[dict[str, Any]]) -> dict[str, int]:
    """Count pipeline results by their ``status`` field."""
    counts = Counter(str(result.get("status", "unknown")) for result in results)
    summary = {"total": sum(counts.values())}
    summary.update(sorted(counts.items()))
    return summary
