"""Human-readable Markdown rendering of the store report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals, per-ecosystem counts and a sample."""
    totals = report.get("totals", {})
    by_ecosystem = report.get("byEcosystem", {})
    by_status = report.get("byDescriptionStatus", {})
    sample = report.get("sample", [])

    lines = []
    lines.append("# documentation-mapper Summary")
    lines.append("")
    lines.append(
        f"Total packages stored: {totals.get('packages', 0)} | "
        f"Documentation errors: {totals.get('documentationErrors', 0)}"
    )
    lines.append("")
    lines.append("| Ecosystem | Packages |")
    lines.append("| --- | --- |")
    if by_ecosystem:
        for ecosystem, count in by_ecosystem.items():
            lines.append(f"| {ecosystem} | {count} |")
    else:
        lines.append("| (no packages stored) | 0 |")

    if by_status:
        lines.append("")
        lines.append("| Description status | Packages |")
        lines.append("| --- | --- |")
        for status, count in by_status.items():
            lines.append(f"| {status} | {count} |")

    if sample:
        lines.append("")
        lines.append("Sample packages:")
        lines.append("")
        for item in sample:
            lines.append(
                f"- {item.get('ecosystem')}/{item.get('name')}@{item.get('version')}: "
                f"{item.get('description', '')}..."
            )

    return "\n".join(lines) + "\n"
