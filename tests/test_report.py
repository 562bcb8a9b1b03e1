"""Tests for report aggregation and Markdown summary rendering."""

from __future__ import annotations

from datetime import datetime, timezone

from docmapper.models import Documentation, PackageEntry
from docmapper.report import aggregate, summarize_results
from docmapper.summary import render_summary

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _entry(ecosystem: str, name: str, status: str = "found", failed: bool = False) -> PackageEntry:
    doc = Documentation.failure("boom", crawled_at=NOW) if failed else Documentation.noted("n")
    return PackageEntry(
        ecosystem=ecosystem,
        name=name,
        version="1.0.0",
        description="x" * 80,
        documentation=doc,
        last_updated=NOW,
        description_status=status,
    )


class TestAggregate:
    def test_counts(self):
        report = aggregate(
            [
                _entry("npm", "a"),
                _entry("npm", "b", status="failed", failed=True),
                _entry("pypi", "c", status="missing"),
            ]
        )
        assert report["totals"] == {"packages": 3, "documentationErrors": 1}
        assert report["byEcosystem"] == {"npm": 2, "pypi": 1}
        assert report["byDescriptionStatus"] == {"failed": 1, "found": 1, "missing": 1}
        assert len(report["sample"][0]["description"]) == 50

    def test_sample_size(self):
        report = aggregate([_entry("npm", str(i)) for i in range(8)], sample_size=3)
        assert len(report["sample"]) == 3


class TestSummarizeResults:
    def test_status_counts(self):
        results = [{"status": "stored"}, {"status": "cached"}, {"status": "stored"}]
        assert summarize_results(results) == {"total": 3, "cached": 1, "stored": 2}


class TestRenderSummary:
    def test_markdown(self):
        markdown = render_summary(aggregate([_entry("npm", "lodash")]))
        assert markdown.startswith("# documentation-mapper Summary")
        assert "| npm | 1 |" in markdown
        assert "| found | 1 |" in markdown
        assert "- npm/lodash@1.0.0:" in markdown

    def test_empty_store(self):
        markdown = render_summary(aggregate([]))
        assert "Total packages stored: 0" in markdown
        assert "(no packages stored)" in markdown
