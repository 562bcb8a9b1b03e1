"""Tests for the SQLAlchemy package store."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import inspect, text

from docmapper.models import Documentation, PackageEntry
from docmapper.store import PackageStore

CRAWLED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _entry(
    ecosystem: str = "npm",
    name: str = "lodash",
    version: str = "4.17.21",
    description: str = "Lodash modular utilities.",
    **kwargs,
) -> PackageEntry:
    return PackageEntry(
        ecosystem=ecosystem,
        name=name,
        version=version,
        description=description,
        documentation=kwargs.pop(
            "documentation",
            Documentation(
                url="https://github.com/lodash/lodash",
                content="docs",
                crawled_at=CRAWLED_AT,
                source="basic_fetch",
            ),
        ),
        last_updated=kwargs.pop("last_updated", CRAWLED_AT),
        **kwargs,
    )


class TestUpsertAndGet:
    def test_round_trip(self, store):
        store.upsert(_entry(source="registry", manifest_path="/repo/package.json"))

        loaded = store.get("lodash", "4.17.21", "npm")

        assert loaded is not None
        assert loaded.description == "Lodash modular utilities."
        assert loaded.documentation.url == "https://github.com/lodash/lodash"
        assert loaded.documentation.crawled_at == CRAWLED_AT
        assert loaded.last_updated == CRAWLED_AT
        assert loaded.manifest_path == "/repo/package.json"

    def test_missing_returns_none(self, store):
        assert store.get("lodash", "1.0.0", "npm") is None

    def test_upsert_overwrites(self, store):
        store.upsert(_entry(description="first"))
        store.upsert(_entry(description="second"))

        entries = store.query()
        assert len(entries) == 1
        assert entries[0].description == "second"

    def test_same_name_different_ecosystem(self, store):
        store.upsert(_entry(ecosystem="npm", name="yaml", version="1.0.0"))
        store.upsert(_entry(ecosystem="pypi", name="yaml", version="1.0.0"))
        assert len(store.query(name="yaml")) == 2

    def test_documentation_error_preserved(self, store):
        doc = Documentation.failure("Failed to fetch documentation: 500", url="https://x")
        store.upsert(_entry(documentation=doc, description_status="failed"))

        loaded = store.get("lodash", "4.17.21", "npm")
        assert loaded.documentation.failed
        assert loaded.documentation.error == "Failed to fetch documentation: 500"
        assert loaded.description_status == "failed"


class TestQuery:
    def test_ecosystem_filter(self, store):
        store.upsert(_entry(ecosystem="npm", name="lodash"))
        store.upsert(_entry(ecosystem="pypi", name="requests", version="2.31.0"))

        result = store.query(ecosystem="pypi")

        assert [(e.ecosystem, e.name) for e in result] == [("pypi", "requests")]

    def test_no_filters_returns_all_ordered(self, store):
        store.upsert(_entry(name="zod", version="3.0.0"))
        store.upsert(_entry(name="axios", version="1.6.0"))
        store.upsert(_entry(name="axios", version="1.5.0"))

        result = store.query()

        assert [(e.name, e.version) for e in result] == [
            ("axios", "1.5.0"),
            ("axios", "1.6.0"),
            ("zod", "3.0.0"),
        ]

    def test_name_and_version_filter(self, store):
        store.upsert(_entry(name="axios", version="1.6.0"))
        store.upsert(_entry(name="axios", version="1.5.0"))
        assert [e.version for e in store.query(name="axios", version="1.5.0")] == ["1.5.0"]


class TestSchema:
    def test_table_and_index(self, store):
        inspector = inspect(store._engine)
        assert "packages" in inspector.get_table_names()
        assert inspector.get_pk_constraint("packages")["constrained_columns"] == [
            "ecosystem",
            "name",
            "version",
        ]
        assert "ix_packages_name" in {ix["name"] for ix in inspector.get_indexes("packages")}

    def test_unreadable_documentation_loads_empty(self, store):
        store.upsert(_entry())
        with store._engine.begin() as conn:
            conn.execute(text("UPDATE packages SET documentation = 'not json'"))

        loaded = store.get("lodash", "4.17.21", "npm")
        assert loaded.documentation == Documentation()

    def test_file_database_persists(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'documentation.db'}"
        with PackageStore(url) as first:
            first.upsert(_entry())
        with PackageStore(url) as second:
            assert second.get("lodash", "4.17.21", "npm") is not None
