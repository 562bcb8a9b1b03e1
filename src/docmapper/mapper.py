"""Documentation mapping pipeline.

Records are processed strictly one at a time, in input order: workspace
packages are stored with a placeholder, already-stored packages are skipped,
everything else is fetched, crawled and upserted. A failure on one record is
logged and reported in the results; it never stops the batch.
"""

from __future__ import annotations

import random
import time
from typing import Any
from collections.abc import Callable, Iterable

import structlog

from .crawler import DocumentationCrawler
from .fetcher import PackageFetcher
from .models import DependencyRecord, DescriptionResult, Documentation, PackageEntry
from .store import PackageStore

WORKSPACE_NOTE = "Workspace package - no external documentation available"
DOCS_DISABLED_NOTE = "Documentation fetching disabled"

# Pause after each stored record, in seconds.
PAUSE_RANGE = (0.2, 0.5)

STATUS_STORED = "stored"
STATUS_CACHED = "cached"
STATUS_WORKSPACE = "workspace"
STATUS_FAILED = "failed"


def _result(entry: PackageEntry, status: str) -> dict[str, Any]:
    data = entry.to_dict()
    data["status"] = status
    return data


class DocumentationMapper:
    def __init__(
        self,
        store: PackageStore,
        fetcher: PackageFetcher,
        crawler: DocumentationCrawler,
        *,
        skip_docs: bool = False,
        logger: Any | None = None,
        sleep: Callable[[float], None] = time.sleep,
        pause_range: tuple[float, float] = PAUSE_RANGE,
    ) -> None:
        self.store = store
        self.fetcher = fetcher
        self.crawler = crawler
        self.skip_docs = skip_docs
        self._log = logger or structlog.get_logger("docmapper.mapper")
        self._sleep = sleep
        self._pause_range = pause_range

    def process(self, dependencies: Iterable[DependencyRecord]) -> list[dict[str, Any]]:
        """Process each record and return one result dict per record."""
        records = list(dependencies)
        self._log.info("mapper.started", count=len(records))

        results: list[dict[str, Any]] = []
        for dependency in records:
            try:
                results.append(self._process_one(dependency))
            except Exception as exc:
                self._log.error(
                    "mapper.record_failed",
                    ecosystem=dependency.ecosystem,
                    name=dependency.name,
                    version=dependency.version,
                    error=str(exc),
                )
                results.append(
                    {
                        "ecosystem": dependency.ecosystem,
                        "name": dependency.name,
                        "version": dependency.version,
                        "error": str(exc),
                        "status": STATUS_FAILED,
                    }
                )

        self._log.info("mapper.finished", count=len(results))
        return results

    def _process_one(self, dependency: DependencyRecord) -> dict[str, Any]:
        log = self._log.bind(
            ecosystem=dependency.ecosystem, name=dependency.name, version=dependency.version
        )
        log.info("mapper.processing")

        if dependency.is_workspace:
            log.info("mapper.workspace_skipped")
            entry = PackageEntry.from_record(
                dependency,
                description=DescriptionResult.internal(dependency.name),
                documentation=Documentation.noted(WORKSPACE_NOTE),
            )
            self.store.upsert(entry)
            return _result(entry, STATUS_WORKSPACE)

        existing = self.store.get(dependency.name, dependency.version, dependency.ecosystem)
        if existing is not None:
            log.info("mapper.already_stored")
            return _result(existing, STATUS_CACHED)

        description = self.fetcher.lookup(dependency)
        if self.skip_docs:
            documentation = Documentation.noted(DOCS_DISABLED_NOTE)
        else:
            documentation = self.crawler.crawl(dependency)

        entry = PackageEntry.from_record(
            dependency, description=description, documentation=documentation
        )
        self.store.upsert(entry)
        log.info("mapper.stored", description_status=entry.description_status)

        self._sleep(random.uniform(*self._pause_range))
        return _result(entry, STATUS_STORED)

    def query(
        self,
        *,
        ecosystem: str | None = None,
        name: str | None = None,
        version: str | None = None,
    ) -> list[PackageEntry]:
        self._log.info("mapper.query", ecosystem=ecosystem, name=name, version=version)
        return self.store.query(ecosystem=ecosystem, name=name, version=version)
