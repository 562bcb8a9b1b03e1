"""Scan a repository directory for dependency manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from .discovery import discover_manifests
from .models import DependencyRecord
from .parsers import get_manifest_parser


def scan(
    repo_path: Path,
    *,
    recursive: bool = False,
    logger: Any | None = None,
) -> list[DependencyRecord]:
    """Return dependency records for every recognized manifest in repo_path.

    Files that cannot be read or parsed contribute no records; the failure is
    logged and the scan continues with the next manifest.
    """
    log = logger or structlog.get_logger("docmapper.scanner")
    log.info("scanner.started", path=str(repo_path), recursive=recursive)

    records: list[DependencyRecord] = []
    for manifest in discover_manifests(repo_path, recursive=recursive):
        parser = get_manifest_parser(manifest)
        if parser is None:
            continue
        try:
            parsed = parser(manifest)
        except (OSError, ValueError, SyntaxError) as exc:
            # ValueError covers JSON/TOML/Unicode decode errors, SyntaxError covers XML.
            log.warning("scanner.parse_failed", manifest=str(manifest), error=str(exc))
            continue
        log.debug("scanner.parsed", manifest=str(manifest), count=len(parsed))
        records.extend(parsed)

    log.info("scanner.finished", path=str(repo_path), count=len(records))
    return records
