"""Repository and manifest discovery utilities."""

from __future__ import annotations

from pathlib import Path

from .parsers import get_manifest_parser


EXCLUDES = {"node_modules", ".git", ".venv", "vendor", "target"}


def discover_manifests(root: Path, recursive: bool = False) -> list[Path]:
    """Find dependency manifests under root.

    Only the top-level directory is inspected unless ``recursive`` is set, in
    which case vendor and build directories are skipped.
    """
    root = root.resolve()
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in EXCLUDES)

    candidates = root.rglob("*") if recursive else root.iterdir()
    for path in sorted(candidates):
        if not path.is_file():
            continue
        if get_manifest_parser(path) is None:
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    return found
