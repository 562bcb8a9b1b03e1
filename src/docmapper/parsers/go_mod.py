"""Parse Go go.mod files."""

from __future__ import annotations

import re
from pathlib import Path

from ..models import DependencyRecord, Ecosystem

# require github.com/foo/bar v1.2.3
_SINGLE_RE = re.compile(r"^require\s+(\S+)\s+(\S+)")
# github.com/foo/bar v1.2.3 // indirect
_BLOCK_RE = re.compile(r"^(\S+)\s+(\S+)")


def parse(path: Path) -> list[DependencyRecord]:
    records: list[DependencyRecord] = []
    in_require_block = False

    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.split("//", 1)[0].strip()
        if not line:
            continue

        if re.match(r"^require\s*\($", line):
            in_require_block = True
            continue
        if in_require_block and line == ")":
            in_require_block = False
            continue

        match = _BLOCK_RE.match(line) if in_require_block else _SINGLE_RE.match(line)
        if not match:
            continue

        module, version = match.groups()
        records.append(
            DependencyRecord(
                ecosystem=Ecosystem.GO.value,
                name=module,
                version=version,
                source="goproxy",
                manifest_path=str(path),
            )
        )

    return records
