"""Parse Ruby Gemfiles."""

from __future__ import annotations

import re
from pathlib import Path

from ..models import DependencyRecord, Ecosystem

_GEM_RE = re.compile(r"""^\s*gem\s+['"]([^'"]+)['"](?:\s*,\s*['"]([^'"]+)['"])?""")
_GROUP_RE = re.compile(r"^\s*group\s+(.+?)\s+do\b")
_END_RE = re.compile(r"^\s*end\b")
_BLOCK_RE = re.compile(r"\bdo\s*(\|[^|]*\|)?\s*$")
# Statement-form conditionals and loops also close with `end`.
_KEYWORD_RE = re.compile(r"^\s*(?:if|unless|case|begin|while|until)\b")
_DEV_GROUPS = {"development", "test"}

DEFAULT_VERSION = ">= 0"


def _group_names(spec: str) -> set[str]:
    return {token.strip().lstrip(":").strip("'\"") for token in spec.split(",")}


def parse(path: Path) -> list[DependencyRecord]:
    """Return gem declarations; gems inside development/test groups are dev."""
    records: list[DependencyRecord] = []
    group_stack: list[bool] = []

    for line in path.read_text(encoding="utf-8").splitlines():
        if line.lstrip().startswith("#"):
            continue

        group = _GROUP_RE.match(line)
        if group:
            group_stack.append(bool(_group_names(group.group(1)) & _DEV_GROUPS))
            continue
        if _BLOCK_RE.search(line) or _KEYWORD_RE.match(line):
            group_stack.append(False)
            continue
        if group_stack and _END_RE.match(line):
            group_stack.pop()
            continue

        match = _GEM_RE.match(line)
        if not match:
            continue
        name, version = match.groups()
        records.append(
            DependencyRecord(
                ecosystem=Ecosystem.RUBY.value,
                name=name,
                version=version or DEFAULT_VERSION,
                source="rubygems.org",
                manifest_path=str(path),
                is_dev_dependency=any(group_stack),
            )
        )

    return records
