"""Crawled documentation record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from collections.abc import Mapping
from typing import Any


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Documentation:
    """Page content plus provenance, or a note/error explaining its absence."""

    url: str | None = None
    content: str | None = None
    crawled_at: datetime | None = None
    source: str | None = None
    note: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.crawled_at is not None and self.crawled_at.tzinfo is None:
            raise ValueError("crawled_at must be timezone-aware")

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, str]:
        data: dict[str, str] = {}
        if self.url is not None:
            data["url"] = self.url
        if self.content is not None:
            data["content"] = self.content
        if self.crawled_at is not None:
            data["crawledAt"] = format_timestamp(self.crawled_at)
        if self.source is not None:
            data["source"] = self.source
        if self.note is not None:
            data["note"] = self.note
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Documentation:
        if not data:
            return cls()
        crawled_at = data.get("crawledAt", data.get("crawled_at"))
        try:
            timestamp = parse_timestamp(crawled_at)
        except ValueError:
            timestamp = None

        def _opt(key: str) -> str | None:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            url=_opt("url"),
            content=_opt("content"),
            crawled_at=timestamp,
            source=_opt("source"),
            note=_opt("note"),
            error=_opt("error"),
        )

    @classmethod
    def noted(cls, note: str) -> Documentation:
        return cls(note=note)

    @classmethod
    def failure(
        cls, error: str, *, url: str | None = None, crawled_at: datetime | None = None
    ) -> Documentation:
        return cls(url=url, error=error, crawled_at=crawled_at or utcnow())
