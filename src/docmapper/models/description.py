"""Tagged registry description result."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

NO_DESCRIPTION = "No description available"


class DescriptionStatus(str, Enum):
    FOUND = "found"
    MISSING = "missing"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"
    INTERNAL = "internal"


@dataclass(frozen=True)
class DescriptionResult:
    """Description text together with how it was obtained.

    ``text`` is always populated so it can be stored directly; ``status`` lets
    callers tell a registry with no description apart from a failed lookup.
    """

    text: str
    status: DescriptionStatus

    @property
    def failed(self) -> bool:
        return self.status is DescriptionStatus.FAILED

    @classmethod
    def found(cls, text: str | None) -> DescriptionResult:
        if not text:
            return cls.missing()
        return cls(text=text, status=DescriptionStatus.FOUND)

    @classmethod
    def missing(cls, text: str = NO_DESCRIPTION) -> DescriptionResult:
        return cls(text=text, status=DescriptionStatus.MISSING)

    @classmethod
    def failure(cls, reason: str) -> DescriptionResult:
        return cls(
            text=f"Failed to fetch description: {reason}",
            status=DescriptionStatus.FAILED,
        )

    @classmethod
    def unsupported(cls, ecosystem: str) -> DescriptionResult:
        return cls(
            text=f"Package from {ecosystem} ecosystem",
            status=DescriptionStatus.UNSUPPORTED,
        )

    @classmethod
    def internal(cls, name: str) -> DescriptionResult:
        return cls(
            text=f"Internal workspace package: {name}",
            status=DescriptionStatus.INTERNAL,
        )
