"""Diff models for attribute-level comparisons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DiffEntry:
    """A single attribute whose first and last values differ.

    Attributes:
        property_name: Name of the differing attribute
        first: Value read off the first instance
        last: Value read off the last instance
    """

    property_name: str
    first: Any
    last: Any

    @classmethod
    def of(cls, property_name: str, first: Any, last: Any) -> DiffEntry:
        """Create an entry."""
        return cls(property_name=property_name, first=first, last=last)

    def to_dict(self) -> dict[str, Any]:
        return {
            "property_name": self.property_name,
            "first": self.first,
            "last": self.last,
        }


@dataclass
class DiffResult:
    """Complete result of comparing two instances.

    Attributes:
        target_type: Qualified name of the compared type
        properties: Active attributes at comparison time, in order
        entries: Attributes whose values differ
        skipped: Attributes that could not be read and were left out
    """

    target_type: str
    properties: list[str] = field(default_factory=list)
    entries: list[DiffEntry] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def property_names(self) -> list[str]:
        """Names of the differing attributes."""
        return [e.property_name for e in self.entries]

    @property
    def summary(self) -> dict[str, int]:
        """Counts of compared, differing and skipped attributes."""
        return {
            "compared": len(self.properties) - len(self.skipped),
            "differences": len(self.entries),
            "skipped": len(self.skipped),
        }

    def has_differences(self) -> bool:
        """Check if any attribute differs."""
        return len(self.entries) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "target_type": self.target_type,
            "properties": list(self.properties),
            "entries": [e.to_dict() for e in self.entries],
            "skipped": list(self.skipped),
            "summary": self.summary,
        }
