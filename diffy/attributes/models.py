"""Data models for resolved attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from diffy.comparators.kinds import ValueKind


@dataclass(frozen=True)
class AttributeDescriptor:
    """A named attribute of a target type, with its reader and value kind."""

    name: str
    reader: Callable[[Any], Any] = field(compare=False, repr=False)
    kind: ValueKind = ValueKind.OBJECT
    declared_type: Any = Any
    element_kind: ValueKind | None = None
    owner: type | None = None

    def read(self, instance: Any) -> Any:
        return self.reader(instance)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "element_kind": self.element_kind.value if self.element_kind else None,
            "declared_type": _type_name(self.declared_type),
            "owner": self.owner.__name__ if self.owner else None,
        }


def _type_name(declared_type: Any) -> str:
    if isinstance(declared_type, type):
        return declared_type.__name__
    return str(declared_type).replace("typing.", "")
