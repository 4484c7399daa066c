"""Pydantic models for comparison profiles."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from diffy.comparators.base import Comparator
from diffy.comparators.defaults import comparator_for
from diffy.comparators.kinds import ValueKind
from diffy.comparators.scalars import string_comparator, tolerance_comparator


# ============================================================================
# Property Configuration
# ============================================================================


class PropertyConfig(BaseModel):
    """Comparator settings for a single attribute."""

    model_config = ConfigDict(extra="forbid")

    kind: Optional[ValueKind] = Field(
        default=None,
        description="Value kind whose default comparator to use",
    )
    tolerance: Optional[float] = Field(
        default=None,
        description="Numbers this close to each other compare equal",
    )
    ignore_case: bool = Field(
        default=False,
        description="Compare strings case-insensitively",
    )
    nulls_first: Optional[bool] = Field(
        default=None,
        description="Null ordering for this attribute (profile default if unset)",
    )

    @field_validator("tolerance")
    @classmethod
    def validate_tolerance(cls, v: Optional[float]) -> Optional[float]:
        """Ensure tolerance is non-negative."""
        if v is not None and v < 0:
            raise ValueError("Tolerance must be non-negative")
        return v

    def build_comparator(
        self,
        default_nulls_first: bool = True,
        default_kind: Optional[ValueKind] = None,
        element_kind: Optional[ValueKind] = None,
    ) -> Optional[Comparator]:
        """Build the override comparator these settings describe.

        Tolerance wins over ignore_case, which wins over an explicit kind. A
        property that only changes null ordering falls back to default_kind.

        Args:
            default_nulls_first: Profile-wide null ordering
            default_kind: Resolved kind of the attribute
            element_kind: Resolved element kind of the attribute

        Returns:
            Comparator, or None if the settings restate the defaults
        """
        nulls_first = (
            self.nulls_first if self.nulls_first is not None else default_nulls_first
        )

        if self.tolerance is not None:
            return tolerance_comparator(self.tolerance, nulls_first=nulls_first)
        if self.ignore_case:
            return string_comparator(nulls_first=nulls_first, ignore_case=True)
        if self.kind is not None:
            return comparator_for(self.kind, nulls_first=nulls_first)
        if self.nulls_first is not None and default_kind is not None:
            return comparator_for(default_kind, element_kind, nulls_first)
        return None


# ============================================================================
# Diff Profile (top-level configuration)
# ============================================================================


class DiffProfile(BaseModel):
    """Comparison profile: which attributes to compare and how."""

    model_config = ConfigDict(extra="forbid")

    target: Optional[str] = Field(
        default=None,
        description="Import path of the compared type ('module:Class')",
    )
    nulls_first: bool = Field(
        default=True,
        description="Whether missing values sort before present ones",
    )
    include: List[str] = Field(
        default_factory=list,
        description="Only compare these attributes",
    )
    exclude: List[str] = Field(
        default_factory=list,
        description="Never compare these attributes",
    )
    properties: Dict[str, PropertyConfig] = Field(
        default_factory=dict,
        description="Per-attribute comparator settings",
    )

    @field_validator("include", "exclude")
    @classmethod
    def deduplicate_names(cls, v: List[str]) -> List[str]:
        """Drop repeated names, keeping first occurrences in order."""
        return list(dict.fromkeys(v))

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: Optional[str]) -> Optional[str]:
        """Ensure target looks like an import path."""
        if v is not None and not v.strip():
            raise ValueError("Target must not be empty")
        return v
