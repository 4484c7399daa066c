"""Construction of configured diff comparators."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from diffy.attributes.resolver import AttributeResolver
from diffy.comparators.base import Comparator
from diffy.config.loader import resolve_target
from diffy.config.models import DiffProfile
from diffy.diff.comparator import DiffComparator
from diffy.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class DiffComparatorFactory:
    """Builds ready-to-use DiffComparator instances."""

    @staticmethod
    def create(
        target_type: type,
        comparator: Comparator | None = None,
        include: Iterable[str] | None = None,
        exclude: Iterable[str] | None = None,
        resolver: AttributeResolver | None = None,
        nulls_first: bool = True,
    ) -> DiffComparator[Any]:
        """Create a diff comparator.

        Include is applied before exclude, so exclude wins.

        Args:
            target_type: Type of the instances to compare
            comparator: Whole-instance comparator
            include: Only compare these attributes
            exclude: Never compare these attributes
            resolver: Attribute resolver (reflection by default)
            nulls_first: Whether None sorts first in default comparators

        Returns:
            Configured DiffComparator
        """
        diff_comparator: DiffComparator[Any] = DiffComparator(
            target_type,
            comparator=comparator,
            resolver=resolver,
            nulls_first=nulls_first,
        )
        if include:
            diff_comparator.include_properties(include)
        if exclude:
            diff_comparator.exclude_properties(exclude)
        return diff_comparator

    @classmethod
    def from_profile(
        cls,
        profile: DiffProfile,
        target_type: type | None = None,
        resolver: AttributeResolver | None = None,
    ) -> DiffComparator[Any]:
        """Create a diff comparator from a comparison profile.

        Args:
            profile: Validated profile
            target_type: Type to compare (overrides the profile's target)
            resolver: Attribute resolver (reflection by default)

        Returns:
            Configured DiffComparator

        Raises:
            ConfigValidationError: If no target type is known
        """
        if target_type is None:
            if not profile.target:
                raise ConfigValidationError("Profile does not name a target type")
            target_type = resolve_target(profile.target)

        diff_comparator = cls.create(
            target_type,
            include=profile.include,
            exclude=profile.exclude,
            resolver=resolver,
            nulls_first=profile.nulls_first,
        )

        for name, settings in profile.properties.items():
            descriptor = diff_comparator.descriptor(name)
            override = settings.build_comparator(
                default_nulls_first=profile.nulls_first,
                default_kind=descriptor.kind if descriptor else None,
                element_kind=descriptor.element_kind if descriptor else None,
            )
            if override is None:
                logger.debug(f"Property '{name}' keeps its default comparator")
                continue
            diff_comparator.set_comparator(name, override)

        return diff_comparator


def create_diff_comparator(
    target_type: type,
    comparator: Comparator | None = None,
    include: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
    resolver: AttributeResolver | None = None,
    nulls_first: bool = True,
) -> DiffComparator[Any]:
    """Create a diff comparator (see DiffComparatorFactory.create)."""
    return DiffComparatorFactory.create(
        target_type,
        comparator=comparator,
        include=include,
        exclude=exclude,
        resolver=resolver,
        nulls_first=nulls_first,
    )
