"""Attribute-level diff comparator."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from diffy.attributes.models import AttributeDescriptor
from diffy.attributes.resolver import AttributeResolver, ReflectionAttributeResolver
from diffy.comparators.base import Comparator, compare_with
from diffy.comparators.defaults import comparator_for
from diffy.comparators.scalars import object_comparator
from diffy.diff.models import DiffEntry, DiffResult
from diffy.exceptions import AttributeAccessError, InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DiffComparator(Generic[T]):
    """Compares two instances of a type attribute by attribute.

    Every resolved attribute gets the library default comparator for its
    value kind; set_comparator() replaces it. The active attribute set is
    the resolved attributes, narrowed to the include set when one is given,
    minus the exclude set. Exclude always wins over include.
    """

    def __init__(
        self,
        target_type: type[T],
        comparator: Comparator | None = None,
        resolver: AttributeResolver | None = None,
        nulls_first: bool = True,
    ) -> None:
        """Initialize comparator.

        Args:
            target_type: Type of the instances to compare
            comparator: Whole-instance comparator used by compare()
            resolver: Attribute resolver (reflection by default)
            nulls_first: Whether None sorts first in default comparators

        Raises:
            InvalidArgumentError: If target_type is not a class or comparator
                is not callable
        """
        if not isinstance(target_type, type):
            raise InvalidArgumentError(f"Expected a class, got {target_type!r}")
        if comparator is not None and not callable(comparator):
            raise InvalidArgumentError(f"Comparator is not callable: {comparator!r}")

        self.target_type = target_type
        self.comparator = comparator
        self.resolver = resolver or ReflectionAttributeResolver()
        self.nulls_first = nulls_first

        self._descriptors: dict[str, AttributeDescriptor] = {
            d.name: d for d in self.resolver.resolve(target_type)
        }
        self._comparators: dict[str, Comparator] = {
            name: comparator_for(d.kind, d.element_kind, nulls_first)
            for name, d in self._descriptors.items()
        }
        self._included: dict[str, None] = {}
        self._excluded: dict[str, None] = {}
        self._properties: tuple[str, ...] = tuple(self._descriptors)

    @property
    def properties(self) -> tuple[str, ...]:
        """Active attribute names, in discovery order."""
        return self._properties

    @property
    def descriptors(self) -> list[AttributeDescriptor]:
        """All resolved attributes, active or not."""
        return list(self._descriptors.values())

    @property
    def included(self) -> tuple[str, ...]:
        return tuple(self._included)

    @property
    def excluded(self) -> tuple[str, ...]:
        return tuple(self._excluded)

    def descriptor(self, name: str) -> AttributeDescriptor | None:
        return self._descriptors.get(name)

    def include_properties(self, names: Iterable[str] | str) -> None:
        """Restrict comparison to the given attributes.

        Repeated calls accumulate. A single string counts as one name.

        Args:
            names: Attribute names to include
        """
        for name in self._names(names):
            self._included[name] = None
        self._update_properties()

    def exclude_properties(self, names: Iterable[str] | str) -> None:
        """Leave the given attributes out of comparison, even if included.

        Args:
            names: Attribute names to exclude
        """
        for name in self._names(names):
            self._excluded[name] = None
        self._update_properties()

    def set_comparator(self, name: str, comparator: Comparator) -> None:
        """Install an override comparator for an attribute.

        Args:
            name: Attribute name
            comparator: Three-way comparator for the attribute's values

        Raises:
            InvalidArgumentError: If comparator is not callable
        """
        if not callable(comparator):
            raise InvalidArgumentError(
                f"Comparator for '{name}' is not callable: {comparator!r}"
            )
        if name not in self._descriptors:
            logger.warning(
                f"Ignoring comparator for unknown property '{name}' "
                f"of {self.target_type.__name__}"
            )
            return
        self._comparators[name] = comparator

    def get_comparator(self, name: str) -> Comparator:
        """Return the comparator installed for an attribute.

        Raises:
            InvalidArgumentError: If the attribute is unknown
        """
        try:
            return self._comparators[name]
        except KeyError as e:
            raise InvalidArgumentError(
                f"Unknown property '{name}' of {self.target_type.__name__}"
            ) from e

    def diff_compare(self, first: T, last: T) -> list[DiffEntry]:
        """Compare two instances attribute by attribute.

        Args:
            first: First instance
            last: Last instance

        Returns:
            One DiffEntry per differing attribute, in active-set order

        Raises:
            InvalidArgumentError: If an instance is missing or of another type
            IncomparableValueError: If a comparator cannot order the values
        """
        entries, _ = self._diff(first, last)
        return entries

    def diff_report(self, first: T, last: T) -> DiffResult:
        """Compare two instances and report differences and skipped attributes.

        Raises:
            InvalidArgumentError: If an instance is missing or of another type
            IncomparableValueError: If a comparator cannot order the values
        """
        properties = list(self._properties)
        entries, skipped = self._diff(first, last)
        return DiffResult(
            target_type=f"{self.target_type.__module__}.{self.target_type.__qualname__}",
            properties=properties,
            entries=entries,
            skipped=skipped,
        )

    def compare(self, first: T | None, last: T | None) -> int:
        """Order two instances.

        Uses the whole-instance comparator when one was given, otherwise the
        first non-zero attribute comparison over the active set.

        Returns:
            -1, 0 or 1
        """
        if first is None and last is None:
            return 0
        if first is None:
            return -1 if self.nulls_first else 1
        if last is None:
            return 1 if self.nulls_first else -1
        if self.comparator is not None:
            return compare_with(self.comparator, first, last)

        self._check_instances(first, last)
        for name in self._properties:
            values = self._read_pair(name, first, last)
            if values is None:
                continue
            result = self._compare_values(name, *values)
            if result:
                return result
        return 0

    def _diff(self, first: T, last: T) -> tuple[list[DiffEntry], list[str]]:
        self._check_instances(first, last)

        entries: list[DiffEntry] = []
        skipped: list[str] = []
        if first is last:
            return entries, skipped

        for name in self._properties:
            values = self._read_pair(name, first, last)
            if values is None:
                skipped.append(name)
                continue
            if self._compare_values(name, *values):
                entries.append(DiffEntry.of(name, *values))
        return entries, skipped

    def _read_pair(self, name: str, first: T, last: T) -> tuple[Any, Any] | None:
        descriptor = self._descriptors[name]
        try:
            return descriptor.read(first), descriptor.read(last)
        except AttributeAccessError as e:
            error = e
        except Exception as e:
            error = AttributeAccessError(
                f"Cannot read '{name}' of {self.target_type.__name__}: "
                f"{type(e).__name__}: {e}",
                property_name=name,
            )
        logger.error(f"Skipping property '{name}' of {self.target_type.__name__}: {error}")
        return None

    def _compare_values(self, name: str, first_value: Any, last_value: Any) -> int:
        if first_value is last_value:
            return 0
        comparator = self._comparators.get(name) or object_comparator(
            nulls_first=self.nulls_first
        )
        return compare_with(comparator, first_value, last_value)

    def _check_instances(self, first: Any, last: Any) -> None:
        for label, instance in (("first", first), ("last", last)):
            if instance is None:
                raise InvalidArgumentError(f"The {label} instance must not be None")
            if not isinstance(instance, self.target_type):
                raise InvalidArgumentError(
                    f"The {label} instance must be a {self.target_type.__name__}, "
                    f"got {type(instance).__name__}"
                )

    def _names(self, names: Iterable[str] | str) -> list[str]:
        if isinstance(names, str):
            names = [names]
        result = []
        for name in names:
            if not isinstance(name, str):
                raise InvalidArgumentError(f"Property names must be strings: {name!r}")
            if name not in self._descriptors:
                logger.debug(
                    f"Unknown property '{name}' of {self.target_type.__name__}"
                )
            result.append(name)
        return result

    def _update_properties(self) -> None:
        names = list(self._descriptors)
        if self._included:
            names = [n for n in names if n in self._included]
        self._properties = tuple(n for n in names if n not in self._excluded)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.target_type.__name__}, "
            f"properties={list(self._properties)})"
        )
