"""Comparators over mappings and mapping entries."""

from __future__ import annotations

from collections.abc import Mapping
from functools import cmp_to_key
from typing import Any

from diffy.comparators.base import (
    Comparator,
    NullSafeComparator,
    compare_with,
    natural_order,
)
from diffy.comparators.sequences import lexicographic_compare
from diffy.exceptions import AttributeLookupError, IncomparableValueError


class MapValueComparator:
    """Orders keys by the values they map to in a ranking mapping."""

    def __init__(
        self, mapping: Mapping[Any, Any], comparator: Comparator | None = None
    ) -> None:
        """Initialize comparator.

        Args:
            mapping: Ranking mapping from key to rank value
            comparator: Comparator for rank values (natural order if omitted)
        """
        self.mapping = mapping
        self.comparator: Comparator = comparator or natural_order

    def __call__(self, first: Any, last: Any) -> int:
        return compare_with(self.comparator, self._rank(first), self._rank(last))

    def _rank(self, key: Any) -> Any:
        try:
            return self.mapping[key]
        except KeyError as e:
            raise AttributeLookupError(
                f"Key {key!r} is missing from the ranking map", key=key
            ) from e


class MapEntryComparator:
    """Orders (key, value) pairs by key, then by value."""

    def __init__(
        self,
        key_comparator: Comparator | None = None,
        value_comparator: Comparator | None = None,
    ) -> None:
        self.key_comparator: Comparator = key_comparator or natural_order
        self.value_comparator: Comparator = value_comparator or natural_order

    def __call__(self, first: Any, last: Any) -> int:
        first_key, first_value = self._unpack(first)
        last_key, last_value = self._unpack(last)
        result = compare_with(self.key_comparator, first_key, last_key)
        if result:
            return result
        if first_value is last_value:
            return 0
        return compare_with(self.value_comparator, first_value, last_value)

    @staticmethod
    def _unpack(entry: Any) -> tuple[Any, Any]:
        if not isinstance(entry, tuple) or len(entry) != 2:
            raise IncomparableValueError(f"Expected a (key, value) entry, got {entry!r}")
        return entry


def mapping_comparator(
    entry_comparator: Comparator | None = None,
    nulls_first: bool = True,
    key_order: Comparator | None = None,
) -> NullSafeComparator:
    """Comparator for mappings, as sequences of entries sorted by key.

    Args:
        entry_comparator: Comparator for (key, value) entries
            (a default MapEntryComparator if omitted)
        nulls_first: Whether a None mapping sorts first
        key_order: Comparator used to sort entries by key
            (natural order if omitted)

    Raises:
        IncomparableValueError: From the returned comparator, when keys
            cannot be sorted
    """
    entry_order = entry_comparator or MapEntryComparator()
    key = cmp_to_key(key_order or natural_order)

    def compare(first: Any, last: Any) -> int:
        for value in (first, last):
            if not isinstance(value, Mapping):
                raise IncomparableValueError(
                    f"Expected a mapping, got {type(value).__name__}: {value!r}"
                )
        if first == last:
            return 0
        first_entries = sorted(first.items(), key=lambda item: key(item[0]))
        last_entries = sorted(last.items(), key=lambda item: key(item[0]))
        return lexicographic_compare(first_entries, last_entries, entry_order)

    return NullSafeComparator(compare, nulls_first)
