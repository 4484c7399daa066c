"""Null-safe comparators for arrays, iterables and sets."""

from __future__ import annotations

from collections.abc import Iterable, Set
from functools import cmp_to_key
from itertools import zip_longest
from typing import Any

from diffy.comparators.base import (
    Comparator,
    NullSafeComparator,
    compare_with,
    natural_order,
)
from diffy.comparators.kinds import (
    ARRAY_ELEMENT_KINDS,
    ValueKind,
    ensure_kind,
    is_sequence,
)
from diffy.exceptions import IncomparableValueError

_MISSING = object()

_BYTES_LIKE = (bytes, bytearray, memoryview)


def lexicographic_compare(
    first: Iterable[Any], last: Iterable[Any], element_comparator: Comparator
) -> int:
    """Compare two iterables element by element.

    The first non-zero element comparison decides; identical elements are
    skipped without calling the comparator. When one side runs out first it
    sorts first.

    Args:
        first: First iterable
        last: Last iterable
        element_comparator: Comparator for element pairs

    Returns:
        -1, 0 or 1
    """
    for first_item, last_item in zip_longest(first, last, fillvalue=_MISSING):
        if first_item is _MISSING:
            return -1
        if last_item is _MISSING:
            return 1
        if first_item is last_item:
            continue
        result = compare_with(element_comparator, first_item, last_item)
        if result:
            return result
    return 0


def _require(value: Any, check: Any, description: str) -> None:
    if not check(value):
        raise IncomparableValueError(
            f"Expected {description}, got {type(value).__name__}: {value!r}"
        )


def _primitive_array_comparator(
    kind: ValueKind, nulls_first: bool
) -> NullSafeComparator:
    element_kind = ARRAY_ELEMENT_KINDS[kind]

    def accepts(value: Any) -> bool:
        if kind is ValueKind.BYTE_ARRAY and isinstance(value, _BYTES_LIKE):
            return True
        if kind is ValueKind.CHAR_ARRAY and isinstance(value, str):
            return True
        return is_sequence(value) and not isinstance(value, (str, *_BYTES_LIKE))

    def element_order(first: Any, last: Any) -> int:
        ensure_kind(element_kind, first)
        ensure_kind(element_kind, last)
        return natural_order(first, last)

    def compare(first: Any, last: Any) -> int:
        _require(first, accepts, kind.value)
        _require(last, accepts, kind.value)
        if kind is ValueKind.BYTE_ARRAY:
            first, last = _byte_values(first), _byte_values(last)
        return lexicographic_compare(first, last, element_order)

    compare.__qualname__ = f"{kind.value}_order"
    return NullSafeComparator(compare, nulls_first)


def _byte_values(value: Any) -> Any:
    # Elements of bytes-like values are unsigned; lists may hold signed bytes
    if isinstance(value, _BYTES_LIKE):
        return [_unsigned_to_signed(item) for item in bytes(value)]
    return value


def _unsigned_to_signed(item: int) -> int:
    return item - 256 if item > 127 else item


def boolean_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    """Comparator for sequences of booleans."""
    return _primitive_array_comparator(ValueKind.BOOLEAN_ARRAY, nulls_first)


def byte_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    """Comparator for byte sequences.

    Accepts bytes-like values and sequences of signed bytes; bytes above 127
    are read as their signed value, so both spellings of one byte string
    compare equal.
    """
    return _primitive_array_comparator(ValueKind.BYTE_ARRAY, nulls_first)


def short_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    return _primitive_array_comparator(ValueKind.SHORT_ARRAY, nulls_first)


def char_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    """Comparator for strings or sequences of single characters."""
    return _primitive_array_comparator(ValueKind.CHAR_ARRAY, nulls_first)


def int_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    return _primitive_array_comparator(ValueKind.INT_ARRAY, nulls_first)


def long_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    return _primitive_array_comparator(ValueKind.LONG_ARRAY, nulls_first)


def float_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    return _primitive_array_comparator(ValueKind.FLOAT_ARRAY, nulls_first)


def double_array_comparator(nulls_first: bool = True) -> NullSafeComparator:
    return _primitive_array_comparator(ValueKind.DOUBLE_ARRAY, nulls_first)


def array_comparator(
    element_comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for sequences of arbitrary elements.

    Args:
        element_comparator: Comparator for elements (natural order if omitted,
            so a None element facing a value raises IncomparableValueError)
        nulls_first: Whether a None sequence sorts first
    """
    element_order = element_comparator or natural_order

    def compare(first: Any, last: Any) -> int:
        _require(first, is_sequence, "a sequence")
        _require(last, is_sequence, "a sequence")
        return lexicographic_compare(first, last, element_order)

    return NullSafeComparator(compare, nulls_first)


def iterable_comparator(
    element_comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for any iterables, consumed in iteration order."""
    element_order = element_comparator or natural_order

    def compare(first: Any, last: Any) -> int:
        _require(first, lambda value: isinstance(value, Iterable), "an iterable")
        _require(last, lambda value: isinstance(value, Iterable), "an iterable")
        return lexicographic_compare(first, last, element_order)

    return NullSafeComparator(compare, nulls_first)


def set_comparator(
    element_comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for sets.

    Equal sets compare equal; otherwise both sets are sorted with the
    element comparator and compared as sequences.
    """
    element_order = element_comparator or natural_order

    def compare(first: Any, last: Any) -> int:
        _require(first, lambda value: isinstance(value, Set), "a set")
        _require(last, lambda value: isinstance(value, Set), "a set")
        if first == last:
            return 0
        key = cmp_to_key(lambda a, b: compare_with(element_order, a, b))
        return lexicographic_compare(
            sorted(first, key=key), sorted(last, key=key), element_order
        )

    return NullSafeComparator(compare, nulls_first)
