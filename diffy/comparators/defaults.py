"""Default comparator per value kind."""

from __future__ import annotations

from typing import Callable

from diffy.comparators.base import NullSafeComparator, fallback_order
from diffy.comparators.kinds import ValueKind
from diffy.comparators.mappings import MapEntryComparator, mapping_comparator
from diffy.comparators.scalars import (
    boolean_comparator,
    byte_comparator,
    char_comparator,
    decimal_comparator,
    double_comparator,
    enum_comparator,
    float_comparator,
    int_comparator,
    locale_comparator,
    long_comparator,
    number_comparator,
    object_comparator,
    short_comparator,
    string_comparator,
)
from diffy.comparators.sequences import (
    array_comparator,
    boolean_array_comparator,
    byte_array_comparator,
    char_array_comparator,
    double_array_comparator,
    float_array_comparator,
    int_array_comparator,
    iterable_comparator,
    long_array_comparator,
    set_comparator,
    short_array_comparator,
)

_SCALAR_FACTORIES: dict[ValueKind, Callable[..., NullSafeComparator]] = {
    ValueKind.BOOLEAN: boolean_comparator,
    ValueKind.BYTE: byte_comparator,
    ValueKind.SHORT: short_comparator,
    ValueKind.CHAR: char_comparator,
    ValueKind.INT: int_comparator,
    ValueKind.LONG: long_comparator,
    ValueKind.FLOAT: float_comparator,
    ValueKind.DOUBLE: double_comparator,
    ValueKind.NUMBER: number_comparator,
    ValueKind.DECIMAL: decimal_comparator,
    ValueKind.STRING: string_comparator,
    ValueKind.LOCALE: locale_comparator,
    ValueKind.ENUM: enum_comparator,
}

_ARRAY_FACTORIES: dict[ValueKind, Callable[..., NullSafeComparator]] = {
    ValueKind.BOOLEAN_ARRAY: boolean_array_comparator,
    ValueKind.BYTE_ARRAY: byte_array_comparator,
    ValueKind.SHORT_ARRAY: short_array_comparator,
    ValueKind.CHAR_ARRAY: char_array_comparator,
    ValueKind.INT_ARRAY: int_array_comparator,
    ValueKind.LONG_ARRAY: long_array_comparator,
    ValueKind.FLOAT_ARRAY: float_array_comparator,
    ValueKind.DOUBLE_ARRAY: double_array_comparator,
}


def element_comparator_for(
    kind: ValueKind | None, nulls_first: bool = True
) -> NullSafeComparator:
    """Null-safe element comparator for collection attributes.

    Scalar element kinds get their kind's comparator; records and unknown
    elements get fallback order.
    """
    if kind in _SCALAR_FACTORIES:
        return _SCALAR_FACTORIES[kind](nulls_first=nulls_first)
    return NullSafeComparator(fallback_order, nulls_first)


def comparator_for(
    kind: ValueKind,
    element_kind: ValueKind | None = None,
    nulls_first: bool = True,
) -> NullSafeComparator:
    """Return the library default comparator for a value kind.

    Args:
        kind: Value kind of the attribute
        element_kind: Element kind for collection attributes
        nulls_first: Whether None sorts first

    Returns:
        Null-safe comparator
    """
    if kind in _SCALAR_FACTORIES:
        return _SCALAR_FACTORIES[kind](nulls_first=nulls_first)
    if kind in _ARRAY_FACTORIES:
        return _ARRAY_FACTORIES[kind](nulls_first=nulls_first)

    if kind is ValueKind.OBJECT_ARRAY:
        return array_comparator(element_comparator_for(element_kind, nulls_first), nulls_first)
    if kind is ValueKind.ITERABLE:
        return iterable_comparator(
            element_comparator_for(element_kind, nulls_first), nulls_first
        )
    if kind is ValueKind.SET:
        return set_comparator(element_comparator_for(element_kind, nulls_first), nulls_first)
    if kind is ValueKind.MAPPING:
        # Keys of mixed types still sort
        key_order = NullSafeComparator(fallback_order, nulls_first)
        entries = MapEntryComparator(
            key_comparator=key_order,
            value_comparator=NullSafeComparator(fallback_order, nulls_first),
        )
        return mapping_comparator(entries, nulls_first, key_order=key_order)

    return object_comparator(nulls_first=nulls_first)
