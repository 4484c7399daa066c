"""Null-safe, order-sensitive comparator library."""

from diffy.comparators.base import (
    Comparator,
    NullSafeComparator,
    compare_with,
    fallback_order,
    natural_order,
)
from diffy.comparators.defaults import comparator_for, element_comparator_for
from diffy.comparators.kinds import ValueKind, infer_kind, is_kind
from diffy.comparators.mappings import (
    MapEntryComparator,
    MapValueComparator,
    mapping_comparator,
)
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
    normalize_locale,
    number_comparator,
    object_comparator,
    short_comparator,
    string_comparator,
    tolerance_comparator,
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
    lexicographic_compare,
    long_array_comparator,
    set_comparator,
    short_array_comparator,
)

__all__ = [
    "Comparator",
    "NullSafeComparator",
    "compare_with",
    "fallback_order",
    "natural_order",
    "comparator_for",
    "element_comparator_for",
    "ValueKind",
    "infer_kind",
    "is_kind",
    "MapEntryComparator",
    "MapValueComparator",
    "mapping_comparator",
    "boolean_comparator",
    "byte_comparator",
    "char_comparator",
    "decimal_comparator",
    "double_comparator",
    "enum_comparator",
    "float_comparator",
    "int_comparator",
    "locale_comparator",
    "long_comparator",
    "normalize_locale",
    "number_comparator",
    "object_comparator",
    "short_comparator",
    "string_comparator",
    "tolerance_comparator",
    "array_comparator",
    "boolean_array_comparator",
    "byte_array_comparator",
    "char_array_comparator",
    "double_array_comparator",
    "float_array_comparator",
    "int_array_comparator",
    "iterable_comparator",
    "lexicographic_compare",
    "long_array_comparator",
    "set_comparator",
    "short_array_comparator",
]
