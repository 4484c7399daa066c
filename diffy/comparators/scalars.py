"""Null-safe comparators for scalar values."""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any

from diffy.comparators.base import (
    Comparator,
    NullSafeComparator,
    fallback_order,
    natural_order,
)
from diffy.comparators.kinds import ValueKind, ensure_kind
from diffy.exceptions import IncomparableValueError, InvalidArgumentError


def kind_order(kind: ValueKind, order: Comparator = natural_order) -> Comparator:
    """Wrap an order so that both operands are checked against a kind first.

    Args:
        kind: Kind both operands must belong to
        order: Comparator applied once the check passes

    Returns:
        Comparator for present values
    """

    def compare(first: Any, last: Any) -> int:
        ensure_kind(kind, first)
        ensure_kind(kind, last)
        return order(first, last)

    compare.__qualname__ = f"{kind.value}_order"
    return compare


def _scalar(
    kind: ValueKind,
    comparator: Comparator | None,
    nulls_first: bool,
    order: Comparator = natural_order,
) -> NullSafeComparator:
    return NullSafeComparator(comparator or kind_order(kind, order), nulls_first)


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def _floating_order(first: Any, last: Any) -> int:
    # NaN sorts after everything and equals itself
    first_nan, last_nan = _is_nan(first), _is_nan(last)
    if first_nan or last_nan:
        return int(first_nan) - int(last_nan)
    return natural_order(first, last)


def _decimal_order(first: Any, last: Any) -> int:
    if _is_nan(first) or _is_nan(last):
        raise IncomparableValueError(f"Cannot order NaN decimal: {first!r}, {last!r}")
    return natural_order(first, last)


def _enum_order(first: Enum, last: Enum) -> int:
    if type(first) is not type(last):
        raise IncomparableValueError(
            f"Cannot compare members of {type(first).__name__} "
            f"and {type(last).__name__}"
        )
    members = list(type(first))
    return natural_order(members.index(first), members.index(last))


def normalize_locale(tag: str) -> str:
    """Normalise a locale tag to ``language[_Script][_REGION][_variant]``.

    ``"en-us"``, ``"EN_US"`` and ``"en_US"`` all normalise to ``"en_US"``.
    """
    parts = [part for part in tag.replace("-", "_").split("_") if part]
    if not parts:
        return ""
    normalized = [parts[0].lower()]
    for part in parts[1:]:
        if len(part) == 4 and part.isalpha():
            normalized.append(part.title())
        elif (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            normalized.append(part.upper())
        else:
            normalized.append(part)
    return "_".join(normalized)


def _locale_order(first: str, last: str) -> int:
    return natural_order(normalize_locale(first), normalize_locale(last))


def _casefold_order(first: str, last: str) -> int:
    return natural_order(first.casefold(), last.casefold())


def boolean_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for booleans (False < True)."""
    return _scalar(ValueKind.BOOLEAN, comparator, nulls_first)


def byte_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for 8-bit signed integers."""
    return _scalar(ValueKind.BYTE, comparator, nulls_first)


def short_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for 16-bit signed integers."""
    return _scalar(ValueKind.SHORT, comparator, nulls_first)


def char_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for single characters, by code point."""
    return _scalar(ValueKind.CHAR, comparator, nulls_first)


def int_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for 32-bit signed integers."""
    return _scalar(ValueKind.INT, comparator, nulls_first)


def long_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for 64-bit signed integers."""
    return _scalar(ValueKind.LONG, comparator, nulls_first)


def float_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for single-precision reals. NaN sorts last."""
    return _scalar(ValueKind.FLOAT, comparator, nulls_first, _floating_order)


def double_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for double-precision reals. NaN sorts last."""
    return _scalar(ValueKind.DOUBLE, comparator, nulls_first, _floating_order)


def number_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for any orderable number (int, float, Decimal, Fraction)."""
    return _scalar(ValueKind.NUMBER, comparator, nulls_first)


def object_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for values of unknown kind, using fallback order."""
    return NullSafeComparator(comparator or fallback_order, nulls_first)


def string_comparator(
    comparator: Comparator | None = None,
    nulls_first: bool = True,
    ignore_case: bool = False,
) -> NullSafeComparator:
    """Comparator for strings.

    Args:
        comparator: Custom comparator for present strings
        nulls_first: Whether None sorts first
        ignore_case: Compare casefolded strings
    """
    order = _casefold_order if ignore_case else natural_order
    return _scalar(ValueKind.STRING, comparator, nulls_first, order)


def locale_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for locale tags, by normalised tag."""
    return _scalar(ValueKind.LOCALE, comparator, nulls_first, _locale_order)


def decimal_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for Decimal values. NaN cannot be ordered."""
    return _scalar(ValueKind.DECIMAL, comparator, nulls_first, _decimal_order)


def enum_comparator(
    comparator: Comparator | None = None, nulls_first: bool = True
) -> NullSafeComparator:
    """Comparator for members of one Enum, by definition order."""
    return _scalar(ValueKind.ENUM, comparator, nulls_first, _enum_order)


def tolerance_comparator(delta: float, nulls_first: bool = True) -> NullSafeComparator:
    """Comparator treating reals within ``delta`` of each other as equal.

    Args:
        delta: Largest absolute difference still considered equal
        nulls_first: Whether None sorts first

    Raises:
        InvalidArgumentError: If delta is negative
    """
    if delta < 0:
        raise InvalidArgumentError(f"Tolerance must not be negative: {delta}")

    def within_tolerance(first: Any, last: Any) -> int:
        ensure_kind(ValueKind.DOUBLE, first)
        ensure_kind(ValueKind.DOUBLE, last)
        if abs(first - last) <= delta:
            return 0
        return natural_order(first, last)

    within_tolerance.__qualname__ = f"within_tolerance({delta})"
    return NullSafeComparator(within_tolerance, nulls_first)
