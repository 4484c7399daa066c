"""Comparator primitives shared by the comparator library."""

from __future__ import annotations

from typing import Any, Callable

from diffy.exceptions import IncomparableValueError

# Three-way comparison: negative, zero or positive
Comparator = Callable[[Any, Any], int]


def sign(value: Any) -> int:
    """Normalise a comparison result to -1, 0 or 1."""
    if value < 0:
        return -1
    if value > 0:
        return 1
    return 0


def compare_with(comparator: Comparator, first: Any, last: Any) -> int:
    """Invoke a comparator and normalise its result.

    Caller-supplied comparators are usually written for one kind of operand;
    a TypeError or AttributeError raised from inside them means they were fed
    something else.

    Args:
        comparator: Comparator to invoke
        first: First operand
        last: Last operand

    Returns:
        -1, 0 or 1

    Raises:
        IncomparableValueError: If the comparator cannot handle the operands
    """
    try:
        result = comparator(first, last)
    except (TypeError, AttributeError) as e:
        raise IncomparableValueError(
            f"Comparator {_name(comparator)} cannot compare "
            f"{type(first).__name__} with {type(last).__name__}: {e}"
        ) from e
    return sign(result)


def natural_order(first: Any, last: Any) -> int:
    """Compare two present values by their natural ordering.

    Identical operands are equal without being compared.

    Raises:
        IncomparableValueError: If an operand is None or the values do not support ``<``
    """
    if first is last:
        return 0
    if first is None or last is None:
        raise IncomparableValueError(
            f"Cannot compare {first!r} with {last!r} by natural order"
        )
    try:
        if first < last:
            return -1
        if last < first:
            return 1
    except TypeError as e:
        raise IncomparableValueError(
            f"Cannot compare {type(first).__name__} with {type(last).__name__} "
            f"by natural order"
        ) from e
    return 0


def fallback_order(first: Any, last: Any) -> int:
    """Whole-value comparator for values of unknown kind.

    Equal values compare equal. Unequal values are ordered naturally when
    they support it, otherwise by qualified type name and repr, so unequal
    values never compare equal.

    Raises:
        IncomparableValueError: If an operand is None
    """
    if first is None or last is None:
        raise IncomparableValueError(
            f"Cannot compare {first!r} with {last!r}: null operand"
        )
    if first is last or first == last:
        return 0

    try:
        result = natural_order(first, last)
    except IncomparableValueError:
        result = 0
    if result:
        return result

    first_key = (_qualified_name(type(first)), repr(first))
    last_key = (_qualified_name(type(last)), repr(last))
    if first_key != last_key:
        return -1 if first_key < last_key else 1
    return -1 if id(first) < id(last) else 1


class NullSafeComparator:
    """Comparator wrapper defining a total order over possibly-absent values.

    ``None`` is the absent value. Two absent values are equal; a single
    absent value sorts first when ``nulls_first`` is true and last
    otherwise, whatever the wrapped comparator is. Present values are
    delegated to the wrapped comparator (natural order by default) and the
    result is normalised to -1, 0 or 1.

    ``nulls_first`` is not a priority flag: ``compare(None, 5)`` is -1 when it
    is true and 1 when it is false.
    """

    def __init__(
        self,
        comparator: Comparator | None = None,
        nulls_first: bool = True,
    ) -> None:
        """Initialize comparator.

        Args:
            comparator: Comparator for present values (natural order if omitted)
            nulls_first: Whether absent values sort before present ones
        """
        self.comparator: Comparator = comparator or natural_order
        self.nulls_first = nulls_first

    def __call__(self, first: Any, last: Any) -> int:
        return self.compare(first, last)

    def compare(self, first: Any, last: Any) -> int:
        """Compare two possibly-absent values.

        Args:
            first: First value (may be None)
            last: Last value (may be None)

        Returns:
            -1, 0 or 1
        """
        if first is None and last is None:
            return 0
        if first is None:
            return -1 if self.nulls_first else 1
        if last is None:
            return 1 if self.nulls_first else -1
        return compare_with(self.comparator, first, last)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({_name(self.comparator)}, "
            f"nulls_first={self.nulls_first})"
        )


def _qualified_name(value_type: type) -> str:
    return f"{value_type.__module__}.{value_type.__qualname__}"


def _name(comparator: Any) -> str:
    return getattr(comparator, "__qualname__", None) or repr(comparator)
