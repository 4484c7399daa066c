"""Validators converting raw text into bounded integers."""

from __future__ import annotations

import re

from diffy.comparators.kinds import INTEGER_BOUNDS, ValueKind
from diffy.exceptions import InvalidArgumentError


class BoundedIntegerValidator:
    """Validates and converts text into an integer within fixed bounds.

    In strict mode the whole input must be a number, optionally signed and
    grouped in threes (``"1,234"``). Lenient mode accepts loose grouping and
    ignores anything after the leading number (``"12 apples"`` -> 12).
    """

    def __init__(
        self,
        minimum: int,
        maximum: int,
        strict: bool = True,
        grouping_separator: str = ",",
    ) -> None:
        """Initialize validator.

        Args:
            minimum: Smallest accepted value
            maximum: Largest accepted value
            strict: Reject loose grouping and trailing text
            grouping_separator: Thousands separator

        Raises:
            InvalidArgumentError: If the bounds are inverted or the separator
                is empty or a digit
        """
        if minimum > maximum:
            raise InvalidArgumentError(f"Invalid bounds: {minimum} > {maximum}")
        if len(grouping_separator) != 1 or grouping_separator.isdigit():
            raise InvalidArgumentError(
                f"Invalid grouping separator: {grouping_separator!r}"
            )

        self.minimum = minimum
        self.maximum = maximum
        self.strict = strict
        self.grouping_separator = grouping_separator

        sep = re.escape(grouping_separator)
        if strict:
            self._pattern = re.compile(rf"([+-]?)(\d{{1,3}}(?:{sep}\d{{3}})+|\d+)")
        else:
            self._pattern = re.compile(rf"([+-]?)(\d[\d{sep}]*)")

    def validate(self, value: str | None) -> bool:
        """Check whether value parses to an integer within bounds."""
        return self.parse(value) is not None

    def parse(self, value: str | None) -> int | None:
        """Convert value to an integer.

        Args:
            value: Raw text (surrounding whitespace is ignored)

        Returns:
            The integer, or None if value is invalid or out of bounds
        """
        if value is None:
            return None
        text = value.strip()
        match = self._pattern.fullmatch(text) if self.strict else self._pattern.match(text)
        if match is None:
            return None

        sign, digits = match.groups()
        number = int(digits.replace(self.grouping_separator, ""))
        if sign == "-":
            number = -number
        if not self.minimum <= number <= self.maximum:
            return None
        return number

    def is_in_range(self, value: int, low: int, high: int) -> bool:
        """Check whether low <= value <= high."""
        return low <= value <= high

    def min_value(self, value: int, low: int) -> bool:
        """Check whether value >= low."""
        return value >= low

    def max_value(self, value: int, high: int) -> bool:
        """Check whether value <= high."""
        return value <= high

    def format(self, value: int, grouping: bool = False) -> str:
        """Render value as text, optionally grouped in threes."""
        if not grouping:
            return str(value)
        return f"{value:,}".replace(",", self.grouping_separator)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.minimum}, {self.maximum}, "
            f"strict={self.strict})"
        )


class _KindValidator(BoundedIntegerValidator):
    kind: ValueKind

    def __init__(self, strict: bool = True, grouping_separator: str = ",") -> None:
        minimum, maximum = INTEGER_BOUNDS[self.kind]
        super().__init__(minimum, maximum, strict, grouping_separator)


class ByteValidator(_KindValidator):
    """Validator for 8-bit signed integers."""

    kind = ValueKind.BYTE


class ShortValidator(_KindValidator):
    """Validator for 16-bit signed integers."""

    kind = ValueKind.SHORT


class IntegerValidator(_KindValidator):
    """Validator for 32-bit signed integers."""

    kind = ValueKind.INT


class LongValidator(_KindValidator):
    """Validator for 64-bit signed integers."""

    kind = ValueKind.LONG
