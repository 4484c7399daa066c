"""Value kinds and type-hint based kind inference."""

from __future__ import annotations

import array
import numbers
import types
from collections.abc import Iterable, Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from diffy.exceptions import IncomparableValueError


class ValueKind(str, Enum):
    """Kind of value an attribute holds, used to pick a default comparator."""

    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    CHAR = "char"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    NUMBER = "number"
    DECIMAL = "decimal"
    STRING = "string"
    LOCALE = "locale"
    ENUM = "enum"
    OBJECT = "object"

    BOOLEAN_ARRAY = "boolean_array"
    BYTE_ARRAY = "byte_array"
    SHORT_ARRAY = "short_array"
    CHAR_ARRAY = "char_array"
    INT_ARRAY = "int_array"
    LONG_ARRAY = "long_array"
    FLOAT_ARRAY = "float_array"
    DOUBLE_ARRAY = "double_array"
    OBJECT_ARRAY = "object_array"
    ITERABLE = "iterable"
    SET = "set"
    MAPPING = "mapping"


# Signed two's complement ranges
INTEGER_BOUNDS: dict[ValueKind, tuple[int, int]] = {
    ValueKind.BYTE: (-(2**7), 2**7 - 1),
    ValueKind.SHORT: (-(2**15), 2**15 - 1),
    ValueKind.INT: (-(2**31), 2**31 - 1),
    ValueKind.LONG: (-(2**63), 2**63 - 1),
}

# Primitive array kind -> element kind
ARRAY_ELEMENT_KINDS: dict[ValueKind, ValueKind] = {
    ValueKind.BOOLEAN_ARRAY: ValueKind.BOOLEAN,
    ValueKind.BYTE_ARRAY: ValueKind.BYTE,
    ValueKind.SHORT_ARRAY: ValueKind.SHORT,
    ValueKind.CHAR_ARRAY: ValueKind.CHAR,
    ValueKind.INT_ARRAY: ValueKind.INT,
    ValueKind.LONG_ARRAY: ValueKind.LONG,
    ValueKind.FLOAT_ARRAY: ValueKind.FLOAT,
    ValueKind.DOUBLE_ARRAY: ValueKind.DOUBLE,
}

_ARRAY_KINDS = {element: kind for kind, element in ARRAY_ELEMENT_KINDS.items()}


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_kind(kind: ValueKind, value: Any) -> bool:
    """Check whether a present value belongs to a scalar kind.

    Collection kinds and OBJECT accept anything here; their containers are
    checked by the sequence and mapping comparators.
    """
    if kind is ValueKind.BOOLEAN:
        return isinstance(value, bool)
    if kind in INTEGER_BOUNDS:
        low, high = INTEGER_BOUNDS[kind]
        return _is_integer(value) and low <= value <= high
    if kind is ValueKind.CHAR:
        return isinstance(value, str) and len(value) == 1
    if kind in (ValueKind.FLOAT, ValueKind.DOUBLE):
        return _is_real(value)
    if kind is ValueKind.NUMBER:
        return isinstance(value, numbers.Number) and not isinstance(value, bool)
    if kind is ValueKind.DECIMAL:
        return isinstance(value, Decimal) or _is_integer(value)
    if kind in (ValueKind.STRING, ValueKind.LOCALE):
        return isinstance(value, str)
    if kind is ValueKind.ENUM:
        return isinstance(value, Enum)
    return True


def ensure_kind(kind: ValueKind, value: Any) -> Any:
    """Return value unchanged if it belongs to kind.

    Raises:
        IncomparableValueError: If the value is of another kind
    """
    if not is_kind(kind, value):
        raise IncomparableValueError(
            f"Expected a {kind.value} value, got {type(value).__name__}: {value!r}"
        )
    return value


def is_sequence(value: Any) -> bool:
    """Sequence check used by array comparators (lists, tuples, array.array)."""
    return isinstance(value, (Sequence, array.array))


def infer_kind(annotation: Any) -> tuple[ValueKind, ValueKind | None]:
    """Infer the value kind of a type hint.

    Args:
        annotation: Resolved type hint (``Annotated`` metadata preserved)

    Returns:
        Tuple of (kind, element kind); element kind is only set for
        collections whose element type is known
    """
    if annotation is None or annotation is Any or isinstance(annotation, str):
        return ValueKind.OBJECT, None

    origin = get_origin(annotation)

    if origin is Annotated:
        base, *metadata = get_args(annotation)
        for item in metadata:
            if isinstance(item, ValueKind):
                return item, infer_kind(base)[1]
        return infer_kind(base)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return infer_kind(members[0])
        return ValueKind.OBJECT, None

    if origin is not None:
        if not isinstance(origin, type):
            return ValueKind.OBJECT, None
        return _collection_kind(origin, get_args(annotation))

    if isinstance(annotation, type):
        return _class_kind(annotation), None

    return ValueKind.OBJECT, None


def _class_kind(cls: type) -> ValueKind:
    if issubclass(cls, bool):
        return ValueKind.BOOLEAN
    if issubclass(cls, Enum):
        return ValueKind.ENUM
    if issubclass(cls, int):
        return ValueKind.NUMBER
    if issubclass(cls, float):
        return ValueKind.DOUBLE
    if issubclass(cls, Decimal):
        return ValueKind.DECIMAL
    if issubclass(cls, numbers.Number):
        return ValueKind.NUMBER
    if issubclass(cls, str):
        return ValueKind.STRING
    if issubclass(cls, (bytes, bytearray, memoryview)):
        return ValueKind.BYTE_ARRAY
    if issubclass(cls, Mapping):
        return ValueKind.MAPPING
    if issubclass(cls, Set):
        return ValueKind.SET
    if issubclass(cls, (Sequence, array.array)):
        return ValueKind.OBJECT_ARRAY
    return ValueKind.OBJECT


def _is_optional(annotation: Any) -> bool:
    origin = get_origin(annotation)
    if origin is Annotated:
        return _is_optional(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(annotation)
    return annotation is None or annotation is type(None)


def _collection_kind(
    origin: type, args: tuple[Any, ...]
) -> tuple[ValueKind, ValueKind | None]:
    if issubclass(origin, Mapping):
        return ValueKind.MAPPING, None

    if origin is tuple:
        # Only homogeneous tuples (tuple[int, ...]) have an element kind
        if len(args) == 2 and args[1] is Ellipsis:
            element = args[0]
        elif len(args) == 1:
            element = args[0]
        else:
            return ValueKind.OBJECT_ARRAY, None
    else:
        element = args[0] if args else Any

    element_kind = infer_kind(element)[0]

    if issubclass(origin, Set):
        return ValueKind.SET, element_kind
    if issubclass(origin, Sequence) and not issubclass(origin, (str, bytes)):
        # Primitive arrays reject None elements
        if element_kind in _ARRAY_KINDS and not _is_optional(element):
            return _ARRAY_KINDS[element_kind], element_kind
        return ValueKind.OBJECT_ARRAY, element_kind
    if issubclass(origin, Iterable):
        return ValueKind.ITERABLE, element_kind
    return ValueKind.OBJECT, None
