"""diffy - attribute-level differences between two instances of a type."""

__version__ = "0.1.0"

from diffy.attributes import (
    AttributeDescriptor,
    AttributeResolver,
    MappingAttributeResolver,
    ReflectionAttributeResolver,
)
from diffy.comparators import Comparator, NullSafeComparator, ValueKind
from diffy.diff import (
    DiffComparator,
    DiffComparatorFactory,
    DiffEntry,
    DiffResult,
    create_diff_comparator,
)
from diffy.exceptions import (
    AttributeAccessError,
    AttributeLookupError,
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    DiffyError,
    IncomparableValueError,
    InvalidArgumentError,
)

__all__ = [
    "__version__",
    "AttributeDescriptor",
    "AttributeResolver",
    "MappingAttributeResolver",
    "ReflectionAttributeResolver",
    "Comparator",
    "NullSafeComparator",
    "ValueKind",
    "DiffComparator",
    "DiffComparatorFactory",
    "DiffEntry",
    "DiffResult",
    "create_diff_comparator",
    "AttributeAccessError",
    "AttributeLookupError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "DiffyError",
    "IncomparableValueError",
    "InvalidArgumentError",
]
