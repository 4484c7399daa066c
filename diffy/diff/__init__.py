"""Attribute-level diffing of two instances."""

from diffy.diff.comparator import DiffComparator
from diffy.diff.factory import DiffComparatorFactory, create_diff_comparator
from diffy.diff.models import DiffEntry, DiffResult

__all__ = [
    "DiffComparator",
    "DiffComparatorFactory",
    "create_diff_comparator",
    "DiffEntry",
    "DiffResult",
]
