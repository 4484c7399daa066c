"""Attribute discovery for diffed types."""

from diffy.attributes.models import AttributeDescriptor
from diffy.attributes.resolver import (
    AttributeResolver,
    MappingAttributeResolver,
    ReflectionAttributeResolver,
)

__all__ = [
    "AttributeDescriptor",
    "AttributeResolver",
    "MappingAttributeResolver",
    "ReflectionAttributeResolver",
]
