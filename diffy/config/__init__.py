"""Comparison profiles."""

from diffy.config.loader import ProfileLoader, load_profile, resolve_target
from diffy.config.models import DiffProfile, PropertyConfig

__all__ = [
    "DiffProfile",
    "PropertyConfig",
    "ProfileLoader",
    "load_profile",
    "resolve_target",
]
