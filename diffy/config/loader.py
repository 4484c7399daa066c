"""Loader for comparison profiles."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from diffy.config.models import DiffProfile
from diffy.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)


class ProfileLoader:
    """Loader for comparison profiles.

    Parses the profile YAML and resolves the target type it names.
    """

    def __init__(self, profile_path: Union[Path, str]) -> None:
        """Initialize loader with path to the profile.

        Args:
            profile_path: Path to the profile YAML file
        """
        self.profile_path = Path(profile_path)

        self._profile: Optional[DiffProfile] = None
        self._target_type: Optional[type] = None

    @property
    def profile(self) -> DiffProfile:
        """Get validated profile."""
        if self._profile is None:
            self._profile = self._load_profile()
        return self._profile

    @property
    def target_type(self) -> Optional[type]:
        """Get the type named by the profile's target, if any."""
        if self._target_type is None and self.profile.target:
            self._target_type = resolve_target(self.profile.target)
        return self._target_type

    def _load_profile(self) -> DiffProfile:
        """Load and validate the profile.

        Returns:
            Validated DiffProfile

        Raises:
            ConfigNotFoundError: If the profile doesn't exist
            ConfigValidationError: If the profile is invalid
        """
        if not self.profile_path.is_file():
            raise ConfigNotFoundError(f"Profile not found: {self.profile_path}")

        try:
            with open(self.profile_path, "r", encoding="utf-8") as f:
                raw_profile = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in {self.profile_path.name}: {e}"
            ) from e
        except OSError as e:
            raise ConfigNotFoundError(f"Failed to read profile: {e}") from e

        if not isinstance(raw_profile, dict):
            raise ConfigValidationError("Profile must be a YAML mapping")

        try:
            profile = DiffProfile.model_validate(raw_profile)
        except ValidationError as e:
            errors = []
            for err in e.errors():
                loc = ".".join(str(x) for x in err["loc"])
                errors.append(f"  - {loc}: {err['msg']}")
            raise ConfigValidationError(
                "Profile validation failed:\n" + "\n".join(errors)
            ) from e

        logger.debug(f"Loaded profile {self.profile_path}")
        return profile


def load_profile(profile_path: Union[Path, str]) -> DiffProfile:
    """Load and validate a comparison profile.

    Args:
        profile_path: Path to the profile YAML file

    Returns:
        Validated DiffProfile
    """
    return ProfileLoader(profile_path).profile


def resolve_target(path: str) -> type:
    """Import a class from a ``module:Class`` (or ``module.Class``) path.

    Args:
        path: Import path; nested classes use dots after the colon

    Returns:
        The class

    Raises:
        ConfigValidationError: If the path cannot be imported or is not a class
    """
    if ":" in path:
        module_name, _, qualname = path.partition(":")
    else:
        module_name, _, qualname = path.rpartition(".")
    if not module_name or not qualname:
        raise ConfigValidationError(
            f"Invalid target '{path}': expected 'module:Class'"
        )

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigValidationError(
            f"Cannot import module '{module_name}' for target '{path}': {e}"
        ) from e

    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigValidationError(
                f"Target '{path}' not found: no attribute '{part}'"
            ) from e

    if not isinstance(target, type):
        raise ConfigValidationError(f"Target '{path}' is not a class")
    return target
