"""Custom exceptions for diffy."""


class DiffyError(Exception):
    """Base exception for diffy."""

    pass


class InvalidArgumentError(DiffyError):
    """Invalid argument passed to a diff comparator (e.g., a missing instance)."""

    pass


class AttributeAccessError(DiffyError):
    """Attribute value could not be read off an instance."""

    def __init__(self, message: str, property_name: str | None = None) -> None:
        super().__init__(message)
        self.property_name = property_name


class IncomparableValueError(DiffyError):
    """Comparator was given operands it cannot order."""

    pass


class AttributeLookupError(DiffyError):
    """Key is missing from the ranking map of a map-value comparator."""

    def __init__(self, message: str, key: object = None) -> None:
        super().__init__(message)
        self.key = key


class ConfigError(DiffyError):
    """Error loading or validating a comparison profile."""

    pass


class ConfigNotFoundError(ConfigError):
    """Profile file not found."""

    pass


class ConfigValidationError(ConfigError):
    """Profile configuration is invalid."""

    pass
