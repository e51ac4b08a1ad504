"""Configuration-related exceptions for Order Search."""

from .base import OrderSearchError


class ConfigurationError(OrderSearchError):
    """Search configuration errors.

    Raised when a field list or matching parameter is invalid. These are
    always raised while a configuration is being built, never during a search.
    """

    error_code = "OS_CFG_001"


class InvalidFieldWeightError(ConfigurationError):
    """A field weight is zero, negative or not a finite number."""

    error_code = "OS_CFG_002"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "OS_CFG_003"


class DuplicateFieldError(ConfigurationError):
    """The same field key appears more than once in a configuration."""

    error_code = "OS_CFG_004"
