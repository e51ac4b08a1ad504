"""Validation exceptions for Order Search."""

from .base import OrderSearchError


class ValidationError(OrderSearchError):
    """Input validation failed."""

    error_code = "OS_VAL_001"


class InvalidFilterValueError(ValidationError):
    """A filter bound supplied by the caller cannot be interpreted."""

    error_code = "OS_VAL_002"
