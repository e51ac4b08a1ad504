"""Custom exception hierarchy for Order Search.

This package provides structured exceptions with automatic context capture.
Each exception includes:
- Error codes for quick identification
- Automatic capture of class, method, file, and line number
- Cause chaining for underlying exceptions
- JSON serialization for structured logging

Import from this package directly:

    from order_search.core.domain.exceptions import OrderSearchError, InvalidFieldWeightError
"""

# Base classes
from .base import ExceptionContext, OrderSearchError

# Configuration exceptions
from .configuration import (
    ConfigurationError,
    DuplicateFieldError,
    InvalidConfigurationError,
    InvalidFieldWeightError,
)

# Data exceptions
from .data import DataError, RecordLoadError

# Validation exceptions
from .validation import InvalidFilterValueError, ValidationError

__all__ = [
    # Base
    "ExceptionContext",
    "OrderSearchError",
    # Configuration
    "ConfigurationError",
    "InvalidFieldWeightError",
    "InvalidConfigurationError",
    "DuplicateFieldError",
    # Validation
    "ValidationError",
    "InvalidFilterValueError",
    # Data
    "DataError",
    "RecordLoadError",
]
