"""Record data exceptions for Order Search."""

from .base import OrderSearchError


class DataError(OrderSearchError):
    """Base class for record data errors."""

    error_code = "OS_DAT_001"


class RecordLoadError(DataError):
    """Records could not be read from their source."""

    error_code = "OS_DAT_002"
