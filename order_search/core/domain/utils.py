"""Value conversion helpers shared by the search engine and the filters.

Conversion contract
-------------------
Records come straight from storage, so the same logical value may arrive as a
native Python object or as a string (dates as ISO-8601 text, years as "2019").
These helpers turn such values into something comparable and return None for
anything that cannot be interpreted. Callers treat None as "no value" and skip
the record or field instead of raising.
"""

import math
from collections.abc import Iterable
from datetime import UTC, date, datetime
from decimal import Decimal
from numbers import Real
from typing import Any

from .search import FieldType

TRUE_KEYWORDS = "true yes active enabled"
FALSE_KEYWORDS = "false no inactive disabled"


def clean_text(text: str) -> str:
    """Remove BOM and replacement characters from text.

    Args:
        text: Input text that may contain BOM markers.

    Returns:
        Text with BOMs removed.
    """
    if not text:
        return ""
    return text.replace("\ufeff", "").replace("\ufffd", "")


def parse_date(value: Any) -> datetime | None:
    """Interpret a value as a timezone-aware datetime.

    Accepts datetime and date objects and ISO-8601 strings (a trailing "Z" is
    allowed). Naive values are taken to be UTC.

    Args:
        value: Raw record or filter value.

    Returns:
        An aware datetime, or None when the value is not a date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def coerce_number(value: Any) -> float | None:
    """Interpret a value as a finite number.

    Booleans, None, empty strings and non-numeric strings are not numbers.

    Args:
        value: Raw record value.

    Returns:
        The value as a float, or None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Real | Decimal):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def format_number(value: Any) -> str:
    """Decimal string for a number, without a trailing ".0" on integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_date(value: datetime) -> str:
    """Render a date as "M/D/YYYY" followed by its UTC ISO-8601 timestamp.

    Both the human and the machine representation end up in one string so a
    query can match either of them.
    """
    utc_value = value.astimezone(UTC)
    iso = utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"{value.month}/{value.day}/{value.year} {iso}"


def to_search_string(value: Any, field_type: FieldType) -> str | None:
    """Convert a raw record value to the string the engine matches against.

    Args:
        value: Raw record value (never None here; callers skip missing values).
        field_type: Declared type of the field.

    Returns:
        The searchable string, or None if the value does not fit the type.
    """
    if field_type is FieldType.NUMBER:
        if isinstance(value, bool):
            return None
        return format_number(value)
    if field_type is FieldType.DATE:
        parsed = parse_date(value)
        return format_date(parsed) if parsed is not None else None
    if field_type is FieldType.BOOLEAN:
        return TRUE_KEYWORDS if value else FALSE_KEYWORDS
    if field_type is FieldType.ARRAY:
        if isinstance(value, Iterable) and not isinstance(value, str | bytes):
            return " ".join(str(element) for element in value)
        return str(value)
    return str(value)
