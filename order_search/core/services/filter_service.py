"""Composable record filters.

Each filter takes a collection of mapping records, a field name and its own
parameters, and returns a new list with the records that pass. Inputs are
never modified and relative order is preserved, so filters can be chained
with each other and applied before or after a search.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, TypeVar

from ..domain.exceptions import InvalidFilterValueError
from ..domain.utils import coerce_number, parse_date

RecordT = TypeVar("RecordT", bound=Mapping[str, Any])


def _parse_bound(value: Any, name: str) -> datetime | None:
    """Parse a date bound; None and empty strings leave the side open."""
    if value is None or value == "":
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidFilterValueError(
            f"Cannot interpret {name} date {value!r}",
            context={"bound": name, "value": str(value)},
        )
    return parsed


def date_range(
    items: Iterable[RecordT],
    field: str,
    start: Any = None,
    end: Any = None,
) -> list[RecordT]:
    """Keep items whose date field falls within [start, end].

    The end bound covers its whole day (up to 23:59:59.999). Items whose field
    is missing or not a valid date are dropped.

    Args:
        items: Records to filter.
        field: Name of the date field.
        start: Optional earliest date (ISO string, date or datetime).
        end: Optional latest date.

    Returns:
        Filtered records in input order.

    Raises:
        InvalidFilterValueError: If a bound is given but cannot be parsed.
    """
    start_at = _parse_bound(start, "start")
    end_at = _parse_bound(end, "end")
    if end_at is not None:
        end_at = end_at.replace(hour=23, minute=59, second=59, microsecond=999000)

    kept = []
    for item in items:
        item_date = parse_date(item.get(field))
        if item_date is None:
            continue
        if start_at is not None and item_date < start_at:
            continue
        if end_at is not None and item_date > end_at:
            continue
        kept.append(item)
    return kept


def multi_value(items: Iterable[RecordT], field: str, values: Iterable[Any]) -> list[RecordT]:
    """Keep items whose field equals any of values.

    An empty values collection means nothing is selected, and every item is
    kept.
    """
    values = list(values)
    if not values:
        return list(items)
    return [item for item in items if item.get(field) in values]


def number_range(
    items: Iterable[RecordT],
    field: str,
    minimum: float | None = None,
    maximum: float | None = None,
) -> list[RecordT]:
    """Keep items whose numeric field lies within [minimum, maximum].

    Either bound may be None for an open range. Items whose field does not
    hold a number (or a numeric string) are dropped.
    """
    kept = []
    for item in items:
        number = coerce_number(item.get(field))
        if number is None:
            continue
        if minimum is not None and number < minimum:
            continue
        if maximum is not None and number > maximum:
            continue
        kept.append(item)
    return kept


def boolean(items: Iterable[RecordT], field: str, value: bool) -> list[RecordT]:
    """Keep items whose field truthiness equals value."""
    wanted = bool(value)
    return [item for item in items if bool(item.get(field)) is wanted]
