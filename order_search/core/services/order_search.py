"""Search and filtering for the admin transportation order list."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..domain import (
    Assignment,
    FieldSpec,
    FieldType,
    OrderFilters,
    SearchConfiguration,
    SearchResult,
    SortOrder,
)
from . import filter_service
from .search_service import SearchService

logger = logging.getLogger(__name__)

ORDER_FUZZY_THRESHOLD = 0.7

# Identifiers first, then parties and vehicle, then contact details, then
# free text and timestamps.
ORDER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("order_number", 2.0),
    FieldSpec("vin_number", 1.8),
    FieldSpec("pickup_company_name", 1.5),
    FieldSpec("delivery_company_name", 1.5),
    FieldSpec("pickup_contact_name", 1.2),
    FieldSpec("delivery_contact_name", 1.2),
    FieldSpec("pickup_contact_phone", 1.0),
    FieldSpec("delivery_contact_phone", 1.0),
    FieldSpec("vehicle_make", 1.3),
    FieldSpec("vehicle_model", 1.3),
    FieldSpec("vehicle_year", 1.0, FieldType.NUMBER, filterable=True),
    FieldSpec("status", 1.4, filterable=True),
    FieldSpec("notes", 0.8),
    FieldSpec("created_at", 0.5, FieldType.DATE, filterable=True),
    FieldSpec("assigned_admin_id", 1.0, searchable=False, filterable=True),
)

CREATED_AT_FIELD = "created_at"
STATUS_FIELD = "status"
ASSIGNED_ADMIN_FIELD = "assigned_admin_id"


def order_search_configuration(**overrides: Any) -> SearchConfiguration:
    """Build the reference configuration for searching transportation orders.

    Args:
        **overrides: SearchConfiguration attributes to replace, for example
            fuzzy_threshold or highlight_matches.

    Returns:
        A new SearchConfiguration.
    """
    options: dict[str, Any] = {"fuzzy_threshold": ORDER_FUZZY_THRESHOLD}
    options.update(overrides)
    return SearchConfiguration(fields=ORDER_FIELDS, **options)


def _sort_key(result: SearchResult, field: str) -> Any:
    value = result.record.get(field)
    return value.lower() if isinstance(value, str) else value


def sort_results(
    results: Iterable[SearchResult],
    field: str,
    descending: bool = False,
) -> list[SearchResult]:
    """Sort results by a record field.

    Records missing the field go last in either direction. The sort is
    stable, so ties keep their current (ranked) order.

    Args:
        results: Results to sort.
        field: Record field to sort on.
        descending: Sort from highest to lowest.

    Returns:
        A new sorted list.
    """
    results = list(results)
    present = [result for result in results if result.record.get(field) is not None]
    missing = [result for result in results if result.record.get(field) is None]
    try:
        present.sort(key=lambda result: _sort_key(result, field), reverse=descending)
    except TypeError:
        # Mixed value types; fall back to comparing their string forms.
        present.sort(key=lambda result: str(_sort_key(result, field)), reverse=descending)
    return present + missing


class OrderSearch:
    """Applies the admin filter panel state to a list of orders."""

    def __init__(self, configuration: SearchConfiguration | None = None) -> None:
        """Initialize the order search.

        Args:
            configuration: Search configuration; defaults to the order preset.
        """
        self.configuration = configuration or order_search_configuration()
        self.search_service = SearchService(self.configuration)

    def filter(
        self,
        orders: Iterable[Mapping[str, Any]],
        filters: OrderFilters,
    ) -> list[Mapping[str, Any]]:
        """Apply the non-text criteria of filters.

        Returns:
            Orders passing every active criterion, in input order.
        """
        selected = filter_service.multi_value(orders, STATUS_FIELD, filters.statuses)

        if filters.date_range is not None and not filters.date_range.is_open:
            selected = filter_service.date_range(
                selected,
                CREATED_AT_FIELD,
                filters.date_range.start,
                filters.date_range.end,
            )

        if filters.assignment is not None:
            selected = filter_service.boolean(
                selected,
                ASSIGNED_ADMIN_FIELD,
                filters.assignment is Assignment.ASSIGNED,
            )

        for field, value in filters.custom_filters.items():
            if value is None or value == "":
                continue
            selected = filter_service.multi_value(selected, field, [value])

        return selected

    def apply(
        self,
        orders: Iterable[Mapping[str, Any]],
        filters: OrderFilters,
    ) -> list[SearchResult]:
        """Filter, search and optionally sort orders.

        Non-text filters run before scoring, so only surviving orders are scored.

        Args:
            orders: Orders to search.
            filters: Filter panel state.

        Returns:
            Matching orders as SearchResult objects.
        """
        orders = list(orders)
        selected = self.filter(orders, filters)
        results = self.search_service.search(selected, filters.search)

        if filters.sort_by:
            results = sort_results(
                results,
                filters.sort_by,
                descending=filters.sort_order is SortOrder.DESC,
            )

        logger.debug(
            f"Order search returned {len(results)} of {len(orders)} orders "
            f"({filters.active_filter_count} active filter(s))"
        )
        return results
