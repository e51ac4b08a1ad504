"""Search, ranking and filtering services."""

from .filter_service import boolean, date_range, multi_value, number_range
from .order_search import OrderSearch, order_search_configuration, sort_results
from .query_parser import QueryParser
from .search_service import SearchService, levenshtein_distance

__all__ = [
    "QueryParser",
    "SearchService",
    "levenshtein_distance",
    "date_range",
    "multi_value",
    "number_range",
    "boolean",
    "OrderSearch",
    "order_search_configuration",
    "sort_results",
]
