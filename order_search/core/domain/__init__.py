"""Domain models for Order Search.

Models are organized by domain area:

- search: FieldSpec, SearchConfiguration, Match and SearchResult for the engine
- orders: OrderStatus, OrderFilters and related admin filter state
- utils: value conversion shared by the engine and the filters

All models are re-exported here for convenient importing:

    from order_search.core.domain import FieldSpec, SearchConfiguration, SearchResult
"""

from .orders import Assignment, DateRange, OrderFilters, OrderStatus, SortOrder
from .search import FieldSpec, FieldType, Match, SearchConfiguration, SearchResult

__all__ = [
    # Search models
    "FieldType",
    "FieldSpec",
    "SearchConfiguration",
    "Match",
    "SearchResult",
    # Order filter models
    "OrderStatus",
    "Assignment",
    "SortOrder",
    "DateRange",
    "OrderFilters",
]
