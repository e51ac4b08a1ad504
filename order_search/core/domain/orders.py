"""Transport order filter models used by the admin order list."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OrderStatus(Enum):
    """Lifecycle status of a transportation request."""

    PENDING = "pending"
    QUOTED = "quoted"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Assignment(Enum):
    """Whether an order has an admin assigned to it."""

    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window; either side may be left open.

    Attributes:
        start: Earliest date (ISO-8601 string, date or datetime).
        end: Latest date; the whole end day is included.
    """

    start: Any = None
    end: Any = None

    @property
    def is_open(self) -> bool:
        """True when neither bound is set."""
        return not self.start and not self.end


@dataclass
class OrderFilters:
    """State of the admin filter panel for the order list.

    Attributes:
        search: Free-text query for the search engine.
        statuses: Status values to keep (OR); empty keeps every status.
        date_range: Window applied to the order creation date.
        assignment: Keep only assigned or unassigned orders.
        custom_filters: Extra field -> value equality filters.
        sort_by: Record field to sort by; None keeps the engine order.
        sort_order: Direction used with sort_by.
    """

    search: str = ""
    statuses: list[str] = field(default_factory=list)
    date_range: DateRange | None = None
    assignment: Assignment | None = None
    custom_filters: dict[str, Any] = field(default_factory=dict)
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.DESC

    @property
    def active_filter_count(self) -> int:
        """Number of active criteria, counted the way the filter panel shows them."""
        count = 0
        if self.search.strip():
            count += 1
        if self.statuses:
            count += 1
        if self.date_range is not None and not self.date_range.is_open:
            count += 1
        if self.assignment is not None:
            count += 1
        count += len(self.custom_filters)
        return count

    @property
    def is_empty(self) -> bool:
        return self.active_filter_count == 0
