"""Field configuration and search result models for the search engine."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .exceptions import DuplicateFieldError, InvalidConfigurationError, InvalidFieldWeightError

# Scoring constants. They are carried on every SearchConfiguration so a use-site
# can tune them without touching the engine.
DEFAULT_FUZZY_THRESHOLD = 0.6
FUZZY_DISCOUNT = 0.7
DIVERSITY_BONUS = 1.2
WORD_BOUNDARY_BONUS = 1.2
POSITION_FLOOR = 0.3


class FieldType(Enum):
    """How a raw record value is turned into a searchable string.

    Attributes:
        TEXT: Used as-is.
        NUMBER: Decimal string representation.
        DATE: Locale date plus ISO-8601 timestamp, so both forms can match.
        BOOLEAN: A keyword set ("true yes active enabled" or the negations).
        ARRAY: Elements joined with a single space.
    """

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    ARRAY = "array"


@dataclass(frozen=True)
class FieldSpec:
    """One record field available to the engine.

    Attributes:
        key: Name of the field on a record.
        weight: Positive multiplier applied to every match found in this field.
        type: Conversion rule for the raw value.
        searchable: Whether the engine scans this field for query terms.
        filterable: Advisory flag for callers building filter panels.
    """

    key: str
    weight: float = 1.0
    type: FieldType = FieldType.TEXT
    searchable: bool = True
    filterable: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.type, FieldType):
            try:
                object.__setattr__(self, "type", FieldType(self.type))
            except ValueError as e:
                raise InvalidConfigurationError(
                    f"Unknown field type '{self.type}' for field '{self.key}'",
                    cause=e,
                    context={"field": self.key, "type": self.type},
                ) from e

        weight = self.weight
        if (
            isinstance(weight, bool)
            or not isinstance(weight, int | float)
            or not math.isfinite(weight)
            or weight <= 0
        ):
            raise InvalidFieldWeightError(
                f"Field '{self.key}' must have a positive weight, got {weight!r}",
                context={"field": self.key, "weight": weight},
            )


@dataclass(frozen=True)
class SearchConfiguration:
    """Immutable field list and matching parameters for one search context.

    Build one per use-site (for example "order search") and keep it for the
    lifetime of that context. Use with_options() to derive a changed copy.

    Attributes:
        fields: Field specifications, in scan order.
        fuzzy_threshold: Minimum normalized similarity for a fuzzy match (0-1).
        case_sensitive: Compare without case folding.
        exact_match: Only whole-value equality counts as a match.
        highlight_matches: Produce a marked-up copy of matched values.
        highlight_open_tag: Inserted before a highlighted span.
        highlight_close_tag: Inserted after a highlighted span.
        id_field: Record key holding the stable identifier.
        fuzzy_discount: Multiplier applied to fuzzy match scores.
        diversity_bonus: Multiplier for records matching in several fields.
        word_boundary_bonus: Multiplier for whole-word substring matches.
        position_floor: Lowest position score a substring match can get.
    """

    fields: tuple[FieldSpec, ...]
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    case_sensitive: bool = False
    exact_match: bool = False
    highlight_matches: bool = True
    highlight_open_tag: str = "<mark>"
    highlight_close_tag: str = "</mark>"
    id_field: str = "id"
    fuzzy_discount: float = FUZZY_DISCOUNT
    diversity_bonus: float = DIVERSITY_BONUS
    word_boundary_bonus: float = WORD_BOUNDARY_BONUS
    position_floor: float = POSITION_FLOOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

        seen: set[str] = set()
        for spec in self.fields:
            if spec.key in seen:
                raise DuplicateFieldError(
                    f"Field '{spec.key}' is configured more than once",
                    context={"field": spec.key},
                )
            seen.add(spec.key)

        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            raise InvalidConfigurationError(
                f"fuzzy_threshold must be between 0 and 1, got {self.fuzzy_threshold}",
                context={"fuzzy_threshold": self.fuzzy_threshold},
            )

        for name in ("fuzzy_discount", "diversity_bonus", "word_boundary_bonus", "position_floor"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidConfigurationError(
                    f"{name} must be a positive number, got {value}",
                    context={name: value},
                )

    @property
    def searchable_fields(self) -> tuple[FieldSpec, ...]:
        """Fields the engine scans for term matches."""
        return tuple(spec for spec in self.fields if spec.searchable)

    @property
    def filterable_fields(self) -> tuple[FieldSpec, ...]:
        """Fields a filter panel may offer."""
        return tuple(spec for spec in self.fields if spec.filterable)

    def get_field(self, key: str) -> FieldSpec | None:
        """Look up a field specification by key."""
        for spec in self.fields:
            if spec.key == key:
                return spec
        return None

    def with_options(self, **changes: Any) -> "SearchConfiguration":
        """Return a new configuration with the given attributes replaced."""
        return replace(self, **changes)


@dataclass
class Match:
    """A single term match inside one field of a record.

    Attributes:
        field: Key of the matched field.
        value: The field value as a searchable string (not case folded).
        score: Weighted match score, always greater than zero.
        highlighted: value with the matched span wrapped in highlight tags,
            or None for fuzzy matches and when highlighting is off.
    """

    field: str
    value: str
    score: float
    highlighted: str | None = None


@dataclass
class SearchResult:
    """A record together with its aggregate score and matches.

    Attributes:
        record: The caller's record, returned by reference.
        score: Aggregate relevance score (0 for pass-through results).
        matches: Every match found for the record, in field then term order.
    """

    record: Mapping[str, Any]
    score: float = 0.0
    matches: list[Match] = field(default_factory=list)

    @property
    def matched_fields(self) -> list[str]:
        """Distinct matched field keys, in first-match order."""
        return list(dict.fromkeys(match.field for match in self.matches))
