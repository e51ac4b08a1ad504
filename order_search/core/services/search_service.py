"""Weighted fuzzy search and ranking over in-memory records.

Every searchable field of every record is checked against every query term.
A term scores either as a substring hit (position, coverage and whole-word
bonus) or, failing that, as a discounted fuzzy hit based on Levenshtein
similarity. Per-record scores are the mean of the match scores, boosted when
the matches come from more than one field.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from rapidfuzz.distance import Levenshtein

from ..domain import FieldSpec, Match, SearchConfiguration, SearchResult
from ..domain.utils import to_search_string
from .query_parser import QueryParser

logger = logging.getLogger(__name__)

_WORD_CHAR_RE = re.compile(r"\w")


def levenshtein_distance(first: str, second: str) -> int:
    """Unit-cost edit distance (insertions, deletions, substitutions)."""
    return Levenshtein.distance(first, second)


class SearchService:
    """Ranks records against a free-text query using a SearchConfiguration.

    The service holds no state besides its configuration and parser, so one
    instance can serve any number of concurrent searches.
    """

    def __init__(
        self,
        configuration: SearchConfiguration,
        parser: QueryParser | None = None,
    ) -> None:
        """Initialize the search service.

        Args:
            configuration: Field list and matching parameters.
            parser: Query parser; defaults to QueryParser().
        """
        self.configuration = configuration
        self.parser = parser or QueryParser()

    def search(self, records: Iterable[Mapping[str, Any]], query: str) -> list[SearchResult]:
        """Search records and return them ranked by relevance.

        A blank query returns every record with score 0 and no matches, in
        input order. Otherwise only records with at least one match are
        returned, sorted by descending score; records with equal scores keep
        their input order.

        Args:
            records: Records to search. They are never modified.
            query: Raw user query.

        Returns:
            List of SearchResult objects.
        """
        records = list(records)
        terms = self.parser.parse(query) if query and query.strip() else []

        if not terms:
            return [SearchResult(record=record) for record in records]

        results = []
        for record in records:
            matches = self.find_matches(record, terms)
            if matches:
                results.append(
                    SearchResult(
                        record=record,
                        score=self.calculate_score(matches),
                        matches=matches,
                    )
                )

        # list.sort is stable, also with reverse=True
        results.sort(key=lambda result: result.score, reverse=True)

        logger.debug(
            f"Search for {len(terms)} term(s) matched {len(results)} of {len(records)} records"
        )
        return results

    def find_matches(self, record: Mapping[str, Any], terms: list[str]) -> list[Match]:
        """Collect every field/term match for one record.

        Fields whose value is missing, or cannot be converted to the field's
        declared type, are skipped.
        """
        matches = []
        for spec in self.configuration.searchable_fields:
            raw_value = record.get(spec.key)
            if raw_value is None:
                continue

            value = to_search_string(raw_value, spec.type)
            if value is None:
                continue

            for term in terms:
                match = self.find_term_match(value, term, spec)
                if match is not None:
                    matches.append(match)
        return matches

    def find_term_match(self, value: str, term: str, field: FieldSpec) -> Match | None:
        """Score a single term against a single field value.

        Args:
            value: Field value already converted to a string.
            term: One parsed query term.
            field: Specification of the field being matched.

        Returns:
            A Match with a positive score, or None.
        """
        config = self.configuration
        search_value = value if config.case_sensitive else value.lower()
        search_term = term if config.case_sensitive else term.lower()
        highlighted = None

        if config.exact_match:
            if search_value != search_term:
                return None
            score = field.weight
            if config.highlight_matches:
                highlighted = self.highlight(value, 0, len(value))
        else:
            index = search_value.find(search_term)
            if index != -1:
                score = self.substring_score(search_value, search_term, index) * field.weight
                # Folding can change string length for a few characters, which
                # would shift the span.
                if config.highlight_matches and len(search_value) == len(value):
                    highlighted = self.highlight(value, index, index + len(search_term))
            else:
                similarity = self.fuzzy_score(search_value, search_term)
                if similarity < config.fuzzy_threshold:
                    return None
                score = similarity * field.weight * config.fuzzy_discount

        if score <= 0:
            return None

        return Match(field=field.key, value=value, score=score, highlighted=highlighted)

    def substring_score(self, value: str, term: str, index: int) -> float:
        """Score a substring hit by position, coverage and word boundaries.

        Returns:
            A score in (0, 1], before the field weight is applied.
        """
        config = self.configuration
        if index == 0:
            position_score = 1.0
        else:
            position_score = max(config.position_floor, 1.0 - index / len(value))

        length_score = len(term) / len(value)

        if self.is_word_boundary(value, index, len(term)):
            boundary_bonus = config.word_boundary_bonus
        else:
            boundary_bonus = 1.0

        return min(1.0, position_score * length_score * boundary_bonus)

    def fuzzy_score(self, value: str, term: str) -> float:
        """Normalized Levenshtein similarity between 0 and 1."""
        max_length = max(len(value), len(term))
        if max_length == 0:
            return 1.0
        return 1.0 - levenshtein_distance(value, term) / max_length

    @staticmethod
    def is_word_boundary(value: str, index: int, length: int) -> bool:
        """Check that the span [index, index + length) is a whole word."""
        before = index == 0 or not _WORD_CHAR_RE.match(value[index - 1])
        end = index + length
        after = end >= len(value) or not _WORD_CHAR_RE.match(value[end])
        return before and after

    def calculate_score(self, matches: list[Match]) -> float:
        """Mean match score, times the diversity bonus when more than one field matched."""
        if not matches:
            return 0.0

        total = sum(match.score for match in matches)
        distinct_fields = len({match.field for match in matches})
        bonus = self.configuration.diversity_bonus if distinct_fields > 1 else 1.0
        return (total / len(matches)) * bonus

    def highlight(self, value: str, start: int, end: int) -> str:
        """Wrap value[start:end] in the configured highlight tags."""
        config = self.configuration
        return (
            f"{value[:start]}{config.highlight_open_tag}{value[start:end]}"
            f"{config.highlight_close_tag}{value[end:]}"
        )
