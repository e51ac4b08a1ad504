"""Unit tests for SearchService scoring and ranking."""

import copy
from datetime import UTC, datetime

import pytest

from order_search.core.domain import FieldSpec, FieldType, SearchConfiguration
from order_search.core.services.search_service import SearchService, levenshtein_distance

pytestmark = pytest.mark.unit


def make_service(*fields: FieldSpec, **options) -> SearchService:
    return SearchService(SearchConfiguration(fields=fields, **options))


@pytest.fixture
def order_service():
    return make_service(FieldSpec("order_number", 2.0), FieldSpec("notes", 0.8))


@pytest.fixture
def order_record():
    return {"id": "1", "order_number": "TRQ_1001", "notes": "fragile cargo"}


class TestSearch:
    """Tests for the search() entry point."""

    def test_substring_match_in_order_number(self, order_service, order_record):
        """'1001' sits at index 4 of an 8-character value, after a word character."""
        results = order_service.search([order_record], "1001")

        assert len(results) == 1
        result = results[0]
        assert result.record is order_record
        assert [match.field for match in result.matches] == ["order_number"]
        # position 0.5 * length 0.5 * no boundary bonus, times weight 2.0
        assert result.score == pytest.approx(0.5)
        assert result.matches[0].highlighted == "TRQ_<mark>1001</mark>"

    def test_unmatched_query_excludes_record(self, order_service, order_record):
        assert order_service.search([order_record], "zzz") == []

    @pytest.mark.parametrize("query", ["", "   ", "\t"])
    def test_blank_query_passes_everything_through(self, order_service, query):
        records = [{"id": "a", "order_number": "X"}, {"id": "b"}, {"id": "c", "notes": "n"}]

        results = order_service.search(records, query)

        assert [result.record for result in results] == records
        assert all(result.record is record for result, record in zip(results, records))
        assert all(result.score == 0 for result in results)
        assert all(result.matches == [] for result in results)

    def test_query_of_blank_phrase_passes_everything_through(self, order_service, order_record):
        results = order_service.search([order_record], '"   "')
        assert len(results) == 1
        assert results[0].score == 0

    def test_every_result_has_a_match(self, order_service):
        records = [
            {"id": "1", "order_number": "TRQ_1001"},
            {"id": "2", "order_number": "TRQ_2002"},
            {"id": "3", "notes": "deliver to TRQ yard"},
            {"id": "4", "notes": "nothing relevant"},
        ]

        results = order_service.search(records, "trq")

        assert [result.record["id"] for result in results] == ["1", "2", "3"]
        assert all(result.matches for result in results)
        assert all(result.score > 0 for result in results)

    def test_scores_are_non_increasing(self):
        service = make_service(FieldSpec("name", 1.0))
        records = [
            {"id": "1", "name": "a long company name with ford inside"},
            {"id": "2", "name": "ford"},
            {"id": "3", "name": "ford motor company"},
            {"id": "4", "name": "fords"},
        ]

        results = service.search(records, "ford")
        scores = [result.score for result in results]

        assert scores == sorted(scores, reverse=True)
        assert results[0].record["id"] == "2"

    def test_equal_scores_keep_input_order(self):
        service = make_service(FieldSpec("make", 1.0))
        records = [{"id": str(i), "make": "Honda"} for i in range(5)]

        results = service.search(records, "honda")

        assert [result.record["id"] for result in results] == ["0", "1", "2", "3", "4"]
        assert len({result.score for result in results}) == 1

    def test_search_is_repeatable(self, order_service):
        records = [
            {"id": "1", "order_number": "TRQ_1001", "notes": "TRQ"},
            {"id": "2", "order_number": "TRQ_1002"},
        ]
        first = order_service.search(records, "trq 100")
        second = order_service.search(records, "trq 100")

        assert [(r.record["id"], r.score) for r in first] == [
            (r.record["id"], r.score) for r in second
        ]

    def test_records_are_not_modified(self, order_service):
        records = [{"id": "1", "order_number": "TRQ_1001", "notes": ["a", "b"]}]
        snapshot = copy.deepcopy(records)

        order_service.search(records, "1001")

        assert records == snapshot

    def test_case_insensitive_by_default(self):
        service = make_service(FieldSpec("make", 1.3))
        record = {"id": "1", "make": "BMW"}

        lower = service.search([record], "bmw")
        upper = service.search([record], "BMW")

        assert lower[0].score == upper[0].score

    def test_case_sensitive_configuration(self):
        service = make_service(FieldSpec("make", 1.3), case_sensitive=True)

        assert service.search([{"id": "1", "make": "BMW"}], "bmw") == []
        assert len(service.search([{"id": "1", "make": "BMW"}], "BMW")) == 1

    def test_diversity_bonus_ranks_multi_field_match_higher(self):
        service = make_service(FieldSpec("a", 1.0), FieldSpec("b", 1.0))
        single = {"id": "single", "a": "alpha", "b": "zzzzzzzz"}
        multi = {"id": "multi", "a": "alpha", "b": "alpha"}

        results = service.search([single, multi], "alpha")

        assert [result.record["id"] for result in results] == ["multi", "single"]
        assert results[0].score == pytest.approx(1.2)
        assert results[1].score == pytest.approx(1.0)

    def test_repeated_matches_in_one_field_are_averaged(self):
        service = make_service(FieldSpec("a", 1.0))
        record = {"id": "1", "a": "New York pickup point"}

        results = service.search([record], '"New York" pickup')

        assert len(results[0].matches) == 2
        expected = sum(match.score for match in results[0].matches) / 2
        assert results[0].score == pytest.approx(expected)

    def test_missing_values_are_skipped(self):
        service = make_service(FieldSpec("a", 1.0), FieldSpec("b", 1.0))

        results = service.search([{"id": "1", "a": None, "b": "ford"}], "ford")

        assert [match.field for match in results[0].matches] == ["b"]

    def test_non_searchable_fields_are_ignored(self):
        service = make_service(FieldSpec("a", 1.0), FieldSpec("secret", 1.0, searchable=False))

        assert service.search([{"id": "1", "a": "x", "secret": "ford"}], "ford") == []


class TestFieldTypes:
    """Tests for matching against non-text fields."""

    def test_number_field(self):
        service = make_service(FieldSpec("year", 1.0, FieldType.NUMBER))

        results = service.search([{"id": "1", "year": 2019}], "2019")

        assert results[0].score == pytest.approx(1.0)

    def test_boolean_in_number_field_is_skipped(self):
        service = make_service(FieldSpec("year", 1.0, FieldType.NUMBER))

        assert service.search([{"id": "1", "year": True}], "true") == []

    def test_date_field_matches_locale_and_iso_forms(self):
        service = make_service(FieldSpec("created_at", 1.0, FieldType.DATE))
        record = {"id": "1", "created_at": "2024-01-15T10:30:00Z"}

        assert len(service.search([record], "1/15/2024")) == 1
        assert len(service.search([record], "2024-01-15")) == 1

    def test_date_objects_are_supported(self):
        service = make_service(FieldSpec("created_at", 1.0, FieldType.DATE))
        record = {"id": "1", "created_at": datetime(2024, 3, 2, 8, 0, tzinfo=UTC)}

        results = service.search([record], "3/2/2024")

        assert results[0].matches[0].value == "3/2/2024 2024-03-02T08:00:00.000Z"

    def test_unparseable_date_is_skipped(self):
        service = make_service(FieldSpec("created_at", 1.0, FieldType.DATE))

        assert service.search([{"id": "1", "created_at": "not a date"}], "not") == []

    def test_boolean_field_keywords(self):
        service = make_service(FieldSpec("active", 1.0, FieldType.BOOLEAN))

        assert len(service.search([{"id": "1", "active": True}], "enabled")) == 1
        assert len(service.search([{"id": "1", "active": False}], "disabled")) == 1
        assert service.search([{"id": "1", "active": True}], "disabled") == []

    def test_array_field(self):
        service = make_service(FieldSpec("tags", 1.0, FieldType.ARRAY))

        results = service.search([{"id": "1", "tags": ["fragile", "oversize"]}], "oversize")

        assert results[0].matches[0].value == "fragile oversize"


class TestTermMatching:
    """Tests for the per-term scoring rules."""

    def test_substring_score_with_word_boundary(self):
        service = make_service(FieldSpec("a", 1.0))
        # position 1.0 * length 0.4 * boundary 1.2
        assert service.substring_score("ford focus", "ford", 0) == pytest.approx(0.48)

    def test_substring_score_without_word_boundary(self):
        service = make_service(FieldSpec("a", 1.0))
        assert service.substring_score("ford focus", "for", 0) == pytest.approx(0.3)

    def test_position_score_has_a_floor(self):
        service = make_service(FieldSpec("a", 1.0))
        # position max(0.3, 0.1) * length 0.1
        assert service.substring_score("abcdefghij", "j", 9) == pytest.approx(0.03)

    def test_substring_score_is_clamped(self):
        service = make_service(FieldSpec("a", 1.0))
        assert service.substring_score("vin", "vin", 0) == 1.0

    def test_constants_are_configurable(self):
        service = make_service(FieldSpec("a", 1.0), word_boundary_bonus=1.5)
        assert service.substring_score("ford focus", "ford", 0) == pytest.approx(0.6)

    def test_fuzzy_match_is_discounted(self):
        service = make_service(FieldSpec("model", 2.0))

        match = service.find_term_match("toyotq", "toyota", FieldSpec("model", 2.0))

        assert match is not None
        assert match.score == pytest.approx((1 - 1 / 6) * 2.0 * 0.7)
        assert match.highlighted is None

    def test_substring_outranks_fuzzy(self):
        service = make_service(FieldSpec("model", 1.0))
        spec = FieldSpec("model", 1.0)

        exact = service.find_term_match("camry", "camry", spec)
        fuzzy = service.find_term_match("camry", "camri", spec)

        assert exact.score == pytest.approx(1.0)
        assert fuzzy.score == pytest.approx(0.56)
        assert exact.score > fuzzy.score

    def test_fuzzy_below_threshold_is_no_match(self):
        service = make_service(FieldSpec("model", 1.0))
        assert service.find_term_match("camry", "civic", FieldSpec("model", 1.0)) is None

    def test_threshold_of_one_disables_fuzzy_matching(self):
        service = make_service(FieldSpec("model", 1.0), fuzzy_threshold=1.0)
        assert service.find_term_match("camry", "camri", FieldSpec("model", 1.0)) is None

    def test_exact_match_mode(self):
        spec = FieldSpec("status", 1.4)
        service = make_service(spec, exact_match=True)

        match = service.find_term_match("Pending", "pending", spec)

        assert match.score == pytest.approx(1.4)
        assert match.highlighted == "<mark>Pending</mark>"
        assert service.find_term_match("Pending", "pend", spec) is None

    def test_highlight_keeps_original_case(self):
        spec = FieldSpec("company", 1.0)
        service = make_service(spec)

        match = service.find_term_match("Sunrise Motors", "motors", spec)

        assert match.highlighted == "Sunrise <mark>Motors</mark>"
        assert match.value == "Sunrise Motors"

    def test_custom_highlight_tags(self):
        spec = FieldSpec("company", 1.0)
        service = make_service(spec, highlight_open_tag="[", highlight_close_tag="]")

        assert service.find_term_match("Bay Auto", "auto", spec).highlighted == "Bay [Auto]"

    def test_highlighting_disabled(self):
        spec = FieldSpec("company", 1.0)
        service = make_service(spec, highlight_matches=False)

        assert service.find_term_match("Bay Auto", "auto", spec).highlighted is None

    def test_word_boundary_detection(self):
        assert SearchService.is_word_boundary("ford focus", 0, 4)
        assert SearchService.is_word_boundary("a-ford.", 2, 4)
        assert not SearchService.is_word_boundary("fords", 0, 4)
        assert not SearchService.is_word_boundary("trq_1001", 4, 4)

    def test_calculate_score_of_no_matches_is_zero(self):
        service = make_service(FieldSpec("a", 1.0))
        assert service.calculate_score([]) == 0.0


class TestLevenshtein:
    """Tests for the edit distance helper."""

    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("abc", "", 3),
            ("same", "same", 0),
            ("flaw", "lawn", 2),
        ],
    )
    def test_distance(self, first, second, expected):
        assert levenshtein_distance(first, second) == expected
