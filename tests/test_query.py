"""Tests for query-string contributors."""

from exercism_api.query import (
    ConditionalParam,
    JoinedParam,
    OptionalParam,
    QueryParams,
    RepeatedParam,
    encode_query,
    to_query_value,
)
from exercism_api.v2 import models
from exercism_api.v2.filters import (
    ExerciseFilters,
    Paging,
    SolutionFilters,
    SortOrder,
    TrackFilters,
    TrackStatusFilter,
)


class TestEmptyContributesNothing:
    """Absent or empty inputs never add a pair."""

    def test_absent_optional(self):
        assert encode_query(OptionalParam("criteria", None)) == []

    def test_empty_string_optional(self):
        assert encode_query(OptionalParam("criteria", "")) == []
        assert encode_query(TrackFilters(criteria="")) == []
        assert encode_query(OptionalParam("page", 0)) == [("page", "0")]

    def test_empty_repeated(self):
        assert encode_query(RepeatedParam("tags[]", [])) == []
        assert encode_query(RepeatedParam("tags[]", None)) == []

    def test_empty_joined(self):
        assert encode_query(JoinedParam("tests_status", [])) == []

    def test_false_conditional(self):
        assert encode_query(ConditionalParam(False, "sideload", "solutions")) == []

    def test_none_contributor(self):
        assert encode_query(None) == []

    def test_existing_pairs_untouched(self):
        params = QueryParams([("page", "2")])
        params.extend([
            OptionalParam("criteria", None),
            RepeatedParam("tags[]", []),
            JoinedParam("tests_status", []),
            ConditionalParam(False, "sideload", "solutions"),
        ])
        assert params == [("page", "2")]

    def test_empty_filters(self):
        assert encode_query(TrackFilters()) == []
        assert encode_query(ExerciseFilters()) == []
        assert encode_query(SolutionFilters()) == []


class TestJoinedParam:
    def test_single_pair_joined_by_space(self):
        params = encode_query(JoinedParam("tests_status", ["passed", "failed", "errored"]))
        assert params == [("tests_status", "passed failed errored")]

    def test_single_value(self):
        assert encode_query(JoinedParam("k", ["only"])) == [("k", "only")]

    def test_enum_values(self):
        params = encode_query(JoinedParam("k", [models.TestsStatus.PASSED, models.TestsStatus.QUEUED]))
        assert params == [("k", "passed queued")]


class TestQueryParams:
    def test_duplicates_are_kept_in_order(self):
        params = encode_query(
            RepeatedParam("tags[]", ["Paradigm/Functional", "Typing/Static"]),
            OptionalParam("status", "joined"),
        )
        assert params.items() == [
            ("tags[]", "Paradigm/Functional"),
            ("tags[]", "Typing/Static"),
            ("status", "joined"),
        ]
        assert params.get_all("tags[]") == ["Paradigm/Functional", "Typing/Static"]
        assert len(params) == 3

    def test_value_rendering(self):
        assert to_query_value(True) == "true"
        assert to_query_value(False) == "false"
        assert to_query_value(3) == "3"
        assert to_query_value(TrackStatusFilter.UNJOINED) == "unjoined"

    def test_conditional_true(self):
        assert encode_query(ConditionalParam(True, "sideload", "solutions")) == [("sideload", "solutions")]


class TestFilters:
    def test_track_filters(self):
        filters = TrackFilters(criteria="ru", tags=["a", "b"], status=TrackStatusFilter.JOINED)
        assert encode_query(filters) == [
            ("criteria", "ru"),
            ("tags[]", "a"),
            ("tags[]", "b"),
            ("status", "joined"),
        ]

    def test_exercise_filters(self):
        filters = ExerciseFilters(criteria="squares", include_solutions=True)
        assert encode_query(filters) == [("criteria", "squares"), ("sideload", "solutions")]

    def test_solution_filters(self):
        filters = SolutionFilters(
            criteria="foo",
            track="rust",
            status=models.SolutionStatus.PUBLISHED,
            mentoring_status=models.MentoringStatus.IN_PROGRESS,
            is_out_of_date=True,
            published_iteration_tests_statuses=[models.TestsStatus.PASSED, models.TestsStatus.FAILED],
            published_iteration_head_tests_statuses=[models.TestsStatus.QUEUED],
        )
        assert encode_query(filters) == [
            ("criteria", "foo"),
            ("track_slug", "rust"),
            ("status", "published"),
            ("mentoring_status", "in_progress"),
            ("sync_status", "out_of_date"),
            ("tests_status", "passed failed"),
            ("head_tests_status", "queued"),
        ]

    def test_up_to_date(self):
        assert encode_query(SolutionFilters(is_out_of_date=False)) == [("sync_status", "up_to_date")]

    def test_paging(self):
        assert encode_query(Paging.for_page(2)) == [("page", "2")]
        assert encode_query(Paging.for_page(2).and_per_page(50)) == [("page", "2"), ("per_page", "50")]

    def test_sort_order(self):
        assert encode_query(SortOrder.MOST_STARRED) == [("order", "most_starred")]
