"""Query filters accepted by the v2 API endpoints."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from ..query import ConditionalParam, JoinedParam, OptionalParam, QueryParams, RepeatedParam
from .models import MentoringStatus, SolutionStatus, TestsStatus


class TrackStatusFilter(str, Enum):
    ALL = "all"
    JOINED = "joined"
    UNJOINED = "unjoined"


class SortOrder(str, Enum):
    """Ordering of solution search results (``order`` parameter)."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"
    MOST_STARRED = "most_starred"

    def contribute(self, params: QueryParams) -> QueryParams:
        return params.add("order", self)


@dataclass
class TrackFilters:
    criteria: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    status: Optional[TrackStatusFilter] = None

    def contribute(self, params: QueryParams) -> QueryParams:
        return params.extend([
            OptionalParam("criteria", self.criteria),
            RepeatedParam("tags[]", self.tags),
            OptionalParam("status", self.status),
        ])


@dataclass
class ExerciseFilters:
    criteria: Optional[str] = None
    include_solutions: bool = False

    def contribute(self, params: QueryParams) -> QueryParams:
        return params.extend([
            OptionalParam("criteria", self.criteria),
            ConditionalParam(self.include_solutions, "sideload", "solutions"),
        ])


@dataclass
class SolutionFilters:
    """
    Filters for a solution search.

    ``is_out_of_date`` maps to ``sync_status`` (``out_of_date`` or
    ``up_to_date``). The two tests status lists are sent as single
    space-separated values.
    """

    criteria: Optional[str] = None
    track: Optional[str] = None
    status: Optional[SolutionStatus] = None
    mentoring_status: Optional[MentoringStatus] = None
    is_out_of_date: Optional[bool] = None
    published_iteration_tests_statuses: List[TestsStatus] = field(default_factory=list)
    published_iteration_head_tests_statuses: List[TestsStatus] = field(default_factory=list)

    @property
    def sync_status(self) -> Optional[str]:
        if self.is_out_of_date is None:
            return None
        return "out_of_date" if self.is_out_of_date else "up_to_date"

    def contribute(self, params: QueryParams) -> QueryParams:
        return params.extend([
            OptionalParam("criteria", self.criteria),
            OptionalParam("track_slug", self.track),
            OptionalParam("status", self.status),
            OptionalParam("mentoring_status", self.mentoring_status),
            OptionalParam("sync_status", self.sync_status),
            JoinedParam("tests_status", self.published_iteration_tests_statuses),
            JoinedParam("head_tests_status", self.published_iteration_head_tests_statuses),
        ])


@dataclass(frozen=True)
class Paging:
    page: int
    per_page: Optional[int] = None

    @classmethod
    def for_page(cls, page: int) -> "Paging":
        return cls(page)

    def and_per_page(self, per_page: int) -> "Paging":
        return replace(self, per_page=per_page)

    def contribute(self, params: QueryParams) -> QueryParams:
        return params.extend([
            OptionalParam("page", self.page),
            OptionalParam("per_page", self.per_page),
        ])
