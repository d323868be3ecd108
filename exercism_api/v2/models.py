"""Response models for the v2 API.

Enumerations map unrecognised strings to an ``UNKNOWN`` member so new values
added by the website do not break deserialization.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ApiEnum(str, Enum):
    """String enumeration with an ``UNKNOWN`` fallback member."""

    @classmethod
    def _missing_(cls, value):
        return cls.__members__.get("UNKNOWN")

    def __str__(self) -> str:
        return self.value


# Enumerations

class TestsStatus(ApiEnum):
    NOT_QUEUED = "not_queued"
    QUEUED = "queued"
    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    EXCEPTIONED = "exceptioned"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class ExerciseType(ApiEnum):
    TUTORIAL = "tutorial"
    CONCEPT = "concept"
    PRACTICE = "practice"
    UNKNOWN = "unknown"


class ExerciseDifficulty(ApiEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    UNKNOWN = "unknown"


class SolutionStatus(ApiEnum):
    STARTED = "started"
    ITERATED = "iterated"
    COMPLETED = "completed"
    PUBLISHED = "published"
    UNKNOWN = "unknown"


class MentoringStatus(ApiEnum):
    NONE = "none"
    REQUESTED = "requested"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    UNKNOWN = "unknown"


class IterationStatus(ApiEnum):
    UNTESTED = "untested"
    TESTING = "testing"
    TESTS_FAILED = "tests_failed"
    ANALYZING = "analyzing"
    ESSENTIAL_AUTOMATED_FEEDBACK = "essential_automated_feedback"
    ACTIONABLE_AUTOMATED_FEEDBACK = "actionable_automated_feedback"
    CELEBRATORY_AUTOMATED_FEEDBACK = "celebratory_automated_feedback"
    NON_ACTIONABLE_AUTOMATED_FEEDBACK = "non_actionable_automated_feedback"
    NO_AUTOMATED_FEEDBACK = "no_automated_feedback"
    DELETED = "deleted"
    UNKNOWN = "unknown"


class AnalyzerCommentType(ApiEnum):
    ESSENTIAL = "essential"
    ACTIONABLE = "actionable"
    INFORMATIVE = "informative"
    CELEBRATORY = "celebratory"
    UNKNOWN = "unknown"


class Flair(ApiEnum):
    FOUNDER = "founder"
    STAFF = "staff"
    INSIDER = "insider"
    LIFETIME_INSIDER = "lifetime_insider"
    UNKNOWN = "unknown"


# Tracks

class TrackLinks(ApiModel):
    self_url: str = Field(alias="self")
    exercises: str
    concepts: str


class Track(ApiModel):
    name: str = Field(alias="slug")
    title: str
    num_concepts: int
    num_exercises: int
    web_url: str
    icon_url: str
    tags: List[str]
    links: TrackLinks
    is_joined: bool = False
    num_learnt_concepts: int = 0
    num_completed_exercises: int = 0


class TracksResponse(ApiModel):
    tracks: List[Track]


class TrackResponse(ApiModel):
    track: Track


# Exercises

class ExerciseLinks(ApiModel):
    self_path: str = Field(alias="self")


class Exercise(ApiModel):
    name: str = Field(alias="slug")
    exercise_type: ExerciseType = Field(alias="type")
    title: str
    icon_url: str
    difficulty: ExerciseDifficulty
    blurb: str
    is_external: bool
    is_unlocked: bool
    is_recommended: bool
    links: ExerciseLinks


# Solutions

class SolutionExercise(ApiModel):
    name: str = Field(alias="slug")
    title: str
    icon_url: str


class SolutionTrack(ApiModel):
    name: str = Field(alias="slug")
    title: str
    icon_url: str


class Solution(ApiModel):
    uuid: str
    private_url: str
    public_url: str
    status: SolutionStatus
    mentoring_status: MentoringStatus
    published_iteration_head_tests_status: TestsStatus
    has_notifications: bool
    num_views: int
    num_stars: int
    num_comments: int
    num_iterations: int
    num_loc: Optional[int] = None
    is_out_of_date: bool
    published_at: Optional[str] = None
    completed_at: Optional[str] = None
    updated_at: str
    last_iterated_at: Optional[str] = None
    exercise: SolutionExercise
    track: SolutionTrack


class ExercisesResponse(ApiModel):
    exercises: List[Exercise]
    solutions: List[Solution] = Field(default_factory=list)


class SolutionsResponseMeta(ApiModel):
    current_page: int
    total_count: int
    total_pages: int


class SolutionsResponse(ApiModel):
    results: List[Solution]
    meta: SolutionsResponseMeta


# Submissions and iterations

class SubmissionFile(ApiModel):
    filename: str
    content: str
    digest: str


class SubmissionFilesResponse(ApiModel):
    files: List[SubmissionFile]


class FeedbackAuthor(ApiModel):
    name: str
    reputation: int
    flair: Optional[Flair] = None
    avatar_url: str
    profile_url: Optional[str] = None


class RepresenterFeedback(ApiModel):
    html: str
    author: FeedbackAuthor
    editor: Optional[FeedbackAuthor] = None


class AnalyzerComment(ApiModel):
    comment_type: AnalyzerCommentType = Field(default=AnalyzerCommentType.INFORMATIVE, alias="type")
    html: str


class AnalyzerFeedback(ApiModel):
    summary: Optional[str] = None
    comments: List[AnalyzerComment] = Field(default_factory=list)


class IterationLinks(ApiModel):
    self_path: str = Field(alias="self")
    automated_feedback: Optional[str] = None
    delete: Optional[str] = None
    solution: str
    test_run: Optional[str] = None
    files: Optional[str] = None


NOT_QUEUED = "not_queued"


class Iteration(ApiModel):
    uuid: str
    submission_uuid: Optional[str] = None
    index: int = Field(alias="idx")
    status: IterationStatus
    num_essential_automated_comments: int
    num_actionable_automated_comments: int
    num_non_actionable_automated_comments: int
    num_celebratory_automated_comments: int
    submission_method: str
    created_at: str
    tests_status: TestsStatus
    representer_feedback: Optional[RepresenterFeedback] = None
    analyzer_feedback: Optional[AnalyzerFeedback] = None
    is_published: bool
    is_latest: bool = False
    files: List[SubmissionFile] = Field(default_factory=list)
    links: IterationLinks

    @field_validator("representer_feedback", "analyzer_feedback", mode="before")
    @classmethod
    def not_queued_means_no_feedback(cls, value, info: ValidationInfo):
        if not isinstance(value, str):
            return value
        if value == NOT_QUEUED:
            return None
        feedback_type = "RepresenterFeedback" if info.field_name == "representer_feedback" else "AnalyzerFeedback"
        raise ValueError(
            f"invalid value {value!r}: expected an optional feedback struct "
            f"(of type {feedback_type}) or the string '{NOT_QUEUED}'"
        )


class SolutionResponse(ApiModel):
    solution: Solution
    iterations: List[Iteration] = Field(default_factory=list)
