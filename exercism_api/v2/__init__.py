"""The v2 Exercism API."""

from .client import Client
from .filters import ExerciseFilters, Paging, SolutionFilters, SortOrder, TrackFilters, TrackStatusFilter
from .models import (
    AnalyzerComment,
    AnalyzerCommentType,
    AnalyzerFeedback,
    Exercise,
    ExerciseDifficulty,
    ExercisesResponse,
    ExerciseType,
    FeedbackAuthor,
    Flair,
    Iteration,
    IterationStatus,
    MentoringStatus,
    RepresenterFeedback,
    Solution,
    SolutionResponse,
    SolutionsResponse,
    SolutionsResponseMeta,
    SolutionStatus,
    SubmissionFile,
    SubmissionFilesResponse,
    TestsStatus,
    Track,
    TrackResponse,
    TracksResponse,
)

__all__ = [
    "AnalyzerComment",
    "AnalyzerCommentType",
    "AnalyzerFeedback",
    "Client",
    "Exercise",
    "ExerciseDifficulty",
    "ExerciseFilters",
    "ExercisesResponse",
    "ExerciseType",
    "FeedbackAuthor",
    "Flair",
    "Iteration",
    "IterationStatus",
    "MentoringStatus",
    "Paging",
    "RepresenterFeedback",
    "Solution",
    "SolutionFilters",
    "SolutionResponse",
    "SolutionsResponse",
    "SolutionsResponseMeta",
    "SolutionStatus",
    "SortOrder",
    "SubmissionFile",
    "SubmissionFilesResponse",
    "TestsStatus",
    "Track",
    "TrackFilters",
    "TrackResponse",
    "TracksResponse",
    "TrackStatusFilter",
]
