"""The v1 Exercism API."""

from .client import Client
from .models import (
    PingResponse,
    ServiceStatus,
    Solution,
    SolutionExercise,
    SolutionResponse,
    SolutionSubmission,
    SolutionTrack,
    SolutionUser,
    TrackResponse,
)

__all__ = [
    "Client",
    "PingResponse",
    "ServiceStatus",
    "Solution",
    "SolutionExercise",
    "SolutionResponse",
    "SolutionSubmission",
    "SolutionTrack",
    "SolutionUser",
    "TrackResponse",
]
