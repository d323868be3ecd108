"""Client for the v2 Exercism API."""

from typing import Optional

from ..api import BaseClient
from ..config import DEFAULT_V2_API_BASE_URL
from ..query import ConditionalParam
from .filters import ExerciseFilters, Paging, SolutionFilters, SortOrder, TrackFilters
from .models import (
    ExercisesResponse,
    SolutionResponse,
    SolutionsResponse,
    SubmissionFilesResponse,
    TrackResponse,
    TracksResponse,
)


class Client(BaseClient):
    """
    Client for the v2 API (``https://exercism.org/api/v2``).

    Track and exercise listings work anonymously; with credentials they also
    carry the user's progress. Solution endpoints require credentials.
    """

    DEFAULT_API_BASE_URL = DEFAULT_V2_API_BASE_URL

    async def get_tracks(self, filters: Optional[TrackFilters] = None) -> TracksResponse:
        return await self.api_client.get("/tracks").query(filters).execute(TracksResponse)

    async def get_track(self, track: str) -> TrackResponse:
        return await self.api_client.get(f"/tracks/{track}").execute(TrackResponse)

    async def get_exercises(self, track: str, filters: Optional[ExerciseFilters] = None) -> ExercisesResponse:
        """Exercises of a track, with the user's solutions if ``include_solutions`` is set."""
        return await (
            self.api_client.get(f"/tracks/{track}/exercises")
            .query(filters)
            .execute(ExercisesResponse)
        )

    async def get_solutions(
        self,
        filters: Optional[SolutionFilters] = None,
        paging: Optional[Paging] = None,
        sort_order: Optional[SortOrder] = None,
    ) -> SolutionsResponse:
        """Search the authenticated user's solutions. Results are paginated."""
        return await (
            self.api_client.get("/solutions")
            .query(filters)
            .query(paging)
            .query(sort_order)
            .execute(SolutionsResponse)
        )

    async def get_solution(self, uuid: str, include_iterations: bool = False) -> SolutionResponse:
        return await (
            self.api_client.get(f"/solutions/{uuid}")
            .query(ConditionalParam(include_iterations, "sideload", "iterations"))
            .execute(SolutionResponse)
        )

    async def get_submission_files(self, solution_uuid: str, submission_uuid: str) -> SubmissionFilesResponse:
        return await (
            self.api_client.get(f"/solutions/{solution_uuid}/submissions/{submission_uuid}/files")
            .execute(SubmissionFilesResponse)
        )
