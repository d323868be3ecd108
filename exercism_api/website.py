"""Client for the API backing the Exercism website."""

from typing import Optional

from .api import BaseClient
from .config import DEFAULT_WEBSITE_API_BASE_URL
from .v2.filters import ExerciseFilters, TrackFilters
from .v2.models import ExercisesResponse, TracksResponse


class Client(BaseClient):
    """Track and exercise listings, with the same wire format as the v2 API."""

    DEFAULT_API_BASE_URL = DEFAULT_WEBSITE_API_BASE_URL

    async def get_tracks(self, filters: Optional[TrackFilters] = None) -> TracksResponse:
        return await self.api_client.get("/tracks").query(filters).execute(TracksResponse)

    async def get_exercises(self, track: str, filters: Optional[ExerciseFilters] = None) -> ExercisesResponse:
        return await (
            self.api_client.get(f"/tracks/{track}/exercises")
            .query(filters)
            .execute(ExercisesResponse)
        )
