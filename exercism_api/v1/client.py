"""Client for the v1 Exercism API."""

from typing import AsyncIterator

from ..api import BaseClient
from ..config import DEFAULT_V1_API_BASE_URL
from ..exceptions import APIAuthenticationError
from ..query import OptionalParam
from .models import PingResponse, SolutionResponse, TrackResponse


class Client(BaseClient):
    """
    Client for the v1 API (``https://api.exercism.io/v1``).

    Most endpoints need credentials. ``ping`` does not.
    """

    DEFAULT_API_BASE_URL = DEFAULT_V1_API_BASE_URL

    async def get_solution(self, uuid: str) -> SolutionResponse:
        return await self.api_client.get(f"/solutions/{uuid}").execute(SolutionResponse)

    async def get_latest_solution(self, track: str, exercise: str) -> SolutionResponse:
        """Latest solution submitted by the authenticated user for an exercise."""
        return await (
            self.api_client.get("/solutions/latest")
            .query(OptionalParam("track_id", track))
            .query(OptionalParam("exercise_id", exercise))
            .execute(SolutionResponse)
        )

    async def get_file(self, solution_uuid: str, file_path: str) -> AsyncIterator[bytes]:
        """
        Stream the content of one file of a solution.

        Request errors surface on the first iteration.
        """
        request = self.api_client.get(f"/solutions/{solution_uuid}/files/{file_path}")
        async with request.stream() as response:
            async for chunk in response.aiter_bytes():
                yield chunk

    async def get_track(self, track: str) -> TrackResponse:
        return await self.api_client.get(f"/tracks/{track}").execute(TrackResponse)

    async def validate_token(self) -> bool:
        """True if the credentials are valid, False if the API answers 401."""
        try:
            await self.api_client.get("/validate_token").send()
        except APIAuthenticationError:
            return False
        return True

    async def ping(self) -> PingResponse:
        return await self.api_client.get("/ping").execute(PingResponse)
