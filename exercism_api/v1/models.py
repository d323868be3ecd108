"""Response models for the v1 API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SolutionTrack(ApiModel):
    name: str = Field(alias="id")
    title: str = Field(alias="language")


class SolutionUser(ApiModel):
    handle: str
    is_requester: bool


class SolutionExercise(ApiModel):
    name: str = Field(alias="id")
    instructions_url: str
    track: SolutionTrack


class SolutionSubmission(ApiModel):
    submitted_at: str


class Solution(ApiModel):
    uuid: str = Field(alias="id")
    url: str
    user: SolutionUser
    exercise: SolutionExercise
    file_download_base_url: str
    files: List[str]
    submission: Optional[SolutionSubmission] = None


class SolutionResponse(ApiModel):
    solution: Solution


class TrackResponse(ApiModel):
    track: SolutionTrack


class ServiceStatus(ApiModel):
    website: bool
    database: bool


class PingResponse(ApiModel):
    status: ServiceStatus
