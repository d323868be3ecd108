"""Scripted HTTP transports and client factories used across the tests."""

import json
from typing import Callable, List, Optional, Sequence, Union

import httpx

from exercism_api.client import ApiClient, Credentials
from exercism_api.retry import RetryConfig

# Retries without waiting
INSTANT_RETRY = RetryConfig(min_delay=0, max_delay=0, jitter=False)


class ScriptedTransport(httpx.MockTransport):
    """MockTransport that records requests and replays a list of responses.

    The last scripted response repeats once the script runs out.
    """

    def __init__(self, responses: Sequence[Union[httpx.Response, Exception, Callable]]):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.responses[min(len(self.requests), len(self.responses)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(request)
        # Responses are single use, replay a copy
        return httpx.Response(outcome.status_code, headers=outcome.headers, content=outcome.content)


def json_response(payload, status_code: int = 200, headers: Optional[dict] = None) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


def make_api_client(
    transport: httpx.AsyncBaseTransport,
    api_base_url: str = "https://x.test/api",
    credentials: Optional[Credentials] = None,
    retry_config: RetryConfig = INSTANT_RETRY,
) -> ApiClient:
    builder = (
        ApiClient.builder()
        .transport(transport)
        .retry_config(retry_config)
        .api_base_url(api_base_url)
    )
    if credentials is not None:
        builder.credentials(credentials)
    return builder.build()


# Sample v2 payloads

ITERATION = {
    "uuid": "98f8b04515a8484ea2fb4f5c7a3e2c0b",
    "submission_uuid": "a5c1ec0ef0a74f6e9c5bc45e9b4e9f1b",
    "idx": 1,
    "status": "no_automated_feedback",
    "num_essential_automated_comments": 0,
    "num_actionable_automated_comments": 0,
    "num_non_actionable_automated_comments": 0,
    "num_celebratory_automated_comments": 0,
    "submission_method": "cli",
    "created_at": "2023-05-08T00:02:21Z",
    "tests_status": "passed",
    "is_published": True,
    "is_latest": True,
    "links": {
        "self": "https://exercism.org/tracks/rust/exercises/poker/iterations?idx=1",
        "solution": "https://exercism.org/tracks/rust/exercises/poker",
    },
}

SOLUTION = {
    "uuid": "00c717b68e1b4213b316df82636f5e0f",
    "private_url": "https://exercism.org/tracks/rust/exercises/poker",
    "public_url": "https://exercism.org/tracks/rust/exercises/poker/solutions/clechasseur",
    "status": "published",
    "mentoring_status": "finished",
    "published_iteration_head_tests_status": "passed",
    "has_notifications": False,
    "num_views": 0,
    "num_stars": 0,
    "num_comments": 0,
    "num_iterations": 13,
    "num_loc": 252,
    "is_out_of_date": False,
    "published_at": "2023-05-08T00:02:21Z",
    "completed_at": "2023-05-08T00:02:21Z",
    "updated_at": "2023-08-27T07:06:01Z",
    "last_iterated_at": "2023-05-07T05:35:43Z",
    "exercise": {"slug": "poker", "title": "Poker", "icon_url": "https://assets.exercism.org/exercises/poker.svg"},
    "track": {"slug": "rust", "title": "Rust", "icon_url": "https://assets.exercism.org/tracks/rust.svg"},
}
