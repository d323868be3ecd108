"""Tests for the exception hierarchy and error classification."""

import httpx
import pytest

from exercism_api import (
    APIAuthenticationError,
    APIConnectionError,
    APIError,
    APIRateLimitError,
    APITimeoutError,
    APIValidationError,
    BadGatewayError,
    BadRequestError,
    BuildError,
    ExercismError,
    ForbiddenError,
    GatewayTimeoutError,
    HTTPClientError,
    HTTPServerError,
    InternalServerError,
    MissingFieldError,
    NetworkError,
    NotFoundError,
    RequestTimeoutError,
    ServiceUnavailableError,
    classify_network_error,
    get_error_from_status_code,
)


class TestExceptionHierarchy:
    """Test the exception class hierarchy and basic functionality."""

    def test_base_api_error(self):
        error = APIError(
            "Test error",
            status_code=500,
            response={"error": "test"},
            request_url="https://exercism.org/api/v2/tracks",
            request_method="GET",
            retry_count=2
        )

        assert str(error) == "Test error | Status: 500 | Request: GET https://exercism.org/api/v2/tracks | Retries: 2"
        assert error.status_code == 500
        assert error.response == {"error": "test"}
        assert error.retry_count == 2

        error_dict = error.to_dict()
        assert error_dict["error_type"] == "APIError"
        assert error_dict["message"] == "Test error"
        assert error_dict["status_code"] == 500
        assert error_dict["retry_count"] == 2

    def test_specific_error_classes(self):
        assert BadRequestError().status_code == 400
        assert APIAuthenticationError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError().status_code == 404
        assert RequestTimeoutError().status_code == 408
        assert APIValidationError().status_code == 422
        assert APIRateLimitError().status_code == 429
        assert InternalServerError().status_code == 500
        assert BadGatewayError().status_code == 502
        assert ServiceUnavailableError().status_code == 503
        assert GatewayTimeoutError().status_code == 504

    def test_rate_limit_error_with_retry_after(self):
        error = APIRateLimitError(retry_after=30)
        assert error.retry_after == 30
        assert str(error) == "Rate limit exceeded | Status: 429 | Retry after: 30s"
        assert error.context["retry_after"] == 30

    def test_all_errors_share_a_base(self):
        for error in (MissingFieldError("api_base_url"), APIConnectionError("down"), NotFoundError()):
            assert isinstance(error, ExercismError)
        assert isinstance(MissingFieldError("x"), BuildError)
        assert isinstance(APITimeoutError("slow"), NetworkError)


class TestStatusCodeMapping:
    @pytest.mark.parametrize("status_code, expected_class", [
        (400, BadRequestError),
        (401, APIAuthenticationError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (408, RequestTimeoutError),
        (422, APIValidationError),
        (429, APIRateLimitError),
        (500, InternalServerError),
        (502, BadGatewayError),
        (503, ServiceUnavailableError),
        (504, GatewayTimeoutError),
    ])
    def test_known_status_codes(self, status_code, expected_class):
        error = get_error_from_status_code(status_code)
        assert type(error) is expected_class
        assert error.status_code == status_code

    def test_unknown_status_codes(self):
        assert type(get_error_from_status_code(418)) is HTTPClientError
        assert type(get_error_from_status_code(599)) is HTTPServerError
        assert type(get_error_from_status_code(302)) is APIError
        assert get_error_from_status_code(418).status_code == 418

    def test_retry_after_only_for_rate_limit(self):
        assert get_error_from_status_code(429, retry_after=5.0).retry_after == 5.0
        error = get_error_from_status_code(503, retry_after=5.0)
        assert "retry_after" not in error.context

    def test_custom_message(self):
        error = get_error_from_status_code(404, "Solution not found", request_url="https://x.test/s", request_method="GET")
        assert error.message == "Solution not found"
        assert error.request_url == "https://x.test/s"


class TestNetworkErrorClassification:
    @pytest.mark.parametrize("exception, timeout_type", [
        (httpx.ConnectTimeout("t"), "connect"),
        (httpx.ReadTimeout("t"), "read"),
        (httpx.WriteTimeout("t"), "write"),
        (httpx.PoolTimeout("t"), "pool"),
    ])
    def test_timeouts(self, exception, timeout_type):
        error = classify_network_error(exception)
        assert isinstance(error, APITimeoutError)
        assert error.timeout_type == timeout_type
        assert error.original_exception is exception

    def test_connection_error(self):
        exception = httpx.ConnectError("Name or service not known")
        error = classify_network_error(exception, request_url="https://x.test", retry_count=3)
        assert isinstance(error, APIConnectionError)
        assert error.retry_count == 3
        assert error.context["request_url"] == "https://x.test"
