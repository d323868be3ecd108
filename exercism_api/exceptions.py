"""Exception hierarchy for the Exercism API client."""

import logging
from typing import Any, Dict, Optional, Type

import httpx

logger = logging.getLogger(__name__)


class ExercismError(Exception):
    """Base exception for all errors raised by this library."""

    def __init__(
        self,
        message: str,
        original_exception: Optional[BaseException] = None,
        **context
    ):
        """
        Initialize error with context and logging.

        Args:
            message (str): Primary error message
            original_exception (Optional[BaseException]): Original exception
            **context: Additional error context
        """
        self.message = message
        self.original_exception = original_exception
        self.context = context

        log_message = f"{self.__class__.__name__}: {message}"
        if context:
            log_message += f" | Context: {context}"

        logger.debug(log_message)

        super().__init__(message)


# Construction errors

class BuildError(ExercismError):
    """Raised when a client builder cannot produce a client."""
    pass


class MissingFieldError(BuildError):
    """Raised when a required builder field was never set."""

    def __init__(self, field_name: str, **kwargs):
        self.field_name = field_name
        super().__init__(f"missing required field: {field_name}", **kwargs)


class HttpClientCreationError(BuildError):
    """Raised when the underlying HTTP client or transport cannot be created."""
    pass


# Transport errors

class NetworkError(ExercismError):
    """Raised for failures below the HTTP layer."""

    def __init__(self, message: str, retry_count: int = 0, **kwargs):
        self.retry_count = retry_count
        super().__init__(message, retry_count=retry_count, **kwargs)


class APIConnectionError(NetworkError):
    """Raised when the server cannot be reached."""
    pass


class APITimeoutError(NetworkError):
    """Raised when a request times out at the transport level."""

    def __init__(self, message: str, timeout_type: str = "unknown", **kwargs):
        self.timeout_type = timeout_type
        super().__init__(message, **kwargs)


# HTTP errors

class APIError(ExercismError):
    """Raised for any non-2xx response returned by an Exercism API."""

    default_status_code: Optional[int] = None
    default_message = "API request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        response: Any = None,
        request_url: Optional[str] = None,
        request_method: Optional[str] = None,
        retry_count: int = 0,
        **kwargs
    ):
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.response = response
        self.request_url = request_url
        self.request_method = request_method
        self.retry_count = retry_count
        super().__init__(
            message or self.default_message,
            status_code=self.status_code,
            request_url=request_url,
            request_method=request_method,
            **kwargs
        )

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"Status: {self.status_code}")
        if self.request_method and self.request_url:
            parts.append(f"Request: {self.request_method} {self.request_url}")
        if self.retry_count:
            parts.append(f"Retries: {self.retry_count}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary of the error."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "request_url": self.request_url,
            "request_method": self.request_method,
            "retry_count": self.retry_count,
            "response": self.response,
        }


class HTTPClientError(APIError):
    """4xx responses."""
    default_message = "Client error"


class BadRequestError(HTTPClientError):
    default_status_code = 400
    default_message = "Bad request"


class APIAuthenticationError(HTTPClientError):
    """The API token is missing, invalid or revoked."""
    default_status_code = 401
    default_message = "Authentication failed"


class ForbiddenError(HTTPClientError):
    default_status_code = 403
    default_message = "Forbidden"


class NotFoundError(HTTPClientError):
    default_status_code = 404
    default_message = "Resource not found"


class RequestTimeoutError(HTTPClientError):
    default_status_code = 408
    default_message = "Request timeout"


class APIValidationError(HTTPClientError):
    default_status_code = 422
    default_message = "Request validation failed"


class APIRateLimitError(HTTPClientError):
    """Too many requests; the server may say how long to back off."""

    default_status_code = 429
    default_message = "Rate limit exceeded"

    def __init__(self, message: Optional[str] = None, retry_after: Optional[float] = None, **kwargs):
        self.retry_after = retry_after
        super().__init__(message, retry_after=retry_after, **kwargs)

    def __str__(self) -> str:
        text = super().__str__()
        if self.retry_after is not None:
            text += f" | Retry after: {self.retry_after:g}s"
        return text


class HTTPServerError(APIError):
    """5xx responses."""
    default_message = "Server error"


class InternalServerError(HTTPServerError):
    default_status_code = 500
    default_message = "Internal server error"


class BadGatewayError(HTTPServerError):
    default_status_code = 502
    default_message = "Bad gateway"


class ServiceUnavailableError(HTTPServerError):
    default_status_code = 503
    default_message = "Service unavailable"


class GatewayTimeoutError(HTTPServerError):
    default_status_code = 504
    default_message = "Gateway timeout"


# Response processing errors

class DeserializationError(ExercismError):
    """Raised when a response body does not match the expected shape."""
    pass


# Exercism CLI configuration errors

class CliConfigError(ExercismError):
    """Base class for errors reading the Exercism CLI configuration."""
    pass


class ConfigNotFoundError(CliConfigError):
    def __init__(self, message: str = "Exercism CLI config file not found - perhaps CLI application is not installed or configured?", **kwargs):
        super().__init__(message, **kwargs)


class ConfigReadError(CliConfigError):
    pass


class ConfigParseError(CliConfigError):
    pass


class ApiTokenNotFoundInConfigError(CliConfigError):
    def __init__(self, message: str = "Exercism CLI config file did not contain an API token", **kwargs):
        super().__init__(message, **kwargs)


_STATUS_ERRORS: Dict[int, Type[APIError]] = {
    400: BadRequestError,
    401: APIAuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    408: RequestTimeoutError,
    422: APIValidationError,
    429: APIRateLimitError,
    500: InternalServerError,
    502: BadGatewayError,
    503: ServiceUnavailableError,
    504: GatewayTimeoutError,
}


def get_error_from_status_code(
    status_code: int,
    message: Optional[str] = None,
    **kwargs
) -> APIError:
    """
    Map an HTTP status code to the matching exception.

    Args:
        status_code (int): HTTP status code
        message (Optional[str]): Error message, class default if omitted
        **kwargs: Additional context

    Returns:
        APIError: Exception instance for the status code
    """
    exception_class = _STATUS_ERRORS.get(status_code)
    if exception_class is None:
        if 400 <= status_code < 500:
            exception_class = HTTPClientError
        elif 500 <= status_code < 600:
            exception_class = HTTPServerError
        else:
            exception_class = APIError
    if exception_class is not APIRateLimitError:
        kwargs.pop("retry_after", None)
    return exception_class(message, status_code=status_code, **kwargs)


def classify_network_error(exception: Exception, **context) -> NetworkError:
    """
    Classify an httpx transport exception.

    Args:
        exception (Exception): Original transport exception
        **context: Additional error context

    Returns:
        NetworkError: Timeout or connection error wrapping the original
    """
    if isinstance(exception, httpx.TimeoutException):
        timeout_type = "unknown"
        if isinstance(exception, httpx.ConnectTimeout):
            timeout_type = "connect"
        elif isinstance(exception, httpx.ReadTimeout):
            timeout_type = "read"
        elif isinstance(exception, httpx.WriteTimeout):
            timeout_type = "write"
        elif isinstance(exception, httpx.PoolTimeout):
            timeout_type = "pool"

        return APITimeoutError(
            f"Request timed out ({timeout_type}): {exception}",
            timeout_type=timeout_type,
            original_exception=exception,
            **context
        )

    return APIConnectionError(
        f"Network error: {exception}",
        original_exception=exception,
        **context
    )
