"""Async client for the Exercism APIs with retry and backoff."""

from . import v1, v2, website
from .api import BaseClient, ClientBuilder
from .cli import get_cli_config_dir, get_cli_credentials, parse_cli_config
from .client import ApiClient, ApiClientBuilder, Credentials, RequestBuilder
from .config import (
    DEFAULT_V1_API_BASE_URL,
    DEFAULT_V2_API_BASE_URL,
    DEFAULT_WEBSITE_API_BASE_URL,
    Settings,
    get_settings,
)
from .query import (
    ConditionalParam,
    JoinedParam,
    OptionalParam,
    QueryContributor,
    QueryParams,
    RepeatedParam,
    encode_query,
)
from .retry import (
    DEFAULT_RETRY,
    NO_RETRY,
    AsyncRetryTransport,
    RetryConfig,
    parse_retry_after,
)
from .exceptions import (
    # Base exception
    ExercismError,

    # Construction errors
    BuildError,
    MissingFieldError,
    HttpClientCreationError,

    # Network errors
    NetworkError,
    APIConnectionError,
    APITimeoutError,

    # HTTP errors
    APIError,
    HTTPClientError,
    BadRequestError,
    APIAuthenticationError,
    ForbiddenError,
    NotFoundError,
    RequestTimeoutError,
    APIValidationError,
    APIRateLimitError,
    HTTPServerError,
    InternalServerError,
    BadGatewayError,
    ServiceUnavailableError,
    GatewayTimeoutError,

    # Response processing errors
    DeserializationError,

    # Exercism CLI config errors
    CliConfigError,
    ConfigNotFoundError,
    ConfigReadError,
    ConfigParseError,
    ApiTokenNotFoundInConfigError,

    # Utility functions
    get_error_from_status_code,
    classify_network_error,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "ApiClient",
    "ApiClientBuilder",
    "BaseClient",
    "ClientBuilder",
    "Credentials",
    "RequestBuilder",
    "v1",
    "v2",
    "website",

    # Configuration
    "DEFAULT_V1_API_BASE_URL",
    "DEFAULT_V2_API_BASE_URL",
    "DEFAULT_WEBSITE_API_BASE_URL",
    "Settings",
    "get_settings",

    # Exercism CLI
    "get_cli_config_dir",
    "get_cli_credentials",
    "parse_cli_config",

    # Query encoding
    "ConditionalParam",
    "JoinedParam",
    "OptionalParam",
    "QueryContributor",
    "QueryParams",
    "RepeatedParam",
    "encode_query",

    # Retry
    "AsyncRetryTransport",
    "RetryConfig",
    "DEFAULT_RETRY",
    "NO_RETRY",
    "parse_retry_after",

    # Exceptions
    "ExercismError",
    "BuildError",
    "MissingFieldError",
    "HttpClientCreationError",
    "NetworkError",
    "APIConnectionError",
    "APITimeoutError",
    "APIError",
    "HTTPClientError",
    "BadRequestError",
    "APIAuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "RequestTimeoutError",
    "APIValidationError",
    "APIRateLimitError",
    "HTTPServerError",
    "InternalServerError",
    "BadGatewayError",
    "ServiceUnavailableError",
    "GatewayTimeoutError",
    "DeserializationError",
    "CliConfigError",
    "ConfigNotFoundError",
    "ConfigReadError",
    "ConfigParseError",
    "ApiTokenNotFoundInConfigError",
    "get_error_from_status_code",
    "classify_network_error",
]
