"""Authenticated request building on top of a retrying httpx client."""

import logging
import re
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, AsyncIterator, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from .exceptions import (
    BuildError,
    DeserializationError,
    ExercismError,
    HttpClientCreationError,
    MissingFieldError,
    classify_network_error,
    get_error_from_status_code,
)
from .query import QueryContributor, QueryParams
from .retry import DEFAULT_RETRY, RETRY_COUNT_EXTENSION, AsyncRetryTransport, RetryConfig, parse_retry_after

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Credentials:
    """Bearer credentials used to access the Exercism APIs."""

    api_token: str = field(repr=False)

    @classmethod
    def from_api_token(cls, api_token: str) -> "Credentials":
        return cls(api_token)

    def __repr__(self) -> str:
        return "Credentials(api_token=***)"


class RequestBuilder:
    """A single request under construction. Consumed by send/execute/stream."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self._http_client = http_client
        self.method = method.upper()
        self.url = url
        self.headers: Dict[str, str] = dict(headers or {})
        self.params = QueryParams()

    def query(self, contributor: Optional[QueryContributor]) -> "RequestBuilder":
        """Apply a query contributor; None is a no-op."""
        self.params = self.params.apply(contributor)
        return self

    def header(self, name: str, value: str) -> "RequestBuilder":
        self.headers[name] = value
        return self

    def build_request(self) -> httpx.Request:
        return self._http_client.build_request(
            self.method,
            self.url,
            params=self.params.items(),
            headers=self.headers,
        )

    def _context(self) -> Dict[str, Any]:
        return {"request_url": self.url, "request_method": self.method}

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return

        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        message = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                message = error.get("message")
            elif isinstance(error, str):
                message = error
            message = message or body.get("message")

        raise get_error_from_status_code(
            response.status_code,
            message,
            response=body,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
            retry_count=response.extensions.get(RETRY_COUNT_EXTENSION, 0),
            **self._context()
        )

    def _request_error(self, exc: httpx.RequestError) -> ExercismError:
        if isinstance(exc, httpx.DecodingError):
            # Body bytes don't match the declared Content-Encoding
            return DeserializationError(
                f"Failed to decode response body: {exc}",
                original_exception=exc,
                **self._context()
            )
        return classify_network_error(
            exc,
            retry_count=getattr(exc, "retry_count", 0),
            **self._context()
        )

    async def send(self) -> httpx.Response:
        """Send the request; return the response if its status is 2xx."""
        request = self.build_request()
        logger.debug("Sending %s %s", request.method, request.url)
        try:
            response = await self._http_client.send(request)
        except httpx.RequestError as exc:
            raise self._request_error(exc) from exc

        self._raise_for_status(response)
        return response

    async def execute(self, response_type: Type[T]) -> T:
        """Send the request and deserialize its JSON body into ``response_type``."""
        response = await self.send()
        try:
            return TypeAdapter(response_type).validate_json(response.content)
        except ValidationError as exc:
            raise DeserializationError(
                f"Failed to deserialize response as {getattr(response_type, '__name__', response_type)}: {exc}",
                original_exception=exc,
                status_code=response.status_code,
                **self._context()
            ) from exc

    @asynccontextmanager
    async def stream(self) -> AsyncIterator[httpx.Response]:
        """
        Send the request and yield the 2xx response without reading its body.

        httpx errors raised while the body is read inside the block are
        mapped like those of :meth:`send`.
        """
        request = self.build_request()
        logger.debug("Streaming %s %s", request.method, request.url)
        try:
            response = await self._http_client.send(request, stream=True)
        except httpx.RequestError as exc:
            raise self._request_error(exc) from exc

        try:
            if not response.is_success:
                await response.aread()
                self._raise_for_status(response)
            yield response
        except httpx.RequestError as exc:
            raise self._request_error(exc) from exc
        finally:
            await response.aclose()


class ApiClient:
    """Client used to query one Exercism API.

    Holds the shared HTTP client, the API base URL and optional credentials.
    Credentials, when present, are attached to every request.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_base_url: str,
        credentials: Optional[Credentials] = None,
    ):
        self._http_client = http_client
        self._api_base_url = api_base_url.rstrip("/")
        self._credentials = credentials
        logger.debug(
            "Created API client for %s (authenticated: %s)",
            self._api_base_url,
            credentials is not None,
        )

    @classmethod
    def builder(cls) -> "ApiClientBuilder":
        return ApiClientBuilder()

    @property
    def api_base_url(self) -> str:
        return self._api_base_url

    @property
    def credentials(self) -> Optional[Credentials]:
        return self._credentials

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    def api_url(self, path: str) -> str:
        """Join the base URL and a path with exactly one separator."""
        path = path.lstrip("/")
        if not path:
            return self._api_base_url
        return f"{self._api_base_url}/{path}"

    def request(self, method: str, path: str) -> RequestBuilder:
        headers = {}
        if self._credentials is not None:
            headers["Authorization"] = f"Bearer {self._credentials.api_token}"
        return RequestBuilder(self._http_client, method, self.api_url(path), headers)

    def get(self, path: str) -> RequestBuilder:
        return self.request("GET", path)

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


class ApiClientBuilder:
    """Accumulates configuration for an :class:`ApiClient`.

    The first configuration error is latched: later calls are ignored and
    :meth:`build` raises it.
    """

    def __init__(self):
        self._transport: Optional[httpx.AsyncBaseTransport] = None
        self._retry_config: Optional[RetryConfig] = None
        self._api_base_url: Optional[str] = None
        self._credentials: Optional[Credentials] = None
        self._headers = httpx.Headers()
        self._timeout: Optional[httpx.Timeout] = None
        self._error: Optional[BuildError] = None

    @property
    def error(self) -> Optional[BuildError]:
        return self._error

    def _latch(self, error: BuildError) -> "ApiClientBuilder":
        logger.debug("Client builder error latched: %s", error)
        self._error = error
        return self

    def transport(self, transport: httpx.AsyncBaseTransport) -> "ApiClientBuilder":
        """Transport the retry layer wraps. Defaults to httpx.AsyncHTTPTransport."""
        if self._error is None:
            self._transport = transport
        return self

    def retry_config(self, retry_config: RetryConfig) -> "ApiClientBuilder":
        if self._error is None:
            self._retry_config = retry_config
        return self

    def api_base_url(self, api_base_url: str) -> "ApiClientBuilder":
        if self._error is not None:
            return self
        try:
            url = httpx.URL(api_base_url)
        except (httpx.InvalidURL, TypeError) as exc:
            return self._latch(BuildError(f"invalid API base URL: {api_base_url!r}", original_exception=exc))
        if url.scheme not in ("http", "https") or not url.host:
            return self._latch(BuildError(f"invalid API base URL: {api_base_url!r}"))
        self._api_base_url = api_base_url.rstrip("/")
        return self

    def credentials(self, credentials: Optional[Credentials]) -> "ApiClientBuilder":
        if self._error is None:
            self._credentials = credentials
        return self

    def default_headers(self, headers: Mapping[str, str]) -> "ApiClientBuilder":
        if self._error is not None:
            return self
        try:
            validated = _validate_headers(httpx.Headers(headers))
            self._headers.update(validated)
        except (TypeError, ValueError, UnicodeEncodeError) as exc:
            return self._latch(HttpClientCreationError(
                f"http client creation failed: invalid default headers: {exc}",
                original_exception=exc,
            ))
        return self

    def user_agent(self, user_agent: str) -> "ApiClientBuilder":
        return self.default_headers({"User-Agent": user_agent})

    def timeout(self, timeout: Union[float, httpx.Timeout, None]) -> "ApiClientBuilder":
        if self._error is not None:
            return self
        try:
            self._timeout = _validate_timeout(timeout)
        except (TypeError, ValueError) as exc:
            return self._latch(HttpClientCreationError(
                f"http client creation failed: invalid timeout: {exc}",
                original_exception=exc,
            ))
        return self

    def settings(self, settings: "Settings") -> "ApiClientBuilder":
        """Apply retry, timeout, user agent and credentials from settings."""
        if self._error is not None:
            return self
        try:
            retry_config = settings.retry_config()
        except ValueError as exc:
            return self._latch(BuildError(f"invalid retry settings: {exc}", original_exception=exc))
        builder = self.retry_config(retry_config).timeout(settings.timeout).user_agent(settings.user_agent)
        credentials = settings.credentials()
        if credentials is not None:
            builder = builder.credentials(credentials)
        return builder

    def build(self) -> ApiClient:
        if self._error is not None:
            raise self._error
        if self._api_base_url is None:
            raise MissingFieldError("api_base_url")

        try:
            transport = self._transport or httpx.AsyncHTTPTransport()
            http_client = httpx.AsyncClient(
                transport=AsyncRetryTransport(transport, self._retry_config or DEFAULT_RETRY),
                headers=self._headers,
                timeout=self._timeout if self._timeout is not None else httpx.Timeout(30.0),
            )
        except (TypeError, ValueError, OSError, ImportError) as exc:
            raise HttpClientCreationError(f"http client creation failed: {exc}", original_exception=exc) from exc

        return ApiClient(http_client, self._api_base_url, self._credentials)


# RFC 7230 token characters for header names
_HEADER_NAME = re.compile(rb"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# Visible characters, spaces and tabs; no control characters
_HEADER_VALUE = re.compile(rb"[\t\x20-\x7e\x80-\xff]*")


def _validate_headers(headers: httpx.Headers) -> httpx.Headers:
    for name, value in headers.raw:
        if not _HEADER_NAME.fullmatch(name):
            raise ValueError(f"invalid header name {name!r}")
        if not _HEADER_VALUE.fullmatch(value):
            raise ValueError(f"invalid value for header {name.decode('latin-1')!r}")
    return headers


def _validate_timeout(timeout: Union[float, httpx.Timeout, None]) -> httpx.Timeout:
    if isinstance(timeout, httpx.Timeout):
        return timeout
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
        raise TypeError(f"timeout must be a number of seconds, an httpx.Timeout or None, not {timeout!r}")
    if timeout is not None and timeout < 0:
        raise ValueError("timeout must not be negative")
    return httpx.Timeout(timeout)
