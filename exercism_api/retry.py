"""Retry policy with exponential backoff and a retrying httpx transport."""

import asyncio
import logging
import math
import random
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Awaitable, Callable, FrozenSet, Optional, Union

import httpx

logger = logging.getLogger(__name__)

RETRY_COUNT_EXTENSION = "retry_count"

# Plain decimal seconds; no exponents, underscores, inf or nan
_DELTA_SECONDS = re.compile(r"-?\d+(?:\.\d+)?")

# Outcome of a single attempt: either a response or the transport exception it raised.
Outcome = Union[httpx.Response, Exception]

RETRYABLE_EXCEPTIONS = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior with exponential backoff."""

    # Number of retries after the initial attempt
    max_retries: int = 5

    # Delay bounds (in seconds)
    min_delay: float = 1.0
    max_delay: float = 60.0
    backoff_factor: float = 2.0

    # Jitter settings (to avoid thundering herd)
    jitter: bool = True
    jitter_factor: float = 0.1  # +/- 10% randomness

    retry_on_status_codes: FrozenSet[int] = field(default_factory=lambda: frozenset({
        408,  # Request Timeout
        429,  # Too Many Requests
    }))

    # Any 5xx is retried when set
    retry_on_server_errors: bool = True

    respect_retry_after_header: bool = True

    # Callbacks for monitoring
    on_retry: Optional[Callable[[int, Outcome, float], None]] = field(default=None, compare=False)
    on_give_up: Optional[Callable[[Outcome], None]] = field(default=None, compare=False)

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.min_delay < 0:
            raise ValueError("min_delay must not be negative")
        if self.max_delay < self.min_delay:
            raise ValueError("max_delay must be greater than or equal to min_delay")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")
        if not 0 <= self.jitter_factor <= 1:
            raise ValueError("jitter_factor must be between 0 and 1")

    def is_retryable_status(self, status_code: int) -> bool:
        """Check if a response status warrants a retry."""
        if status_code in self.retry_on_status_codes:
            return True
        return self.retry_on_server_errors and 500 <= status_code < 600

    def should_retry(self, n_past_retries: int) -> bool:
        """Check if the retry budget allows another attempt."""
        return n_past_retries < self.max_retries

    def calculate_delay(self, n_past_retries: int) -> float:
        """Calculate the delay before the next retry attempt."""
        # Exponential backoff: min_delay * (backoff_factor ^ n_past_retries)
        try:
            base_delay = self.min_delay * (self.backoff_factor ** n_past_retries)
        except OverflowError:
            base_delay = self.max_delay

        if self.jitter and base_delay > 0:
            jitter_range = base_delay * self.jitter_factor
            base_delay += random.uniform(-jitter_range, jitter_range)

        return min(max(base_delay, self.min_delay), self.max_delay)


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """
    Parse a Retry-After header value into seconds.

    Accepts delta-seconds or an HTTP-date. Returns None when the value
    cannot be understood.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None

    if _DELTA_SECONDS.fullmatch(value):
        seconds = float(value)
        # Overlong digit strings overflow to inf
        return max(0.0, seconds) if math.isfinite(seconds) else None

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at is None:
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0.0, (retry_at - now).total_seconds())


class AsyncRetryTransport(httpx.AsyncBaseTransport):
    """Transport wrapper that re-issues requests according to a RetryConfig."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport,
        config: Optional[RetryConfig] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self._transport = transport
        self.config = config or DEFAULT_RETRY
        self._sleep = sleep or asyncio.sleep

    @property
    def transport(self) -> httpx.AsyncBaseTransport:
        return self._transport

    def _retry_after(self, response: httpx.Response) -> Optional[float]:
        if not self.config.respect_retry_after_header:
            return None
        return parse_retry_after(response.headers.get("Retry-After"))

    def _give_up(self, request: httpx.Request, outcome: Outcome, n_past_retries: int) -> None:
        if n_past_retries:
            logger.warning(
                "Giving up on %s %s after %d retries: %s",
                request.method,
                request.url,
                n_past_retries,
                _describe(outcome),
            )
        if self.config.on_give_up:
            self.config.on_give_up(outcome)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        n_past_retries = 0

        while True:
            try:
                response = await self._transport.handle_async_request(request)
            except RETRYABLE_EXCEPTIONS as exc:
                if not self.config.should_retry(n_past_retries):
                    self._give_up(request, exc, n_past_retries)
                    exc.retry_count = n_past_retries
                    raise
                delay = self.config.calculate_delay(n_past_retries)
                outcome: Outcome = exc
            else:
                if not self.config.is_retryable_status(response.status_code):
                    response.extensions[RETRY_COUNT_EXTENSION] = n_past_retries
                    return response
                if not self.config.should_retry(n_past_retries):
                    self._give_up(request, response, n_past_retries)
                    response.extensions[RETRY_COUNT_EXTENSION] = n_past_retries
                    return response

                retry_after = self._retry_after(response)
                if retry_after is not None:
                    # Server-stated cooldown replaces the computed backoff
                    delay = retry_after
                else:
                    delay = self.config.calculate_delay(n_past_retries)
                await response.aclose()
                outcome = response

            n_past_retries += 1
            logger.warning(
                "Retrying %s %s in %.2fs (retry %d/%d): %s",
                request.method,
                request.url,
                delay,
                n_past_retries,
                self.config.max_retries,
                _describe(outcome),
            )
            if self.config.on_retry:
                self.config.on_retry(n_past_retries, outcome, delay)

            await self._sleep(delay)

    async def aclose(self) -> None:
        await self._transport.aclose()


def _describe(outcome: Outcome) -> str:
    if isinstance(outcome, httpx.Response):
        return f"status {outcome.status_code}"
    return f"{type(outcome).__name__}: {outcome}"


# Preset retry configurations

DEFAULT_RETRY = RetryConfig()

NO_RETRY = RetryConfig(max_retries=0)
