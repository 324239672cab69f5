"""Retry policy for transient HTTP failures."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx
from loguru import logger

from config.settings import settings
from ficfetch.core.errors import RetryLimitExceeded
from ficfetch.models.outcome import PageRequest


class RetryHandler:
    """
    Decides which responses are transient and how long to wait before
    retrying them.

    Delays are fixed: the server's ``Retry-After`` when it sends a usable
    one, otherwise ``default_delay``. There is no exponential growth. The
    number of retries is unbounded unless ``max_retries`` is set.
    """

    # Status codes that should trigger a retry
    TRANSIENT_STATUS_CODES = frozenset({
        408,  # Request Timeout
        429,  # Too Many Requests
        502,  # Bad Gateway
        503,  # Service Unavailable
        524,  # Cloudflare: A Timeout Occurred
        525,  # Cloudflare: SSL Handshake Failed
    })

    # Exceptions that should trigger a retry
    RETRYABLE_EXCEPTIONS = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )

    RETRY_AFTER_HEADERS = ("Retry-After", "Retry_After")

    def __init__(
        self,
        default_delay: float | None = None,
        max_retries: int | None = None,
    ):
        self.default_delay = default_delay if default_delay is not None else settings.default_retry_delay
        self.max_retries = max_retries if max_retries is not None else settings.max_transient_retries

    def is_transient(self, status_code: int) -> bool:
        return status_code in self.TRANSIENT_STATUS_CODES

    def is_retryable_exception(self, exc: Exception) -> bool:
        return isinstance(exc, self.RETRYABLE_EXCEPTIONS)

    def retry_delay(self, response: httpx.Response | None = None) -> float:
        """
        Seconds to wait before retrying.

        Uses ``Retry-After`` (delta-seconds or HTTP-date) when present and
        valid, else the default delay.
        """
        if response is None:
            return self.default_delay

        for header in self.RETRY_AFTER_HEADERS:
            value = response.headers.get(header)
            if value is None:
                continue
            delay = self.parse_retry_after(value)
            if delay is not None:
                return delay
            logger.debug(f"Ignoring unparseable {header} header: {value!r}")

        return self.default_delay

    @staticmethod
    def parse_retry_after(value: str) -> float | None:
        """Parse a Retry-After value; None if it is not usable."""
        value = value.strip()
        if not value:
            return None

        if value.isdigit():
            return float(value)

        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when is None:
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)

        return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())

    def register_attempt(self, request: PageRequest, reason: str) -> None:
        """
        Count a failed attempt against the retry ceiling.

        Raises:
            RetryLimitExceeded: once more than ``max_retries`` retries are needed
        """
        request.attempt += 1
        if self.max_retries is not None and request.attempt > self.max_retries:
            logger.error(f"All {self.max_retries} retries exhausted for {request.url}")
            raise RetryLimitExceeded(request.url, request.attempt, reason)
