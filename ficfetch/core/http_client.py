"""Async HTTP transport with a persistent session and no automatic redirects."""

from typing import Any
from urllib.parse import urlparse

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from config.settings import settings
from ficfetch.core.errors import ClientConstructionError
from ficfetch.core.headers import HeaderGenerator
from ficfetch.core.rate_limiter import RateLimiter


class TransportConfig(BaseModel):
    """
    Immutable transport settings.

    Redirects are never followed by the transport; the page fetcher
    classifies and replays them itself.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, description="User-Agent sent with every request")
    cookies_enabled: bool = True
    timeout: float = Field(default=960.0, gt=0)
    proxy: str | None = None
    http2: bool = False

    @classmethod
    def from_settings(cls, label: str | None = None, **overrides: Any) -> "TransportConfig":
        values = {
            "label": label or settings.user_agent,
            "cookies_enabled": settings.cookies_enabled,
            "timeout": settings.request_timeout,
            "proxy": settings.proxy,
            "http2": settings.http2,
        }
        values.update(overrides)
        return cls(**values)


class HttpClient:
    """
    Shared async HTTP client.

    Owns the connection pool and the cookie jar. One instance is shared by
    every concurrent fetch; ``httpx.AsyncClient`` is safe for that within a
    single event loop. Responses are returned as-is whatever their status.
    """

    def __init__(
        self,
        config: TransportConfig,
        rate_limiter: RateLimiter | None = None,
        header_generator: HeaderGenerator | None = None,
    ):
        self.config = config
        self.rate_limiter = rate_limiter or RateLimiter()
        self.header_generator = header_generator or HeaderGenerator(config.label)
        self._client: httpx.AsyncClient | None = self._build_client()

    def _build_client(self) -> httpx.AsyncClient:
        try:
            transport = None
            if self.config.proxy:
                transport = httpx.AsyncHTTPTransport(proxy=self.config.proxy, http2=self.config.http2)

            client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                transport=transport,
                follow_redirects=False,
                http2=self.config.http2,
                headers={"User-Agent": self.config.label},
            )
        except Exception as e:
            raise ClientConstructionError(f"Could not build HTTP client: {e}") from e

        logger.debug(f"HTTP client initialized (label={self.config.label!r}, timeout={self.config.timeout}s)")
        return client

    async def __aenter__(self) -> "HttpClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def is_closed(self) -> bool:
        return self._client is None

    @property
    def cookies(self) -> httpx.Cookies:
        return self._require_client().cookies

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("HTTP client is closed.")
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("HTTP client closed")

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Perform a rate-limited GET request.

        Args:
            url: The URL to fetch
            headers: Optional custom headers (merged with generated headers)
            params: Optional query parameters

        Returns:
            httpx.Response, whatever its status code
        """
        request_headers = self.header_generator.generate(extra_headers=headers)
        return await self._send("GET", url, headers=request_headers, params=params)

    async def post_form(
        self,
        url: str,
        data: dict[str, str],
        referer: str | None = None,
    ) -> httpx.Response:
        """Submit a url-encoded form."""
        request_headers = self.header_generator.generate_for_form(referer=referer)
        return await self._send("POST", url, headers=request_headers, data=data)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = self._require_client()

        await self.rate_limiter.acquire(urlparse(url).netloc)

        logger.debug(f"{method} {url}")
        response = await client.request(method, url, **kwargs)
        logger.debug(f"{method} {url} -> {response.status_code}")

        if not self.config.cookies_enabled:
            client.cookies.clear()

        return response


def create_client(label: str | None = None, **overrides: Any) -> HttpClient:
    """
    Build the shared HTTP client.

    Args:
        label: Identifying User-Agent label (defaults to settings.user_agent)
        **overrides: TransportConfig fields to override

    Raises:
        ClientConstructionError: if the transport cannot be built
    """
    try:
        config = TransportConfig.from_settings(label, **overrides)
    except ValueError as e:
        raise ClientConstructionError(f"Invalid transport configuration: {e}") from e
    return HttpClient(config)
