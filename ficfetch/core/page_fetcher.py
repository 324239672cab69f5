"""Single-page fetcher: the response classification loop."""

from pathlib import Path
from urllib.parse import urljoin, urlsplit

import aiofiles
import httpx
from loguru import logger

from config.settings import settings
from ficfetch.core.delays import DelayManager
from ficfetch.core.errors import (
    FatalStatusError,
    FetchError,
    LoginRedirectError,
    RedirectLimitExceeded,
    RedirectResolutionError,
)
from ficfetch.core.http_client import HttpClient
from ficfetch.core.retry_handler import RetryHandler
from ficfetch.models.outcome import (
    Fatal,
    FetchOutcome,
    LoginRedirect,
    PageRequest,
    RedirectTo,
    Retryable,
    Success,
)


class PageFetcher:
    """
    Fetches one URL until it resolves to a page body or a fatal error.

    Each physical attempt is classified into a ``FetchOutcome``:

    ==========================  ======================================
    200                         cooldown, return body
    301/302, non-login target   pause, follow Location
    301/302, target in /login   raise LoginRedirectError
    301/302, bad Location       raise RedirectResolutionError
    408/429/502/503/524/525     dump body, wait Retry-After, retry
    anything else               raise FatalStatusError
    ==========================  ======================================
    """

    REDIRECT_STATUS_CODES = frozenset({301, 302})
    LOGIN_MARKER = "login"

    def __init__(
        self,
        client: HttpClient,
        base_url: str | None = None,
        retry_handler: RetryHandler | None = None,
        delay_manager: DelayManager | None = None,
        debug_dump_path: str | Path | None = None,
        max_redirects: int | None = None,
    ):
        self.client = client
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.retry_handler = retry_handler or RetryHandler()
        self.delay_manager = delay_manager or DelayManager()
        self.debug_dump_path = Path(debug_dump_path or settings.debug_dump_path)
        self.max_redirects = max_redirects if max_redirects is not None else settings.max_redirects

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` and return the page body."""
        outcome = await self.fetch_outcome(url)
        return outcome.body

    async def fetch_outcome(self, url: str) -> Success:
        """
        Run the classification loop for ``url``.

        Raises:
            FatalStatusError: unrecognized status
            RedirectResolutionError: redirect without a usable Location header
            FetchError: the request could not be sent at all
            LoginRedirectError: redirect into the login flow
            RetryLimitExceeded: retry ceiling reached (only when configured)
            RedirectLimitExceeded: redirect ceiling reached (only when configured)
        """
        try:
            request = PageRequest(url=self.resolve(url))
        except ValueError as e:
            raise FetchError(url, f"Invalid URL {url}: {e}") from e

        while True:
            outcome = await self._attempt(request)

            if isinstance(outcome, Success):
                await self.delay_manager.after_success()
                return outcome

            if isinstance(outcome, RedirectTo):
                if self.max_redirects is not None and request.redirects >= self.max_redirects:
                    raise RedirectLimitExceeded(url, request.redirects + 1)
                logger.info(f"Following redirect {request.url} -> {outcome.url}")
                await self.delay_manager.before_redirect()
                request.redirect(outcome.url)
                continue

            if isinstance(outcome, Retryable):
                if outcome.status is not None:
                    await self._write_debug_dump(outcome.body)
                self.retry_handler.register_attempt(request, outcome.reason)
                logger.warning(
                    f"{outcome.reason} for {request.url}, retrying in {outcome.wait:.0f}s "
                    f"(attempt {request.attempt})"
                )
                await self.delay_manager.before_retry(outcome.wait)
                continue

            if isinstance(outcome, LoginRedirect):
                raise LoginRedirectError(request.url, outcome.url, outcome.status)

            if isinstance(outcome, Fatal):
                logger.error(f"Unknown status {outcome.status} for {request.url}")
                raise FatalStatusError(request.url, outcome.status)

    async def _attempt(self, request: PageRequest) -> FetchOutcome:
        """Send one physical request and classify the result."""
        try:
            response = await self.client.get(request.url)
        except (httpx.InvalidURL, ValueError) as e:
            raise FetchError(request.url, f"Invalid URL {request.url}: {e}") from e
        except httpx.HTTPError as e:
            if not self.retry_handler.is_retryable_exception(e):
                raise FetchError(request.url, f"Request to {request.url} failed: {e}") from e
            return Retryable(
                reason=f"Network error ({type(e).__name__})",
                wait=self.retry_handler.retry_delay(),
            )

        return self.classify(request.url, response)

    def classify(self, url: str, response: httpx.Response) -> FetchOutcome:
        """Map a response for ``url`` onto a FetchOutcome."""
        status = response.status_code

        if status == httpx.codes.OK:
            return Success(body=response.text, status=status)

        if status in self.REDIRECT_STATUS_CODES:
            location = response.headers.get("location", "").strip()
            if not location:
                raise RedirectResolutionError(url, status)
            target = self._redirect_target(url, status, location)
            if self.is_login_url(target):
                return LoginRedirect(url=target, status=status)
            return RedirectTo(url=target)

        if self.retry_handler.is_transient(status):
            return Retryable(
                reason=f"Service unavailable ({status})",
                wait=self.retry_handler.retry_delay(response),
                status=status,
                body=response.text,
            )

        return Fatal(status=status)

    @classmethod
    def is_login_url(cls, url: str) -> bool:
        """True when one of the path segments of ``url`` is the login page."""
        return cls.LOGIN_MARKER in urlsplit(url).path.split("/")

    def resolve(self, url: str) -> str:
        """Resolve a possibly relative URL against the site origin."""
        if urlsplit(url).scheme:
            return url
        return urljoin(f"{self.base_url}/", url)

    def _redirect_target(self, url: str, status: int, location: str) -> str:
        """Resolve a Location header to an absolute http(s) URL."""
        try:
            target = self.resolve(location)
            parsed = httpx.URL(target)
        except (httpx.InvalidURL, ValueError) as e:
            raise RedirectResolutionError(url, status, location) from e

        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise RedirectResolutionError(url, status, location)
        return target

    async def _write_debug_dump(self, body: str) -> None:
        """Overwrite the debug file with the body of a transient failure."""
        path = self.debug_dump_path
        if not path.is_absolute():
            path = Path.cwd() / path

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(body)
        except OSError as e:
            logger.warning(f"Could not write debug dump to {path}: {e}")
            return

        logger.debug(f"Wrote failed response body to {path}")
