"""Pytest configuration and fixtures."""

import pytest

from ficfetch.core.delays import DelayManager
from ficfetch.core.http_client import HttpClient, TransportConfig
from ficfetch.core.page_fetcher import PageFetcher
from ficfetch.core.rate_limiter import RateLimiter
from ficfetch.core.retry_handler import RetryHandler

BASE_URL = "https://archiveofourown.org"


class SleepRecorder:
    """Stands in for asyncio.sleep and remembers every requested wait."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def pagination_nav(path: str, last_page: int, current: int = 1) -> str:
    """Render a pagination list the way the site does."""
    items = [f'<li><a href="{path}?page={n}">{n}</a></li>' for n in range(1, last_page + 1)]
    items.append(
        f'<li class="next" title="next"><a rel="next" href="{path}?page={current + 1}">Next</a></li>'
    )
    return f'<ol class="pagination actions" role="navigation">{"".join(items)}</ol>'


def html_page(content: str, nav: str = "") -> str:
    return f"<html><body><div id='main'>{content}</div>{nav}</body></html>"


@pytest.fixture
def sleeps():
    """Recorder injected as the fetcher's sleep."""
    return SleepRecorder()


@pytest.fixture
def delay_manager(sleeps):
    return DelayManager(success_cooldown=5.0, redirect_delay=2.0, login_delay=2.0, sleep=sleeps)


@pytest.fixture
def dump_path(tmp_path):
    return tmp_path / "output" / "debug.html"


@pytest.fixture
def make_client():
    """Factory for HTTP clients; call it inside the running event loop."""

    def factory(**overrides) -> HttpClient:
        config = TransportConfig(label=overrides.pop("label", "ficfetch-tests"), timeout=10, **overrides)
        return HttpClient(config, rate_limiter=RateLimiter(requests_per_minute=600))

    return factory


@pytest.fixture
def make_fetcher(make_client, delay_manager, dump_path):
    """Factory for page fetchers wired to recorded sleeps and a temp dump file."""

    def factory(client: HttpClient | None = None, max_retries=None, max_redirects=None) -> PageFetcher:
        return PageFetcher(
            client or make_client(),
            base_url=BASE_URL,
            retry_handler=RetryHandler(default_delay=20.0, max_retries=max_retries),
            delay_manager=delay_manager,
            debug_dump_path=dump_path,
            max_redirects=max_redirects,
        )

    return factory
