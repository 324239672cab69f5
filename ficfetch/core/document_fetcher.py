"""Entry point: fetch a (possibly paginated) resource as one document."""

import asyncio
from pathlib import Path
from typing import Callable, TypeVar

from loguru import logger

from config.settings import settings
from ficfetch.core.aggregator import PageAggregator
from ficfetch.core.delays import DelayManager
from ficfetch.core.errors import FetchTimeoutError
from ficfetch.core.http_client import HttpClient, create_client
from ficfetch.core.page_fetcher import PageFetcher
from ficfetch.core.pagination import PaginationDiscoverer
from ficfetch.models.document import AggregatedDocument

T = TypeVar("T")

Extractor = Callable[[str], list[T]]


class DocumentFetcher:
    """
    Fetches the first page of a resource, discovers its pagination and
    aggregates every page into one ``AggregatedDocument``.

    Logging goes through loguru. Callers own sink setup; call
    ``config.logging_config.setup_logging`` once at startup to get the
    console and rotating file sinks.

    Usage::

        setup_logging()
        async with DocumentFetcher() as fetcher:
            await fetcher.login()
            document = await fetcher.fetch_document("https://archiveofourown.org/users/x/bookmarks")
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        page_fetcher: PageFetcher | None = None,
        discoverer: PaginationDiscoverer | None = None,
        aggregator: PageAggregator | None = None,
        delay_manager: DelayManager | None = None,
        operation_timeout: float | None = None,
    ):
        if page_fetcher is not None:
            http_client = http_client or page_fetcher.client
            delay_manager = delay_manager or page_fetcher.delay_manager

        self._owns_client = http_client is None
        self.http_client = http_client or create_client()

        self.delay_manager = delay_manager or DelayManager()
        self.page_fetcher = page_fetcher or PageFetcher(self.http_client, delay_manager=self.delay_manager)
        self.discoverer = discoverer or PaginationDiscoverer(base_url=self.page_fetcher.base_url)
        self.aggregator = aggregator or PageAggregator(self.page_fetcher)
        self.operation_timeout = operation_timeout if operation_timeout is not None else settings.operation_timeout

    async def __aenter__(self) -> "DocumentFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._owns_client:
            await self.http_client.close()

    async def fetch_document(self, url: str) -> AggregatedDocument:
        """
        Fetch every page of ``url`` and return them as one document.

        Raises:
            FetchError: the first page could not be fetched
            AggregationError: a later page could not be fetched
            FetchTimeoutError: ``operation_timeout`` elapsed
        """
        if self.operation_timeout is None:
            return await self._fetch_document(url)

        try:
            return await asyncio.wait_for(self._fetch_document(url), timeout=self.operation_timeout)
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(url, self.operation_timeout) from e

    async def _fetch_document(self, url: str) -> AggregatedDocument:
        logger.info(f"Fetching document {url}")
        first_page = await self.page_fetcher.fetch(url)

        plan = self.discoverer.discover(first_page)
        document = await self.aggregator.aggregate(plan, first_page, first_page_url=url)

        logger.info(f"Fetched {url} ({document.page_count} pages)")
        return document

    async def fetch_records(self, url: str, extractor: Extractor) -> list[T]:
        """Fetch ``url`` and hand the aggregated text to ``extractor``."""
        document = await self.fetch_document(url)
        records = extractor(document.text)
        logger.info(f"Extracted {len(records)} records from {url}")
        return records

    async def login(self, login_file: str | Path | None = None) -> None:
        """Log the shared session in with credentials from ``login_file``."""
        from ficfetch.auth.session import SessionAuthenticator

        authenticator = SessionAuthenticator(self.page_fetcher, delay_manager=self.delay_manager)
        await authenticator.login(login_file)
