"""Fetches the remaining pages of a resource and stitches them together."""

import asyncio

from loguru import logger

from config.settings import settings
from ficfetch.core.errors import AggregationError
from ficfetch.core.page_fetcher import PageFetcher
from ficfetch.models.document import AggregatedDocument, PageBody, PageLink, PaginationPlan


class PageAggregator:
    """
    Fetches pages 2..N of a plan on a bounded pool and assembles them by
    page number, never by completion order.

    Any failed page aborts the whole aggregation; there is no partial
    document.
    """

    def __init__(self, fetcher: PageFetcher, max_concurrency: int | None = None):
        self.fetcher = fetcher
        self.max_concurrency = max_concurrency if max_concurrency is not None else settings.max_concurrent_pages
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

    async def aggregate(
        self,
        plan: PaginationPlan,
        first_page_body: str,
        first_page_url: str | None = None,
    ) -> AggregatedDocument:
        """
        Build the aggregated document.

        Args:
            plan: Pages 2..N to fetch
            first_page_body: Already fetched body of page 1
            first_page_url: URL of page 1, kept for reference

        Raises:
            AggregationError: if any page fails; outstanding fetches are cancelled
        """
        first = PageBody(number=1, url=first_page_url, body=first_page_body)
        if plan.is_empty:
            return AggregatedDocument(pages=[first])

        logger.info(f"Fetching {len(plan)} more pages ({self.max_concurrency} at a time)")

        semaphore = asyncio.Semaphore(self.max_concurrency)
        tasks = [
            asyncio.create_task(self._fetch_page(page, semaphore), name=f"page-{page.number}")
            for page in plan
        ]

        bodies: dict[int, PageBody] = {}
        try:
            for finished in asyncio.as_completed(tasks):
                page = await finished
                bodies[page.number] = page
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        pages = [first] + [bodies[number] for number in sorted(bodies)]
        return AggregatedDocument(pages=pages)

    async def _fetch_page(self, page: PageLink, semaphore: asyncio.Semaphore) -> PageBody:
        async with semaphore:
            logger.debug(f"Fetching page {page.number}: {page.url}")
            try:
                body = await self.fetcher.fetch(page.url)
            except Exception as e:
                logger.error(f"Page {page.number} failed: {e}")
                raise AggregationError(page.number, page.url, e) from e
        return PageBody(number=page.number, url=page.url, body=body)
