"""Pagination discovery from a resource's first page."""

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from loguru import logger

from config.settings import settings
from ficfetch.core.errors import ConfigurationError, PaginationError
from ficfetch.models.document import PageLink, PaginationPlan


class PaginationDiscoverer:
    """
    Works out which further pages a paginated resource spans.

    The site renders a navigation list on the first page, e.g.::

        <ol class="pagination actions">
          <li><a href="/works/1?page=1">1</a></li>
          <li><a href="/works/1?page=2">2</a></li>
          ...
          <li><a href="/works/1?page=7">7</a></li>
          <li class="next" title="next"><a rel="next" href="/works/1?page=2">Next</a></li>
        </ol>

    The last link that is not the "next" link carries the final page
    number in its trailing digits. Every other page URL is that link with
    the digits replaced.
    """

    NAV_SELECTOR = "ol.pagination.actions"
    PAGE_NUMBER_PATTERN = r"(\d+)$"
    NEXT_TITLE = "next"

    def __init__(
        self,
        base_url: str | None = None,
        nav_selector: str | None = None,
        page_number_pattern: str | None = None,
    ):
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.nav_selector = nav_selector or self.NAV_SELECTOR

        pattern = page_number_pattern or self.PAGE_NUMBER_PATTERN
        try:
            self.page_number_regex = re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid page number pattern {pattern!r}: {e}") from e
        if self.page_number_regex.groups != 1:
            raise ConfigurationError(f"Page number pattern {pattern!r} must have exactly one group")

    def discover(self, first_page_html: str) -> PaginationPlan:
        """
        Build the plan for pages 2..N.

        Returns an empty plan when the page has no pagination or the
        pagination markup cannot be understood.
        """
        soup = BeautifulSoup(first_page_html, "lxml")
        nav = soup.select_one(self.nav_selector)
        if nav is None:
            logger.debug("No pagination found, single page resource")
            return PaginationPlan()

        try:
            template = self._final_page_link(nav)
            last_page = self._page_number(template)
        except PaginationError as e:
            logger.warning(f"Treating resource as single page: {e}")
            return PaginationPlan()

        if last_page <= 1:
            return PaginationPlan()

        pages = [
            PageLink(number=number, url=self._page_url(template, number))
            for number in range(2, last_page + 1)
        ]
        logger.debug(f"Detected {last_page} pages")
        return PaginationPlan(pages=pages)

    def _final_page_link(self, nav) -> str:
        hrefs = []
        for link in nav.select("a"):
            parent = link.parent
            if parent is not None and parent.get("title") == self.NEXT_TITLE:
                continue
            href = link.get("href")
            if href:
                hrefs.append(href)

        if not hrefs:
            raise PaginationError("pagination has no page links")
        return hrefs[-1]

    def _page_number(self, href: str) -> int:
        match = self.page_number_regex.search(href)
        if not match:
            raise PaginationError(f"no page number at the end of {href!r}")
        return int(match.group(1))

    def _page_url(self, template: str, number: int) -> str:
        start, end = self.page_number_regex.search(template).span(1)
        href = f"{template[:start]}{number}{template[end:]}"
        return urljoin(f"{self.base_url}/", href)
