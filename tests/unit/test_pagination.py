"""Tests for pagination discovery."""

import pytest

from conftest import BASE_URL, html_page, pagination_nav
from ficfetch.core.errors import ConfigurationError
from ficfetch.core.pagination import PaginationDiscoverer


@pytest.fixture
def discoverer():
    return PaginationDiscoverer(base_url=BASE_URL)


class TestDiscover:
    """Tests for PaginationDiscoverer.discover."""

    def test_no_navigation_is_single_page(self, discoverer):
        plan = discoverer.discover(html_page("<p>only page</p>"))
        assert plan.is_empty
        assert plan.total_pages == 1

    def test_plan_covers_remaining_pages(self, discoverer):
        html = html_page("<p>page 1</p>", pagination_nav("/users/reader/bookmarks", 5))

        plan = discoverer.discover(html)

        assert [page.number for page in plan] == [2, 3, 4, 5]
        assert plan.urls == [f"{BASE_URL}/users/reader/bookmarks?page={n}" for n in range(2, 6)]
        assert plan.total_pages == 5

    def test_next_link_is_ignored(self, discoverer):
        # The "next" link comes last but only points at page 2
        html = html_page("", pagination_nav("/tags/Example/works", 3))

        plan = discoverer.discover(html)

        assert plan.urls[-1] == f"{BASE_URL}/tags/Example/works?page=3"

    def test_last_candidate_wins(self, discoverer):
        nav = (
            '<ol class="pagination actions">'
            '<li><a href="/works?page=9">9</a></li>'
            '<li><a href="/works?page=3">3</a></li>'
            '<li title="next"><a href="/works?page=2">Next</a></li>'
            "</ol>"
        )

        plan = discoverer.discover(html_page("", nav))

        assert plan.total_pages == 3

    def test_gap_markers_are_skipped(self, discoverer):
        nav = (
            '<ol class="pagination actions">'
            '<li><span class="current">1</span></li>'
            '<li><a href="/works/1/kudos?page=2">2</a></li>'
            '<li class="gap">&hellip;</li>'
            '<li><a href="/works/1/kudos?page=40">40</a></li>'
            '<li class="next" title="next"><a rel="next" href="/works/1/kudos?page=2">Next &rarr;</a></li>'
            "</ol>"
        )

        plan = discoverer.discover(html_page("", nav))

        assert len(plan) == 39
        assert plan.pages[0].url == f"{BASE_URL}/works/1/kudos?page=2"
        assert plan.pages[-1].url == f"{BASE_URL}/works/1/kudos?page=40"

    def test_only_trailing_digits_change(self, discoverer):
        html = html_page("", pagination_nav("/works/555/bookmarks", 3))

        plan = discoverer.discover(html)

        assert plan.urls == [
            f"{BASE_URL}/works/555/bookmarks?page=2",
            f"{BASE_URL}/works/555/bookmarks?page=3",
        ]

    def test_is_idempotent(self, discoverer):
        html = html_page("", pagination_nav("/users/reader/works", 4))
        assert discoverer.discover(html) == discoverer.discover(html)

    def test_single_page_navigation(self, discoverer):
        html = html_page("", pagination_nav("/works", 1))
        assert discoverer.discover(html).is_empty


class TestMalformedNavigation:
    """Pagination markup that cannot be interpreted degrades to one page."""

    def test_no_numeric_suffix(self, discoverer):
        nav = '<ol class="pagination actions"><li><a href="/works/latest">Last</a></li></ol>'
        assert discoverer.discover(html_page("", nav)).is_empty

    def test_only_next_link(self, discoverer):
        nav = '<ol class="pagination actions"><li title="next"><a href="/works?page=2">Next</a></li></ol>'
        assert discoverer.discover(html_page("", nav)).is_empty

    def test_links_without_href(self, discoverer):
        nav = '<ol class="pagination actions"><li><a>1</a></li></ol>'
        assert discoverer.discover(html_page("", nav)).is_empty


class TestConfiguration:
    """Patterns are checked when the discoverer is built."""

    def test_invalid_pattern(self):
        with pytest.raises(ConfigurationError):
            PaginationDiscoverer(page_number_pattern="(\\d+")

    def test_pattern_needs_one_group(self):
        with pytest.raises(ConfigurationError):
            PaginationDiscoverer(page_number_pattern="\\d+$")

    def test_custom_pattern(self):
        discoverer = PaginationDiscoverer(base_url=BASE_URL, page_number_pattern=r"page/(\d+)/?$")
        nav = '<ol class="pagination actions"><li><a href="/archive/page/3/">3</a></li></ol>'

        plan = discoverer.discover(html_page("", nav))

        assert plan.urls == [f"{BASE_URL}/archive/page/2/", f"{BASE_URL}/archive/page/3/"]
