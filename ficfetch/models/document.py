"""Pagination plans and aggregated multi-page documents."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PageLink(BaseModel):
    """A page of a paginated resource that still has to be fetched."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., ge=2, description="1-based page number")
    url: str = Field(..., description="Absolute page URL")


class PaginationPlan(BaseModel):
    """
    Ordered list of the remaining pages (2..N) of a paginated resource.

    An empty plan means the resource fits on a single page.
    """

    model_config = ConfigDict(frozen=True)

    pages: tuple[PageLink, ...] = ()

    @model_validator(mode="after")
    def check_order(self) -> "PaginationPlan":
        expected = list(range(2, len(self.pages) + 2))
        if [page.number for page in self.pages] != expected:
            raise ValueError("Plan pages must be numbered 2..N in order")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.pages

    @property
    def total_pages(self) -> int:
        """Number of pages including the already fetched first page."""
        return len(self.pages) + 1

    @property
    def urls(self) -> list[str]:
        return [page.url for page in self.pages]

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages)


class PageBody(BaseModel):
    """Body of one fetched page."""

    number: int = Field(..., ge=1)
    url: str | None = None
    body: str


class AggregatedDocument(BaseModel):
    """
    All pages of a resource in page order.

    ``text`` is what downstream extraction consumes: the page bodies
    concatenated in page-number order.
    """

    pages: list[PageBody] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_order(self) -> "AggregatedDocument":
        expected = list(range(1, len(self.pages) + 1))
        if [page.number for page in self.pages] != expected:
            raise ValueError("Document pages must be numbered 1..N in order")
        return self

    @property
    def text(self) -> str:
        return "".join(page.body for page in self.pages)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages)
