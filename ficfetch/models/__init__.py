"""Data models for the fetch engine."""

from ficfetch.models.document import AggregatedDocument, PageBody, PageLink, PaginationPlan
from ficfetch.models.outcome import (
    Fatal,
    FetchOutcome,
    LoginRedirect,
    PageRequest,
    RedirectTo,
    Retryable,
    Success,
)

__all__ = [
    "AggregatedDocument",
    "Fatal",
    "FetchOutcome",
    "LoginRedirect",
    "PageBody",
    "PageLink",
    "PageRequest",
    "PaginationPlan",
    "RedirectTo",
    "Retryable",
    "Success",
]
