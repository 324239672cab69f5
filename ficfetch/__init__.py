"""Fetch engine for paginated, session-authenticated archive pages."""

from ficfetch.core import DocumentFetcher, PageFetcher, create_client
from ficfetch.models import AggregatedDocument, PaginationPlan

__version__ = "0.1.0"

__all__ = [
    "AggregatedDocument",
    "DocumentFetcher",
    "PageFetcher",
    "PaginationPlan",
    "create_client",
]
