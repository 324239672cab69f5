"""Core fetch engine components."""

from ficfetch.core.aggregator import PageAggregator
from ficfetch.core.delays import DelayManager
from ficfetch.core.document_fetcher import DocumentFetcher
from ficfetch.core.http_client import HttpClient, TransportConfig, create_client
from ficfetch.core.page_fetcher import PageFetcher
from ficfetch.core.pagination import PaginationDiscoverer
from ficfetch.core.rate_limiter import RateLimiter
from ficfetch.core.retry_handler import RetryHandler

__all__ = [
    "DelayManager",
    "DocumentFetcher",
    "HttpClient",
    "PageAggregator",
    "PageFetcher",
    "PaginationDiscoverer",
    "RateLimiter",
    "RetryHandler",
    "TransportConfig",
    "create_client",
]
