"""Per-host request budget shared by every fetch on one client."""

from collections import Counter

from aiolimiter import AsyncLimiter
from loguru import logger

from config.settings import settings


class RateLimiter:
    """
    Leaky-bucket budget of ``requests_per_minute`` for each host.

    Sits underneath the fetcher's cooldowns. Concurrent page fetches in
    one aggregation draw from the same bucket, so raising the concurrency
    never raises the request rate against the site.
    """

    def __init__(self, requests_per_minute: int | None = None):
        self.rpm = requests_per_minute or settings.rate_limit_rpm
        self._buckets: dict[str, AsyncLimiter] = {}
        self._sent: Counter[str] = Counter()

    def _bucket(self, host: str) -> AsyncLimiter:
        bucket = self._buckets.get(host)
        if bucket is None:
            bucket = self._buckets[host] = AsyncLimiter(self.rpm, 60)
            logger.debug(f"Request budget for {host}: {self.rpm}/min")
        return bucket

    async def acquire(self, host: str) -> None:
        """Wait until ``host`` has a free request slot."""
        async with self._bucket(host):
            self._sent[host] += 1

    def get_stats(self) -> dict[str, int]:
        """Requests sent per host."""
        return dict(self._sent)
