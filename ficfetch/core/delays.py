"""Self-imposed pauses between requests."""

import asyncio
from typing import Awaitable, Callable

from config.settings import settings

Sleeper = Callable[[float], Awaitable[None]]


class DelayManager:
    """
    Manages the fixed delays the fetcher observes.

    - cooldown after every successful page
    - pause before following a redirect
    - wait before retrying a transient failure
    - pauses around the login exchange

    The ``sleep`` coroutine is injectable so callers can observe or skip
    the waits.
    """

    def __init__(
        self,
        success_cooldown: float | None = None,
        redirect_delay: float | None = None,
        login_delay: float | None = None,
        sleep: Sleeper | None = None,
        enabled: bool = True,
    ):
        self.success_cooldown = success_cooldown if success_cooldown is not None else settings.success_cooldown
        self.redirect_delay = redirect_delay if redirect_delay is not None else settings.redirect_delay
        self.login_delay = login_delay if login_delay is not None else settings.login_delay
        self.enabled = enabled
        self._sleep = sleep or asyncio.sleep

        # Statistics
        self.total_delay = 0.0
        self.delay_count = 0

    async def wait(self, seconds: float) -> float:
        """
        Sleep for ``seconds``.

        Returns:
            Actual delay waited
        """
        if not self.enabled or seconds <= 0:
            return 0.0

        self.total_delay += seconds
        self.delay_count += 1
        await self._sleep(seconds)
        return seconds

    async def after_success(self) -> float:
        return await self.wait(self.success_cooldown)

    async def before_redirect(self) -> float:
        return await self.wait(self.redirect_delay)

    async def before_retry(self, seconds: float) -> float:
        return await self.wait(seconds)

    async def around_login(self) -> float:
        return await self.wait(self.login_delay)

    @property
    def average_delay(self) -> float:
        """Get average delay."""
        if self.delay_count == 0:
            return 0.0
        return self.total_delay / self.delay_count

    def get_stats(self) -> dict[str, float]:
        """Get delay statistics."""
        return {
            "total_delay": self.total_delay,
            "delay_count": self.delay_count,
            "average_delay": self.average_delay,
        }
