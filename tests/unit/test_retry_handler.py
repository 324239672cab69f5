"""Tests for the retry policy and delay manager."""

import asyncio
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest
from httpx import Response

from ficfetch.core.delays import DelayManager
from ficfetch.core.errors import RetryLimitExceeded
from ficfetch.core.retry_handler import RetryHandler
from ficfetch.models.outcome import PageRequest


class TestRetryHandler:
    """Tests for RetryHandler."""

    @pytest.mark.parametrize("status", [503, 408, 429, 525, 502, 524])
    def test_transient_statuses(self, status):
        assert RetryHandler().is_transient(status)

    @pytest.mark.parametrize("status", [200, 301, 302, 404, 500, 504])
    def test_other_statuses_are_not_transient(self, status):
        assert not RetryHandler().is_transient(status)

    def test_default_delay_without_header(self):
        assert RetryHandler(default_delay=20.0).retry_delay(Response(503)) == 20.0

    def test_delay_seconds(self):
        assert RetryHandler.parse_retry_after("120") == 120.0

    def test_http_date(self):
        when = datetime.now(timezone.utc) + timedelta(seconds=90)
        delay = RetryHandler.parse_retry_after(format_datetime(when, usegmt=True))
        assert 80 <= delay <= 90

    def test_http_date_in_the_past(self):
        when = datetime.now(timezone.utc) - timedelta(hours=1)
        assert RetryHandler.parse_retry_after(format_datetime(when, usegmt=True)) == 0.0

    @pytest.mark.parametrize("value", ["", "soon", "-5", "1.5s"])
    def test_unusable_values(self, value):
        assert RetryHandler.parse_retry_after(value) is None

    def test_legacy_header_name(self):
        response = Response(503, headers={"Retry_After": "3"})
        assert RetryHandler(default_delay=20.0).retry_delay(response) == 3.0

    def test_unbounded_by_default(self):
        handler = RetryHandler(max_retries=None)
        request = PageRequest(url="https://archiveofourown.org/works/1")
        for _ in range(500):
            handler.register_attempt(request, "busy")
        assert request.attempt == 500

    def test_ceiling(self):
        handler = RetryHandler(max_retries=1)
        request = PageRequest(url="https://archiveofourown.org/works/1")
        handler.register_attempt(request, "busy")

        with pytest.raises(RetryLimitExceeded):
            handler.register_attempt(request, "busy")


class TestDelayManager:
    """Tests for DelayManager."""

    def test_named_delays(self, sleeps):
        manager = DelayManager(success_cooldown=5.0, redirect_delay=2.0, login_delay=2.0, sleep=sleeps)

        async def run():
            await manager.after_success()
            await manager.before_redirect()
            await manager.before_retry(20.0)
            await manager.around_login()

        asyncio.run(run())
        assert sleeps.calls == [5.0, 2.0, 20.0, 2.0]
        assert manager.get_stats()["total_delay"] == 29.0

    def test_disabled(self, sleeps):
        manager = DelayManager(success_cooldown=5.0, sleep=sleeps, enabled=False)
        assert asyncio.run(manager.after_success()) == 0.0
        assert sleeps.calls == []
