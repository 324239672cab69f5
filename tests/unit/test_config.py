"""Tests for settings and logging setup."""

from loguru import logger

from config.logging_config import setup_logging
from config.settings import Settings


class TestSettings:
    """Tests for Settings."""

    def test_fetch_policy_defaults(self, monkeypatch):
        monkeypatch.delenv("MAX_TRANSIENT_RETRIES", raising=False)
        config = Settings(_env_file=None)

        assert config.base_url == "https://archiveofourown.org"
        assert config.request_timeout == 960.0
        assert config.success_cooldown == 5.0
        assert config.redirect_delay == 2.0
        assert config.default_retry_delay == 20.0
        assert config.max_transient_retries is None
        assert config.debug_dump_path == "output/debug.html"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MAX_TRANSIENT_RETRIES", "5")
        monkeypatch.setenv("USER_AGENT", "reader-bot")

        config = Settings(_env_file=None)

        assert config.max_transient_retries == 5
        assert config.user_agent == "reader-bot"

    def test_unknown_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")

        config = Settings(_env_file=None)

        assert "environment" not in Settings.model_fields
        assert not hasattr(config, "environment")

    def test_ensure_directories(self, tmp_path):
        config = Settings(_env_file=None, base_dir=tmp_path)
        config.ensure_directories()

        assert (tmp_path / "output").is_dir()
        assert (tmp_path / "logs").is_dir()


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "ficfetch.log"

    setup_logging(level="DEBUG", log_file=str(log_file))
    try:
        logger.debug("page fetched")
    finally:
        logger.remove()

    assert "page fetched" in log_file.read_text(encoding="utf-8")
