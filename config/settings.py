"""Application settings loaded from environment variables."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project paths
    base_dir: Path = Field(default_factory=Path.cwd)

    @property
    def output_dir(self) -> Path:
        return self.base_dir / "output"

    @property
    def log_dir(self) -> Path:
        return self.base_dir / "logs"

    # Target site
    base_url: str = "https://archiveofourown.org"

    # Transport
    user_agent: str = "ficfetch"
    request_timeout: float = 960.0
    cookies_enabled: bool = True
    proxy: str | None = None
    http2: bool = False

    # Rate limiting
    rate_limit_rpm: int = 30  # Requests per minute per host

    # Fetch policy (seconds)
    success_cooldown: float = 5.0
    redirect_delay: float = 2.0
    default_retry_delay: float = 20.0

    # None means retry/follow forever
    max_transient_retries: int | None = None
    max_redirects: int | None = None

    debug_dump_path: str = "output/debug.html"

    # Pagination
    max_concurrent_pages: int = Field(default=1, ge=1)
    operation_timeout: float | None = None

    # Authentication
    login_file: str = "log.txt"
    login_delay: float = 2.0

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/ficfetch.log"

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        for directory in [
            self.output_dir,
            self.log_dir,
        ]:
            directory.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
