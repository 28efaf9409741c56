from pathlib import Path

from grounded_qa.constants import (
    DEFAULT_ASK_RATE_LIMIT,
    GEMINI_API_URL,
    INITIAL_BACKOFF_SECONDS,
    MAX_ATTEMPTS,
)
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from env vars."""

    # Supplied by the hosting environment, never hardcoded
    gemini_api_key: str = ""
    gemini_api_url: str = GEMINI_API_URL

    max_attempts: int = MAX_ATTEMPTS
    initial_backoff_seconds: float = INITIAL_BACKOFF_SECONDS
    # None waits as long as the endpoint takes, like the browser fetch
    request_timeout_seconds: float | None = None

    ask_rate_limit: str = DEFAULT_ASK_RATE_LIMIT
    whitelisted_ips: list[str] = []
    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def get_static_path(self) -> Path:
        """Absolute path to the bundled browser UI assets."""
        return Path(__file__).parent / "static"


settings = Settings()
