"""Centralized configuration using pydantic-settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini API for classification and summarization
    gemini_api_key: str = ""
    gemini_fast_model: str = "gemini-2.5-flash"
    gemini_pro_model: str = "gemini-2.5-pro"

    # Per-request timeout (seconds) and attempts on 429/5xx
    gemini_timeout: int = 60
    gemini_max_retries: int = 3

    # Content fetching
    fetch_timeout: int = 30
    user_agent: str = "Mozilla/5.0 (compatible; GistBot/1.0)"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
