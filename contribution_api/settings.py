from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    default_username: str = "CodingWithKantecki"
    github_contributions_url: str = "https://github.com/users/{username}/contributions"
    github_user_agent: str = "portfolio-contrib-widget"
    request_timeout_seconds: float = 10.0
    cache_ttl_seconds: int = 3600
    cache_max_entries: int = 256
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
