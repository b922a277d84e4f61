"""Application configuration using Pydantic Settings.

All settings are loaded from environment variables or .env file.
Secrets are handled via SecretStr to prevent accidental logging.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DEVRADAR_",
    )

    # Application
    app_name: str = "Dev Radar"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://127.0.0.1:3000"])
    cors_allow_methods: list[str] = Field(default=["GET", "POST"])

    # Outbound HTTP
    http_timeout: float = 30.0

    # GitHub API
    github_api_base: str = "https://api.github.com"
    github_token: SecretStr | None = None
    github_repos_per_page: int = 30
    github_events_per_page: int = 30

    # LeetCode GraphQL
    leetcode_graphql_url: str = "https://leetcode.com/graphql"

    # Codeforces API
    codeforces_api_base: str = "https://codeforces.com/api"
    codeforces_submission_count: int = 100
    codeforces_rating_history: int = 20

    # GeeksForGeeks community stats API
    gfg_stats_api_url: str = "https://geeks-for-geeks-stats-api.vercel.app/"

    # Prometheus
    metrics_enabled: bool = True

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        return v.lower()

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
