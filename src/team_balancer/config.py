"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:4200,http://127.0.0.1:4200"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Roster storage backend
    roster_backend: Literal["memory", "duckdb", "supabase"] = "memory"

    # Database path (DuckDB file), used when roster_backend == "duckdb"
    database_path: str = "data/roster.duckdb"

    # Supabase project, used when roster_backend == "supabase"
    supabase_url: str = ""
    supabase_key: str = ""
    request_timeout: float = 10.0

    # Balancing
    default_mode: Literal["random", "score_weighted"] | None = None
    score_jitter: float = 0.5
    unknown_role_policy: Literal["reject", "exclude"] = "reject"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
