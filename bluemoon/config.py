"""Application configuration from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./bluemoon.db",
        description="SQLAlchemy async connection string",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Server log file")

    # Overdue sweep scheduler
    overdue_sweep_interval_seconds: int = Field(
        default=0,
        ge=0,
        description="Run the overdue sweep in-process every N seconds (0 = only on demand)",
    )

    # API
    api_title: str = Field(default="BlueMoon Billing API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")
    cors_origins: str = Field(default="*", description="Comma-separated allowed CORS origins")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
