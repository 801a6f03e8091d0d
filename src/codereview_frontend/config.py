"""Application configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Code review API
    api_base_url: str = Field(
        "http://localhost:8000",
        description="Base URL of the code review REST API (without /api/v1)",
    )
    api_timeout_seconds: float = Field(
        30.0,
        description="Timeout for calls to the code review API",
    )

    # Status polling
    status_poll_interval_seconds: float = Field(
        10.0,
        description="How often in-flight review statuses are re-checked",
    )

    # Presentation
    service_name: str = Field("AI Code Review")

    # Server
    host: str = Field("0.0.0.0")
    port: int = Field(3000)
    log_level: str = Field("INFO")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
