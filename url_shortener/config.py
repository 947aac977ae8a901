"""Configuration management for URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="127.0.0.1",
        description="Host to bind to"
    )

    port: int = Field(
        default=18080,
        description="Port to listen on"
    )

    # URL shortener settings
    base_url: str = Field(
        default="http://127.0.0.1:18080",
        description="Externally visible base URL used to build short links"
    )

    code_bytes: int = Field(
        default=8,
        ge=4,
        description="Random bytes per short code (8 = 64 bits, 11 characters)"
    )

    max_collision_retries: int = Field(
        default=5,
        ge=0,
        description="Retries on short code collision before widening the code space"
    )

    cors_max_age: int = Field(
        default=604800,
        description="Seconds clients may cache CORS preflight responses"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
