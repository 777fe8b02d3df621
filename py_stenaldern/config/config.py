from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")
    allowed_origins: str = Field(default="*", description="Comma separated CORS allowed origins")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # OpenRouter (vision + image generation)
    openrouter_api_key: Optional[str] = Field(default=None, description="OpenRouter API key")
    openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1", description="OpenRouter API base URL")
    openrouter_site_name: str = Field(default="https://stenaldern.app", description="HTTP-Referer sent to OpenRouter")
    openrouter_app_title: str = Field(default="Stenaldern App", description="X-Title sent to OpenRouter")
    vision_model: str = Field(default="google/gemini-flash-1.5", description="Model used to describe the uploaded photo")
    image_model: str = Field(default="google/gemini-2.5-flash-image", description="Model used to generate the historical image")
    vision_max_tokens: int = Field(default=400, description="Token limit for the vision description")
    request_timeout_seconds: float = Field(default=120.0, description="Timeout for OpenRouter calls")

    # Elevation lookup
    elevation_api_url: str = Field(
        default="https://api.open-elevation.com/api/v1/lookup",
        description="Open-Elevation compatible lookup endpoint",
    )
    elevation_timeout_seconds: float = Field(default=10.0, description="Timeout for a single elevation lookup")
    elevation_concurrency: int = Field(default=6, description="Max concurrent elevation lookups in batch mode")

    @property
    def cors_origins(self) -> list[str]:
        """Allowed origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


# Instantiate singleton settings object
settings = Settings()
