from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    provider: str = "gemini"
    api_key: str = ""
    model_name: str = ""
    openai_compatible_base_url: str = ""
    request_timeout_seconds: int = Field(default=60, gt=0)

    analysis_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    similarity_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    chat_temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
