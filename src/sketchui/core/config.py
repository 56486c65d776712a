"""Configuration Management."""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SKETCHUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Generation collaborator
    provider: Literal["gemini", "openrouter"] = Field(
        default="gemini", description="Text/multimodal generation provider"
    )
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""), description="Gemini API key"
    )
    gemini_model: str = Field(default="gemini-2.5-flash", description="Gemini model name")
    openrouter_api_key: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_API_KEY", ""),
        description="OpenRouter API key",
    )
    openrouter_model: str = Field(
        default="google/gemini-2.0-flash-exp", description="OpenRouter model name"
    )
    openrouter_url: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="OpenRouter chat completions endpoint",
    )
    site_url: str = Field(default="http://localhost:3000", description="HTTP-Referer sent to OpenRouter")
    app_title: str = Field(default="SketchUI", description="X-Title sent to OpenRouter")
    request_timeout: float = Field(default=60.0, gt=0, description="Collaborator request timeout")
    temperature: float = Field(default=0.6, ge=0.0, le=2.0, description="Model temperature")
    max_tokens: int = Field(default=4096, gt=0, description="Max output tokens")

    # Orchestrator pacing
    analysis_delay: float = Field(default=0.5, ge=0.0, description="Seconds between sketch analyses")
    action_delay: float = Field(default=1.0, ge=0.0, description="Seconds between plan actions")

    # Annotation store
    store_dir: str = Field(default=".sketchui", description="Directory for the file key-value store")
    store_key: str = Field(default="sketchui-sketch-store", description="Persistence key")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Caching
    enable_cache: bool = Field(default=True, description="Enable generated schema caching")
    cache_size: int = Field(default=100, gt=0, description="Cache max size")
    cache_ttl: int = Field(default=3600, gt=0, description="Cache TTL (seconds)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
