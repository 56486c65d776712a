"""
Generation collaborator configuration.
Immutable per-provider settings built from ``Settings``.
"""

from pydantic import BaseModel, ConfigDict, Field

from sketchui.core.config import Settings


class GeminiConfig(BaseModel):
    """Type-safe Gemini API configuration."""

    model_config = ConfigDict(frozen=True)  # Immutable for thread safety

    model_name: str = Field(default="gemini-2.5-flash")
    api_key: str = Field(default="")

    # Generation parameters
    temperature: float = Field(default=0.6, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=1)
    top_p: float = Field(default=0.95, ge=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1, le=100)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiConfig":
        return cls(
            model_name=settings.gemini_model,
            api_key=settings.gemini_api_key,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )


class OpenRouterConfig(BaseModel):
    """Type-safe OpenRouter chat-completions configuration."""

    model_config = ConfigDict(frozen=True)

    model_name: str = Field(default="google/gemini-2.0-flash-exp")
    api_key: str = Field(default="")
    url: str = Field(default="https://openrouter.ai/api/v1/chat/completions")
    site_url: str = Field(default="http://localhost:3000")
    app_title: str = Field(default="SketchUI")
    timeout: float = Field(default=60.0, gt=0)

    temperature: float = Field(default=0.6, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=1)

    # Circuit breaker
    fail_max: int = Field(default=5, ge=1)
    reset_timeout: int = Field(default=30, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenRouterConfig":
        return cls(
            model_name=settings.openrouter_model,
            api_key=settings.openrouter_api_key,
            url=settings.openrouter_url,
            site_url=settings.site_url,
            app_title=settings.app_title,
            timeout=settings.request_timeout,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
