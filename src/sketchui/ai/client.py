"""
Generation clients.

Both providers expose ``async generate(request) -> response``. The SDK and
HTTP calls are blocking, so they run in the default executor.
"""

import asyncio
import base64
from dataclasses import dataclass
from typing import Any, Protocol

import google.generativeai as genai
import httpx
import pybreaker

from sketchui.core import get_logger
from sketchui.core.config import Settings
from sketchui.core.errors import CollaboratorError, MissingCredentialsError

from .config import GeminiConfig, OpenRouterConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImagePayload:
    """Raw image bytes attached to a multimodal request."""

    data: bytes
    mime_type: str = "image/png"

    @classmethod
    def from_data_url(cls, url: str) -> "ImagePayload":
        """Accept ``data:image/png;base64,...`` or bare base64."""
        header, _, encoded = url.rpartition(",")
        mime_type = "image/png"
        if header.startswith("data:"):
            mime_type = header[5:].split(";", 1)[0] or mime_type
        return cls(data=base64.b64decode(encoded), mime_type=mime_type)

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('ascii')}"


@dataclass(frozen=True)
class GenerationRequest:
    system: str
    user: str
    image: ImagePayload | None = None
    json_mode: bool = False


@dataclass(frozen=True)
class GenerationResponse:
    text: str
    model: str = ""


class GenerationClient(Protocol):
    """Text or multimodal generation backend."""

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """
        Raises:
            MissingCredentialsError: No API key configured
            CollaboratorError: Transport, status, body or empty-content failure
        """
        ...


class GeminiClient:
    """Gemini API wrapper."""

    def __init__(self, config: GeminiConfig) -> None:
        self.config = config
        self._configured = False

    def _model(self, request: GenerationRequest) -> genai.GenerativeModel:
        if not self._configured:
            genai.configure(api_key=self.config.api_key)
            self._configured = True

        generation_config = genai.GenerationConfig(
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
            top_p=self.config.top_p,
            top_k=self.config.top_k,
            response_mime_type="application/json" if request.json_mode else None,
        )
        return genai.GenerativeModel(
            model_name=self.config.model_name,
            generation_config=generation_config,
            system_instruction=request.system or None,
        )

    def invoke(self, request: GenerationRequest) -> GenerationResponse:
        """Blocking generation."""
        if not self.config.api_key:
            raise MissingCredentialsError("GEMINI_API_KEY not configured")

        contents: list[Any] = [request.user]
        if request.image is not None:
            contents.append({"mime_type": request.image.mime_type, "data": request.image.data})

        try:
            response = self._model(request).generate_content(contents)
            text = response.text
        except Exception as e:
            logger.error("invoke_error", model=self.config.model_name, error=str(e))
            raise CollaboratorError(f"Gemini request failed: {e}") from e

        if not text or not text.strip():
            raise CollaboratorError("No content returned from Gemini")
        return GenerationResponse(text=text, model=self.config.model_name)

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Async generation (runs sync API in thread pool)."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.invoke, request)


class OpenRouterClient:
    """
    OpenRouter chat-completions client with circuit breaker protection.

    Non-success statuses count as breaker failures; once open, calls fail
    fast until ``reset_timeout`` passes.
    """

    def __init__(self, config: OpenRouterConfig, client: httpx.Client | None = None) -> None:
        self.config = config
        self._client = client or httpx.Client(timeout=config.timeout)

        class BreakerListener(pybreaker.CircuitBreakerListener):
            """Listener for circuit breaker state changes."""

            def state_change(self, cb, old_state, new_state):
                logger.warning(
                    "breaker_state_change",
                    breaker=cb.name,
                    from_state=str(old_state),
                    to_state=str(new_state),
                )

        self._breaker = pybreaker.CircuitBreaker(
            fail_max=config.fail_max,
            reset_timeout=config.reset_timeout,
            name="openrouter-http",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", url=config.url, model=config.model_name)

    def _body(self, request: GenerationRequest) -> dict[str, Any]:
        user_content: Any = request.user
        if request.image is not None:
            user_content = [
                {"type": "text", "text": request.user},
                {"type": "image_url", "image_url": {"url": request.image.to_data_url()}},
            ]

        body: dict[str, Any] = {
            "model": self.config.model_name,
            "messages": [
                {"role": "system", "content": request.system},
                {"role": "user", "content": user_content},
            ],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        if request.json_mode:
            body["response_format"] = {"type": "json_object"}
        return body

    def invoke(self, request: GenerationRequest) -> GenerationResponse:
        """Blocking generation."""
        if not self.config.api_key:
            raise MissingCredentialsError("Missing OPENROUTER_API_KEY")

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "HTTP-Referer": self.config.site_url,
            "X-Title": self.config.app_title,
        }
        body = self._body(request)

        # Execute with circuit breaker protection
        def _make_request() -> httpx.Response:
            response = self._client.post(self.config.url, json=body, headers=headers)
            response.raise_for_status()
            return response

        try:
            response = self._breaker.call(_make_request)
        except pybreaker.CircuitBreakerError as e:
            logger.error("generate_failed", error="Circuit breaker open - generation service unavailable")
            raise CollaboratorError("Circuit breaker open - generation service unavailable") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("http_status_error", status=status)
            raise CollaboratorError(e.response.text or f"OpenRouter error {status}", status) from e
        except httpx.HTTPError as e:
            logger.warning("http_error", error=str(e))
            raise CollaboratorError(f"OpenRouter transport error: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CollaboratorError("Malformed response body from OpenRouter", response.status_code) from e

        text = _message_content(data)
        if not text:
            raise CollaboratorError("No content returned from OpenRouter", response.status_code)
        return GenerationResponse(text=text, model=str(data.get("model") or self.config.model_name))

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.invoke, request)

    def close(self) -> None:
        self._client.close()


def _message_content(data: Any) -> str | None:
    """``choices[0].message.content`` or None."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) and content.strip() else None


def create_generation_client(settings: Settings) -> GenerationClient:
    """Build the client for the configured provider."""
    if settings.provider == "openrouter":
        return OpenRouterClient(OpenRouterConfig.from_settings(settings))
    return GeminiClient(GeminiConfig.from_settings(settings))
