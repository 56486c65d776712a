"""Input validation for generation requests and AI-produced payloads."""

import sys
from typing import Any

from pydantic import BaseModel, Field, field_validator, ConfigDict

from .json import JSONParseError


# Validation limits
MAX_SCHEMA_SIZE = 512 * 1024  # 512KB
MAX_JSON_DEPTH = 64
MAX_PROMPT_LENGTH = 10_000
MAX_INSTRUCTION_LENGTH = 10_000


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class SchemaGenerationRequest(RequestValidator):
    """Validated schema generation request."""

    prompt: str = Field(default="", max_length=MAX_PROMPT_LENGTH)
    style: str = Field(default="modern")
    color_scheme: str = Field(default="blue and white")
    layout: str = Field(default="single-page")

    @field_validator("prompt")
    @classmethod
    def strip_prompt(cls, v: str) -> str:
        """Empty prompts are allowed and fall back to "Untitled"."""
        return v.strip() or "Untitled"


class SchemaEditRequest(RequestValidator):
    """Validated schema edit instruction."""

    instruction: str = Field(
        default="Apply small, targeted change. Do not regenerate entire layout.",
        max_length=MAX_INSTRUCTION_LENGTH,
    )

    @field_validator("instruction")
    @classmethod
    def validate_instruction(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            return "Apply small, targeted change. Do not regenerate entire layout."
        return stripped


def validate_json_size(data: str, max_size: int = MAX_SCHEMA_SIZE, name: str = "JSON") -> None:
    """
    Validate JSON size before decoding.

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = sys.getsizeof(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
