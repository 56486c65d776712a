"""Turn AI-produced text into UI documents.

Parsing returns ``Result[UISchema, SchemaParseError]``; the fallback to a
default document is the separate, explicit ``schema_or_default`` policy.
"""

from typing import Any

from pydantic import ValidationError
from returns.result import Failure, Result, Success

from sketchui.core import get_logger
from sketchui.core.errors import SchemaParseError
from sketchui.core.json import JSONParseError, extract_json
from sketchui.core.validate import validate_json_depth, validate_json_size

from .defaults import create_default_schema
from .models import UISchema, UISchemaNode

logger = get_logger(__name__)


def _looks_like_node(data: dict[str, Any]) -> bool:
    return "root" not in data and "type" in data and ("children" in data or "props" in data)


def parse_schema_dict(data: dict[str, Any]) -> Result[UISchema, SchemaParseError]:
    """
    Validate a decoded JSON object as a document.

    A bare node object (no ``root`` key) is accepted and wrapped as the root
    of a fresh document.
    """
    try:
        validate_json_depth(data)
        if _looks_like_node(data):
            return Success(UISchema(root=UISchemaNode.model_validate(data)))
        return Success(UISchema.model_validate(data))
    except JSONParseError as e:
        return Failure(SchemaParseError(str(e)))
    except ValidationError as e:
        details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        return Failure(SchemaParseError(f"Invalid UI schema ({len(details)} problems)", details))


def parse_schema(text: str) -> Result[UISchema, SchemaParseError]:
    """Extract, decode and validate a document from model output."""
    if not text or not text.strip():
        return Failure(SchemaParseError("Empty response"))
    try:
        validate_json_size(text, name="UI schema")
        data = extract_json(text, repair=True)
    except JSONParseError as e:
        return Failure(SchemaParseError(f"Invalid JSON: {e}"))
    return parse_schema_dict(data)


def schema_or_default(result: Result[UISchema, SchemaParseError], prompt: str) -> UISchema:
    """Fallback policy: a parse failure yields the default document for ``prompt``."""
    match result:
        case Success(schema):
            return schema
        case _:
            error = result.failure()
            logger.warning("schema_parse_fallback", error=str(error), details=error.details[:5])
            return create_default_schema(prompt or "Untitled")
