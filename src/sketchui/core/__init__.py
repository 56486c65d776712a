"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    SchemaGenerationRequest,
    SchemaEditRequest,
    validate_json_size,
    validate_json_depth,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    extract_json,
    extract_json_array,
    safe_json_dumps,
    JSONParseError,
)
from .hash import Algorithm, hash_string, hash_fields
from .cache import LRUCache, Stats
from .errors import (
    SketchUIError,
    CollaboratorError,
    MissingCredentialsError,
    SchemaParseError,
    NoActiveSessionError,
    InvalidTransitionError,
)
from .id import now_ms


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "SchemaGenerationRequest",
    "SchemaEditRequest",
    "validate_json_size",
    "validate_json_depth",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "extract_json_array",
    "safe_json_dumps",
    "JSONParseError",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_fields",
    # Caching
    "LRUCache",
    "Stats",
    # Errors
    "SketchUIError",
    "CollaboratorError",
    "MissingCredentialsError",
    "SchemaParseError",
    "NoActiveSessionError",
    "InvalidTransitionError",
    # Clock
    "now_ms",
]
