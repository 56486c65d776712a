"""Generation clients and the sketch-to-action pipeline."""

from .config import GeminiConfig, OpenRouterConfig
from .client import (
    ImagePayload,
    GenerationRequest,
    GenerationResponse,
    GenerationClient,
    GeminiClient,
    OpenRouterClient,
    create_generation_client,
)
from .analysis import SketchAnalysis, SketchContext, SketchAnalyzer
from .planner import ActionPlanner, parse_plan
from .executor import ActionExecutor, ActionResult, ExecutionContext
from .generation import SchemaGenerator, SchemaGenerationResponse, SchemaEditResponse
from .orchestrator import ActionOrchestrator, BatchState, BatchOutcome

__all__ = [
    "GeminiConfig",
    "OpenRouterConfig",
    "ImagePayload",
    "GenerationRequest",
    "GenerationResponse",
    "GenerationClient",
    "GeminiClient",
    "OpenRouterClient",
    "create_generation_client",
    "SketchAnalysis",
    "SketchContext",
    "SketchAnalyzer",
    "ActionPlanner",
    "parse_plan",
    "ActionExecutor",
    "ActionResult",
    "ExecutionContext",
    "SchemaGenerator",
    "SchemaGenerationResponse",
    "SchemaEditResponse",
    "ActionOrchestrator",
    "BatchState",
    "BatchOutcome",
]
