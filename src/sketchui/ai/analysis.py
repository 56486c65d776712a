"""Sketch analysis - turn one annotation into a described intent."""

from dataclasses import dataclass
from typing import Any

from pydantic import Field, ValidationError, field_validator
from returns.result import Failure, Result, Success

from sketchui.core import get_logger
from sketchui.core.errors import CollaboratorError, SchemaParseError, SketchUIError
from sketchui.core.json import JSONParseError, extract_json
from sketchui.schema.models import CamelModel
from sketchui.sketch.models import SketchElement, SketchIntent

from .client import GenerationClient, GenerationRequest
from .prompts import SKETCH_ANALYSIS_SYSTEM, sketch_analysis_prompt

logger = get_logger(__name__)


class SketchAnalysis(CamelModel):
    """What an annotation asks for."""

    sketch_id: str = ""
    description: str = "Unknown sketch"
    action: SketchIntent = SketchIntent.NOTE
    confidence: float = Field(default=50, ge=0, le=100)
    target_element: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)

    @field_validator("description", mode="before")
    @classmethod
    def _description_or_unknown(cls, v: Any) -> Any:
        return v if isinstance(v, str) and v.strip() else "Unknown sketch"

    @field_validator("action", mode="before")
    @classmethod
    def _known_action_or_note(cls, v: Any) -> Any:
        try:
            return SketchIntent(v)
        except ValueError:
            return SketchIntent.NOTE

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, v: Any) -> Any:
        if not isinstance(v, (int, float)) or isinstance(v, bool):
            return 50
        return min(max(v, 0), 100)

    @field_validator("parameters", mode="before")
    @classmethod
    def _parameters_or_empty(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}


@dataclass
class SketchContext:
    """What the analyzer and planner know about the page being annotated."""

    current_code: str
    original_prompt: str
    canvas_size: tuple[int, int] = (1280, 800)
    existing_sketches: int = 0


class SketchAnalyzer:
    """Asks the generation client to interpret one annotation."""

    def __init__(self, client: GenerationClient) -> None:
        self.client = client

    async def analyze(
        self, sketch: SketchElement, context: SketchContext
    ) -> Result[SketchAnalysis, SketchUIError]:
        """
        Analyze a single annotation.

        Collaborator and parse failures come back as ``Failure``.
        ``MissingCredentialsError`` propagates.
        """
        request = GenerationRequest(
            system=SKETCH_ANALYSIS_SYSTEM,
            user=sketch_analysis_prompt(
                sketch,
                context.original_prompt,
                context.current_code,
                context.canvas_size,
                context.existing_sketches,
            ),
            json_mode=True,
        )

        try:
            response = await self.client.generate(request)
        except CollaboratorError as e:
            return Failure(e)

        try:
            data = extract_json(response.text)
            analysis = SketchAnalysis.model_validate({**data, "sketchId": sketch.id})
        except (JSONParseError, ValidationError) as e:
            return Failure(SchemaParseError(f"Unable to parse sketch analysis: {e}"))

        logger.debug("sketch_analyzed", sketch_id=sketch.id, action=analysis.action.value)
        return Success(analysis)
