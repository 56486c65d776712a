"""Action planning - ordered actions from a batch of analyses."""

from typing import Any

from pydantic import ValidationError

from sketchui.core import get_logger
from sketchui.core.errors import CollaboratorError
from sketchui.core.json import JSONParseError, extract_json, extract_json_array, strip_code_fences
from sketchui.sketch.actions import SketchAction, action_from_plan

from .analysis import SketchAnalysis, SketchContext
from .client import GenerationClient, GenerationRequest
from .prompts import ACTION_PLAN_SYSTEM, action_plan_prompt

logger = get_logger(__name__)


def parse_plan(text: str) -> list[SketchAction]:
    """
    Decode planner output into fresh pending actions.

    Accepts a bare JSON array or an object with an ``actions`` array.
    Entries with an unknown type or malformed parameters are dropped.

    Raises:
        JSONParseError: No JSON array or object could be decoded
    """
    if strip_code_fences(text).startswith("{"):
        entries: Any = extract_json(text).get("actions")
        if not isinstance(entries, list):
            raise JSONParseError("Plan object has no actions array")
    else:
        entries = extract_json_array(text)

    actions: list[SketchAction] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("plan_entry_skipped", index=index, reason="not an object")
            continue
        try:
            actions.append(action_from_plan(entry))
        except ValidationError as e:
            logger.warning("plan_entry_skipped", index=index, type=entry.get("type"), errors=e.error_count())
    return actions


class ActionPlanner:
    """Converts analyses into an ordered action plan."""

    def __init__(self, client: GenerationClient) -> None:
        self.client = client

    async def plan(self, analyses: list[SketchAnalysis], context: SketchContext) -> list[SketchAction]:
        """Empty on collaborator or parse failure."""
        if not analyses:
            return []

        request = GenerationRequest(
            system=ACTION_PLAN_SYSTEM,
            user=action_plan_prompt(analyses, context.original_prompt, context.current_code),
            json_mode=True,
        )

        try:
            response = await self.client.generate(request)
            actions = parse_plan(response.text)
        except CollaboratorError as e:
            logger.error("plan_generation_failed", error=str(e))
            return []
        except JSONParseError as e:
            logger.error("plan_parse_failed", error=str(e))
            return []

        logger.info("plan_generated", analyses=len(analyses), actions=len(actions))
        return actions
