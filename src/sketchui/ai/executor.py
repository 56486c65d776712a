"""Action execution - apply planned actions to the current document."""

import asyncio
from dataclasses import dataclass, field

from returns.result import Success

from sketchui.core import get_logger
from sketchui.core.errors import CollaboratorError
from sketchui.schema.models import UISchema
from sketchui.schema.parser import parse_schema
from sketchui.sketch.actions import (
    AddComponentAction,
    AddFeatureAction,
    CreatePageAction,
    ModifyComponentAction,
    SketchAction,
    parameters_dict,
)

from .client import GenerationClient, GenerationRequest
from .prompts import ACTION_EXECUTION_SYSTEM, action_execution_prompt

logger = get_logger(__name__)


@dataclass
class ActionResult:
    """Outcome of one action. ``updated_schema`` is set only on success."""

    action_id: str
    success: bool
    updated_schema: UISchema | None = None
    changes: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass
class ExecutionContext:
    current_schema: UISchema
    original_prompt: str


def describe_change(action: SketchAction) -> str:
    """Change-log line for a successfully applied action."""
    match action:
        case CreatePageAction(parameters=params):
            return f"Created new page: {params.page_name}"
        case AddComponentAction(parameters=params):
            return f"Added {params.component_type or 'component'}: {action.description}"
        case ModifyComponentAction(target_element=target):
            return f"Modified {target or 'component'}: {action.description}"
        case AddFeatureAction():
            return f"Added feature: {action.description}"
        case _:
            raise TypeError(f"Unknown action type: {type(action).__name__}")


class ActionExecutor:
    """Sends one action at a time to the edit collaborator."""

    def __init__(self, client: GenerationClient) -> None:
        self.client = client

    async def execute(self, action: SketchAction, context: ExecutionContext) -> ActionResult:
        """
        Ask for an updated document implementing ``action``.

        Collaborator and parse failures become ``success=False`` results.
        ``MissingCredentialsError`` propagates.
        """
        request = GenerationRequest(
            system=ACTION_EXECUTION_SYSTEM,
            user=action_execution_prompt(
                action.type,
                action.description,
                action.target_element,
                parameters_dict(action),
                context.original_prompt,
                context.current_schema.to_json(),
            ),
            json_mode=True,
        )

        try:
            response = await self.client.generate(request)
        except CollaboratorError as e:
            logger.warning("action_failed", action_id=action.id, type=action.type, error=str(e))
            return ActionResult(action_id=action.id, success=False, error=str(e))

        result = parse_schema(response.text)
        match result:
            case Success(schema):
                return ActionResult(
                    action_id=action.id,
                    success=True,
                    updated_schema=schema,
                    changes=[describe_change(action)],
                )
            case _:
                error = result.failure()
                logger.warning("action_failed", action_id=action.id, type=action.type, error=str(error))
                return ActionResult(action_id=action.id, success=False, error=str(error))

    async def execute_plan(
        self,
        actions: list[SketchAction],
        context: ExecutionContext,
        delay: float = 0.0,
    ) -> list[ActionResult]:
        """
        Execute ``actions`` strictly in order, pausing ``delay`` seconds between them.

        Each success becomes the current document for the next action.
        A failure never stops the remaining actions.
        """
        results: list[ActionResult] = []
        current = context.current_schema

        for index, action in enumerate(actions):
            if index and delay:
                await asyncio.sleep(delay)

            result = await self.execute(action, ExecutionContext(current, context.original_prompt))
            results.append(result)

            if result.success and result.updated_schema is not None:
                current = result.updated_schema

        return results
