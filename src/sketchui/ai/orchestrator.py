"""
Action Orchestrator - annotations in, new document version out.

One batch runs analyze -> plan -> execute against the current session:

    unanalyzed -> analyzed -> planned -> executing -> completed | partially_completed

Calls are paced with ``analysis_delay`` / ``action_delay`` seconds between
consecutive collaborator requests. Only ``MissingCredentialsError`` escapes.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum

from returns.result import Success

from sketchui.core import LogContext, get_logger
from sketchui.core.errors import NoActiveSessionError
from sketchui.core.id import new_batch_id
from sketchui.schema.editor import SchemaEditor
from sketchui.schema.models import UISchema
from sketchui.schema.parser import parse_schema, schema_or_default
from sketchui.sketch.actions import ActionStatus, SketchAction
from sketchui.sketch.models import SketchElement
from sketchui.sketch.store import SketchStore

from .analysis import SketchAnalysis, SketchAnalyzer, SketchContext
from .executor import ActionExecutor, ActionResult, ExecutionContext
from .planner import ActionPlanner

logger = get_logger(__name__)


class BatchState(str, Enum):
    UNANALYZED = "unanalyzed"
    ANALYZED = "analyzed"
    PLANNED = "planned"
    EXECUTING = "executing"
    COMPLETED = "completed"
    PARTIALLY_COMPLETED = "partially_completed"


@dataclass
class BatchOutcome:
    """Everything one batch produced."""

    batch_id: str
    state: BatchState
    schema: UISchema
    analyses: list[SketchAnalysis] = field(default_factory=list)
    actions: list[SketchAction] = field(default_factory=list)
    results: list[ActionResult] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.success)


class ActionOrchestrator:
    """Drives one annotation batch through analysis, planning and execution."""

    def __init__(
        self,
        store: SketchStore,
        analyzer: SketchAnalyzer,
        planner: ActionPlanner,
        executor: ActionExecutor,
        analysis_delay: float = 0.5,
        action_delay: float = 1.0,
    ) -> None:
        self.store = store
        self.analyzer = analyzer
        self.planner = planner
        self.executor = executor
        self.analysis_delay = analysis_delay
        self.action_delay = action_delay

    async def analyze_pending(self, context: SketchContext) -> list[SketchAnalysis]:
        """
        Analyze every annotation that has no description yet, one at a time.

        A failed analysis is logged and leaves its annotation unanalyzed.
        """
        pending: list[SketchElement] = [s for s in self.store.get_sketches() if not s.is_analyzed]
        analyses: list[SketchAnalysis] = []

        for index, sketch in enumerate(pending):
            if index and self.analysis_delay:
                await asyncio.sleep(self.analysis_delay)

            result = await self.analyzer.analyze(sketch, context)
            match result:
                case Success(analysis):
                    self.store.update_sketch_description(sketch.id, analysis.description, analysis.action)
                    analyses.append(analysis)
                case _:
                    logger.warning("analysis_failed", sketch_id=sketch.id, error=str(result.failure()))

        return analyses

    async def run(self, canvas_size: tuple[int, int] = (1280, 800)) -> BatchOutcome:
        """
        Process the current session's new annotations.

        Raises:
            NoActiveSessionError: No current session
            MissingCredentialsError: The generation client has no API key
        """
        session = self.store.current_session
        if session is None:
            raise NoActiveSessionError("No active session")

        batch_id = new_batch_id()
        with LogContext(batch_id=batch_id, session_id=session.id):
            current = schema_or_default(parse_schema(session.generated_code), session.prompt)
            context = SketchContext(
                current_code=session.generated_code,
                original_prompt=session.prompt,
                canvas_size=canvas_size,
                existing_sketches=len(session.sketches),
            )

            state = BatchState.UNANALYZED
            analyses = await self.analyze_pending(context)
            state = BatchState.ANALYZED
            logger.info("batch_analyzed", state=state.value, analyses=len(analyses))

            actions = await self.planner.plan(analyses, context)
            for action in actions:
                self.store.add_action(action)
            state = BatchState.PLANNED
            logger.info("batch_planned", state=state.value, actions=len(actions))

            state = BatchState.EXECUTING
            results = await self.executor.execute_plan(
                actions,
                ExecutionContext(current_schema=current, original_prompt=session.prompt),
                delay=self.action_delay,
            )
            for action, result in zip(actions, results):
                status = ActionStatus.COMPLETED if result.success else ActionStatus.FAILED
                action.mark(status)
                self.store.update_action_status(action.id, status)

            outcome = BatchOutcome(
                batch_id=batch_id,
                state=BatchState.COMPLETED,
                schema=current,
                analyses=analyses,
                actions=actions,
                results=results,
            )

            last_success = next(
                (r for r in reversed(results) if r.success and r.updated_schema is not None), None
            )
            if last_success is not None:
                merged = SchemaEditor(current).accept_revision(last_success.updated_schema)
                outcome.schema = merged.updated_schema
                outcome.warnings = merged.warnings
                self.store.update_generated_code(merged.updated_schema.to_json())

            for result in results:
                outcome.changes.extend(result.changes)

            if outcome.succeeded < len(results):
                outcome.state = BatchState.PARTIALLY_COMPLETED

            logger.info(
                "batch_finished",
                state=outcome.state.value,
                actions=len(results),
                succeeded=outcome.succeeded,
                version=outcome.schema.version,
            )
            return outcome
