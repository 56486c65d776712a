"""Tests for the analyze -> plan -> execute batch."""

import json
from unittest.mock import AsyncMock, call, patch

import pytest

from sketchui.ai.analysis import SketchAnalyzer
from sketchui.ai.executor import ActionExecutor
from sketchui.ai.orchestrator import ActionOrchestrator, BatchState
from sketchui.ai.planner import ActionPlanner
from sketchui.core.errors import CollaboratorError, MissingCredentialsError, NoActiveSessionError
from sketchui.schema.defaults import create_default_schema
from sketchui.schema.parser import parse_schema
from sketchui.sketch.actions import ActionStatus
from sketchui.sketch.models import SketchIntent

CIRCLE = {"type": "circle", "points": [{"x": 100, "y": 40}, {"x": 160, "y": 90}], "text": "logo"}

ANALYSIS = json.dumps(
    {"description": "Add a logo to the header", "action": "add_component", "confidence": 80, "targetElement": "hero"}
)

PLAN = json.dumps(
    [
        {"type": "add_component", "description": "Add logo", "parameters": {"componentType": "image"}},
        {"type": "modify_component", "description": "Tighten header", "targetElement": "hero"},
        {"type": "add_feature", "description": "Sticky header"},
    ]
)


def _revision(title: str) -> str:
    schema = create_default_schema("Revision")
    schema.metadata.title = title
    return schema.to_json()


def _orchestrator(store, client, **delays) -> ActionOrchestrator:
    delays = {"analysis_delay": 0, "action_delay": 0, **delays}
    return ActionOrchestrator(
        store,
        SketchAnalyzer(client),
        ActionPlanner(client),
        ActionExecutor(client),
        **delays,
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_partial_batch(session_store, scripted_client):
    sketch_id = session_store.add_sketch(CIRCLE)
    client = scripted_client([ANALYSIS, PLAN, _revision("One"), "not json", _revision("Three")])
    original = parse_schema(session_store.current_session.generated_code).unwrap()

    outcome = await _orchestrator(session_store, client).run()

    assert outcome.state is BatchState.PARTIALLY_COMPLETED
    assert [r.success for r in outcome.results] == [True, False, True]
    assert outcome.succeeded == 2
    assert outcome.changes == ["Added image: Add logo", "Added feature: Sticky header"]
    assert outcome.batch_id.startswith("batch_")

    # The document keeps its identity and moves forward
    assert outcome.schema.id == original.id
    assert outcome.schema.version > original.version
    assert outcome.schema.metadata.title == "Three"
    stored = parse_schema(session_store.current_session.generated_code).unwrap()
    assert stored == outcome.schema

    statuses = [a.status for a in session_store.get_actions()]
    assert statuses == [ActionStatus.COMPLETED, ActionStatus.FAILED, ActionStatus.COMPLETED]
    assert [a.status for a in outcome.actions] == statuses

    (sketch,) = session_store.get_sketches()
    assert sketch.id == sketch_id
    assert sketch.description == "Add a logo to the header"
    assert sketch.action is SketchIntent.ADD_COMPONENT


@pytest.mark.unit
@pytest.mark.asyncio
async def test_collaborator_error_fails_only_its_action(session_store, scripted_client):
    session_store.add_sketch(CIRCLE)
    outage = CollaboratorError("OpenRouter API error: 503", status_code=503)
    client = scripted_client([ANALYSIS, PLAN, _revision("One"), outage, _revision("Three")])

    outcome = await _orchestrator(session_store, client).run()

    assert outcome.state is BatchState.PARTIALLY_COMPLETED
    assert [r.success for r in outcome.results] == [True, False, True]
    assert "503" in outcome.results[1].error
    assert outcome.schema.metadata.title == "Three"
    assert [a.status for a in outcome.actions] == [
        ActionStatus.COMPLETED,
        ActionStatus.FAILED,
        ActionStatus.COMPLETED,
    ]
    assert [a.status for a in session_store.get_actions()] == [a.status for a in outcome.actions]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_analyzed_sketches_are_not_reprocessed(session_store, scripted_client):
    session_store.add_sketch(CIRCLE)
    client = scripted_client([ANALYSIS, "[]"])
    orchestrator = _orchestrator(session_store, client)

    first = await orchestrator.run()
    second = await orchestrator.run()

    assert first.state is BatchState.COMPLETED
    assert first.results == []
    assert second.analyses == []
    assert len(client.requests) == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_empty_batch_keeps_document(session_store, fake_client, default_schema):
    code_before = session_store.current_session.generated_code

    outcome = await _orchestrator(session_store, fake_client).run()

    assert outcome.state is BatchState.COMPLETED
    assert outcome.schema.id == default_schema.id
    assert fake_client.requests == []
    assert session_store.current_session.generated_code == code_before


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_analysis_leaves_sketch_pending(session_store, scripted_client):
    session_store.add_sketch(CIRCLE)

    outcome = await _orchestrator(session_store, scripted_client(["gibberish"])).run()

    assert outcome.analyses == []
    assert outcome.state is BatchState.COMPLETED
    assert not session_store.get_sketches()[0].is_analyzed


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_session_content_uses_default_document(store, scripted_client):
    store.create_session("Coffee shop")
    store.add_sketch(CIRCLE)
    client = scripted_client([ANALYSIS, json.dumps([{"type": "add_feature", "description": "Menu"}]), _revision("X")])

    outcome = await _orchestrator(store, client).run()

    assert outcome.state is BatchState.COMPLETED
    assert outcome.schema.root.id == "root"
    assert parse_schema(store.current_session.generated_code).unwrap().id == outcome.schema.id


@pytest.mark.unit
@pytest.mark.asyncio
async def test_calls_are_paced(session_store, scripted_client):
    session_store.add_sketch(CIRCLE)
    session_store.add_sketch(CIRCLE)
    plan = json.dumps(
        [{"type": "add_feature", "description": "A"}, {"type": "add_feature", "description": "B"}]
    )
    client = scripted_client([ANALYSIS, ANALYSIS, plan, _revision("A"), _revision("B")])

    with patch("sketchui.ai.orchestrator.asyncio.sleep", new_callable=AsyncMock) as sleep:
        outcome = await _orchestrator(session_store, client, analysis_delay=0.5, action_delay=1.0).run()

    assert outcome.succeeded == 2
    assert sleep.await_args_list == [call(0.5), call(1.0)]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_credentials_aborts(session_store, scripted_client):
    session_store.add_sketch(CIRCLE)
    client = scripted_client([MissingCredentialsError("GEMINI_API_KEY not configured")])

    with pytest.raises(MissingCredentialsError):
        await _orchestrator(session_store, client).run()

    assert session_store.get_actions() == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_requires_session(store, fake_client):
    with pytest.raises(NoActiveSessionError):
        await _orchestrator(store, fake_client).run()
