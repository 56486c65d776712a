"""Tests for action execution."""

from unittest.mock import AsyncMock, patch

import pytest

from sketchui.ai.executor import ActionExecutor, ExecutionContext, describe_change
from sketchui.core.errors import CollaboratorError, MissingCredentialsError
from sketchui.schema.defaults import create_default_schema
from sketchui.sketch.actions import (
    AddComponentAction,
    AddFeatureAction,
    CreatePageAction,
    ModifyComponentAction,
)


def _schema_reply(title: str) -> str:
    schema = create_default_schema(title)
    schema.metadata.title = title
    return schema.to_json()


@pytest.mark.unit
@pytest.mark.parametrize(
    "action, expected",
    [
        (CreatePageAction(description="x", parameters={"pageName": "Pricing"}), "Created new page: Pricing"),
        (CreatePageAction(description="x"), "Created new page: New Page"),
        (
            AddComponentAction(description="Logo in nav", parameters={"componentType": "image"}),
            "Added image: Logo in nav",
        ),
        (AddComponentAction(description="Footer"), "Added component: Footer"),
        (ModifyComponentAction(description="Make it blue", target_element="header"), "Modified header: Make it blue"),
        (ModifyComponentAction(description="Make it blue"), "Modified component: Make it blue"),
        (AddFeatureAction(description="Dark mode toggle"), "Added feature: Dark mode toggle"),
    ],
)
def test_describe_change(action, expected):
    assert describe_change(action) == expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_success(scripted_client, default_schema):
    client = scripted_client([_schema_reply("With footer")])
    action = AddComponentAction(
        description="Add a footer", target_element="root", parameters={"componentType": "section", "columns": 3}
    )

    result = await ActionExecutor(client).execute(action, ExecutionContext(default_schema, "Bakery"))

    assert result.success
    assert result.action_id == action.id
    assert result.updated_schema.metadata.title == "With footer"
    assert result.changes == ["Added section: Add a footer"]
    assert result.error is None

    prompt = client.requests[0].user
    assert prompt.startswith("Add this component: Add a footer")
    assert "Target element: root" in prompt
    assert '"columns": 3' in prompt
    assert default_schema.id in prompt


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_unparseable_reply(scripted_client, default_schema):
    result = await ActionExecutor(scripted_client(["not json"])).execute(
        ModifyComponentAction(description="x"), ExecutionContext(default_schema, "Bakery")
    )

    assert not result.success
    assert result.updated_schema is None
    assert result.error


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_collaborator_failure(scripted_client, default_schema):
    result = await ActionExecutor(scripted_client([CollaboratorError("rate limited", 429)])).execute(
        ModifyComponentAction(description="x"), ExecutionContext(default_schema, "Bakery")
    )

    assert not result.success
    assert result.error == "rate limited"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_missing_credentials_propagates(scripted_client, default_schema):
    with pytest.raises(MissingCredentialsError):
        await ActionExecutor(scripted_client([MissingCredentialsError("no key")])).execute(
            ModifyComponentAction(description="x"), ExecutionContext(default_schema, "Bakery")
        )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_plan_chains_documents(scripted_client, default_schema):
    first = _schema_reply("First")
    client = scripted_client([first, "not json", _schema_reply("Third")])
    actions = [
        AddComponentAction(description="one"),
        ModifyComponentAction(description="two"),
        AddFeatureAction(description="three"),
    ]

    with patch("sketchui.ai.executor.asyncio.sleep", new_callable=AsyncMock) as sleep:
        results = await ActionExecutor(client).execute_plan(
            actions, ExecutionContext(default_schema, "Bakery"), delay=1.0
        )

    assert [r.success for r in results] == [True, False, True]
    assert [r.action_id for r in results] == [a.id for a in actions]
    assert sleep.await_count == 2
    sleep.assert_awaited_with(1.0)

    # The failed action and the one after it both see the first result
    assert '"title":"First"' in client.requests[1].user
    assert '"title":"First"' in client.requests[2].user
    assert default_schema.id in client.requests[0].user


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_plan_without_delay_never_sleeps(scripted_client, default_schema):
    client = scripted_client([_schema_reply("A"), _schema_reply("B")])

    with patch("sketchui.ai.executor.asyncio.sleep", new_callable=AsyncMock) as sleep:
        results = await ActionExecutor(client).execute_plan(
            [AddFeatureAction(description="a"), AddFeatureAction(description="b")],
            ExecutionContext(default_schema, "Bakery"),
        )

    assert len(results) == 2
    sleep.assert_not_awaited()
