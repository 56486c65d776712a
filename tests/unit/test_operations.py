"""Tests for edit operation wire forms."""

import pytest
from pydantic import ValidationError

from sketchui.schema.models import NodeType
from sketchui.schema.operations import (
    AddComponentOperation,
    MoveComponentOperation,
    RemoveComponentOperation,
    UpdateStyleOperation,
    parse_operations,
)


@pytest.mark.unit
def test_parse_wire_operations():
    operations = parse_operations(
        [
            {"type": "update_style", "nodeId": "hero", "data": {"color": "#000000"}},
            {"type": "add_component", "nodeId": "root", "data": {"type": "card", "function": "Pricing"}},
            {"type": "remove_component", "nodeId": "nav"},
            {"type": "move_component", "nodeId": "nav", "data": {"parentId": "hero", "index": 1}},
        ]
    )

    assert [type(op) for op in operations] == [
        UpdateStyleOperation,
        AddComponentOperation,
        RemoveComponentOperation,
        MoveComponentOperation,
    ]
    assert operations[1].data.type == NodeType.CARD
    assert operations[3].data.parent_id == "hero"
    assert operations[3].data.index == 1


@pytest.mark.unit
def test_wire_form_uses_camel_case():
    operation = MoveComponentOperation(node_id="nav", data={"parent_id": "hero"})

    assert operation.to_wire() == {
        "type": "move_component",
        "nodeId": "nav",
        "data": {"parentId": "hero", "index": None},
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        {"type": "teleport", "nodeId": "hero"},
        {"type": "update_function", "nodeId": "hero"},
        {"type": "add_component", "nodeId": "root", "data": {"type": "carousel"}},
        {"nodeId": "hero", "data": "x"},
        {"type": "move_component", "nodeId": "nav", "data": {"parentId": "root", "index": -1}},
    ],
)
def test_malformed_operations_raise(raw):
    with pytest.raises(ValidationError):
        parse_operations([raw])
