"""Tests for UI document models and tree helpers."""

import pytest
from pydantic import ValidationError

from sketchui.schema.models import NodeDraft, NodeType, UISchema, UISchemaNode
from sketchui.schema.tree import (
    collect_ids,
    contains,
    count_nodes,
    duplicate_ids,
    find_node,
    find_parent,
    has_node_type,
    hierarchy,
)


@pytest.mark.unit
def test_accepts_camel_and_snake_case():
    schema = UISchema.model_validate(
        {
            "id": "schema_1",
            "root": {"id": "root", "type": "container", "children": []},
            "metadata": {"title": "T", "createdAt": 5, "last_modified": 6},
        }
    )
    assert schema.metadata.created_at == 5
    assert schema.metadata.last_modified == 6


@pytest.mark.unit
def test_null_fields_are_normalized():
    node = UISchemaNode.model_validate(
        {"id": None, "type": "text", "props": None, "style": None, "function": None, "children": None}
    )
    assert node.id == ""
    assert node.children == []
    assert node.props == {}
    assert node.style == {}
    assert node.function == ""


@pytest.mark.unit
def test_known_types_coerce_and_unknown_types_stay_strings():
    assert UISchemaNode.model_validate({"id": "x"}).type is None
    assert UISchemaNode.model_validate({"id": "x", "type": "hero"}).type is NodeType.HERO

    node = UISchemaNode.model_validate({"id": "x", "type": "carousel"})
    assert node.type == "carousel"
    assert not isinstance(node.type, NodeType)
    assert node.to_wire()["type"] == "carousel"


@pytest.mark.unit
def test_draft_requires_type():
    with pytest.raises(ValidationError):
        NodeDraft.model_validate({"props": {}})
    assert NodeDraft.model_validate({"type": "button", "unknown": 1}).type == NodeType.BUTTON


@pytest.mark.unit
def test_to_wire_uses_camel_case(landing_schema):
    wire = landing_schema.to_wire()

    assert set(wire["metadata"]) == {"title", "description", "createdAt", "lastModified"}
    assert wire["root"]["type"] == "container"
    assert wire["root"]["children"][1]["style"] == {"backgroundColor": "#f8fafc"}


@pytest.mark.unit
def test_touch_bumps_version_and_last_modified(landing_schema):
    landing_schema.metadata.last_modified = 0
    landing_schema.touch()

    assert landing_schema.version == 2
    assert landing_schema.metadata.last_modified > 0


@pytest.mark.unit
def test_json_round_trip(landing_schema):
    assert UISchema.model_validate_json(landing_schema.to_json()) == landing_schema


class TestTree:
    """Traversal helpers."""

    def test_find_node_and_parent(self, landing_schema):
        root = landing_schema.root

        assert find_node(root, "feature-image").type == NodeType.IMAGE
        assert find_parent(root, "feature-image").id == "feature-card"
        assert find_parent(root, "root") is None
        assert find_node(root, "missing") is None

    def test_contains(self, landing_schema):
        hero = find_node(landing_schema.root, "hero")

        assert contains(hero, "hero")
        assert contains(hero, "hero-button")
        assert not contains(hero, "nav")

    def test_counts_and_types(self, landing_schema):
        root = landing_schema.root

        assert count_nodes(root) == 8
        assert has_node_type(root, NodeType.IMAGE)
        assert has_node_type(root, "button")
        assert collect_ids(root)[:2] == ["root", "nav"]
        assert duplicate_ids(root) == []

    def test_duplicate_ids(self, landing_schema):
        find_node(landing_schema.root, "nav").id = "hero"
        assert duplicate_ids(landing_schema.root) == ["hero"]

    def test_hierarchy(self, landing_schema):
        entries = {entry.node.id: entry for entry in hierarchy(landing_schema.root)}

        assert entries["root"].depth == 0
        assert entries["feature-image"].depth == 3
        assert entries["feature-image"].path == "root.features.feature-card.feature-image"
