"""Schema Editor - versioned, copy-on-write mutations over one UI document."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from sketchui.core import get_logger
from sketchui.core.id import new_node_id

from .fixer import fix_schema
from .models import NodeDraft, UISchema, UISchemaNode, ROOT_ID, type_name
from .operations import (
    AddComponentOperation,
    MoveComponentOperation,
    RemoveComponentOperation,
    SchemaEditOperation,
    UpdateFunctionOperation,
    UpdatePropsOperation,
    UpdateStyleOperation,
    parse_operations,
)
from .tree import HierarchyEntry, collect_ids, contains, find_node, find_parent, hierarchy, iter_nodes
from .validator import validate_schema

logger = get_logger(__name__)


@dataclass
class SchemaEditResult:
    """Outcome of one editor operation or batch."""

    success: bool
    updated_schema: UISchema
    changes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class SchemaEditor:
    """
    Owns one document and mutates it through small atomic operations.

    The constructor deep-copies its input. Every operation works on a fresh
    copy that is adopted only on success, so a failed operation leaves the
    document untouched. Successful operations bump ``version`` by one.
    Returned schemas are copies owned by the caller.
    """

    def __init__(self, schema: UISchema) -> None:
        self._schema = schema.model_copy(deep=True)

    @property
    def schema(self) -> UISchema:
        """Snapshot of the current document."""
        return self._schema.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _working_copy(self) -> UISchema:
        return self._schema.model_copy(deep=True)

    def _fail(self, warning: str) -> SchemaEditResult:
        logger.debug("edit_rejected", reason=warning)
        return SchemaEditResult(success=False, updated_schema=self.schema, warnings=[warning])

    def _commit(self, working: UISchema, changes: list[str]) -> SchemaEditResult:
        working.touch()
        self._schema = working
        return SchemaEditResult(success=True, updated_schema=self.schema, changes=changes)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def update_function(self, node_id: str, function: str) -> SchemaEditResult:
        working = self._working_copy()
        node = find_node(working.root, node_id)
        if node is None:
            return self._fail(f"Node {node_id} not found")

        old_function = node.function
        node.function = function
        return self._commit(
            working, [f'Updated function for {node_id}: "{old_function}" -> "{function}"']
        )

    def update_props(self, node_id: str, props: dict[str, Any]) -> SchemaEditResult:
        working = self._working_copy()
        node = find_node(working.root, node_id)
        if node is None:
            return self._fail(f"Node {node_id} not found")

        old_props = dict(node.props)
        node.props = {**node.props, **props}
        changes = [
            f'Updated {key} for {node_id}: "{old_props.get(key)}" -> "{value}"'
            for key, value in props.items()
        ]
        return self._commit(working, changes)

    def update_style(self, node_id: str, style: dict[str, Any]) -> SchemaEditResult:
        working = self._working_copy()
        node = find_node(working.root, node_id)
        if node is None:
            return self._fail(f"Node {node_id} not found")

        old_style = dict(node.style)
        node.style = {**node.style, **style}
        changes = [
            f'Updated style {key} for {node_id}: "{old_style.get(key)}" -> "{value}"'
            for key, value in style.items()
        ]
        return self._commit(working, changes)

    def add_component(self, parent_id: str, component: NodeDraft | dict[str, Any]) -> SchemaEditResult:
        """Append a new node under ``parent_id`` with a freshly generated id."""
        try:
            draft = component if isinstance(component, NodeDraft) else NodeDraft.model_validate(component)
        except ValidationError as e:
            return self._fail(f"Invalid component for {parent_id}: {e.error_count()} problems")

        working = self._working_copy()
        parent = find_node(working.root, parent_id)
        if parent is None:
            return self._fail(f"Parent node {parent_id} not found")

        new_node = UISchemaNode.model_validate({**draft.model_dump(), "id": new_node_id()})

        # Nested children of the draft must not collide with the tree
        taken = set(collect_ids(working.root))
        taken.add(new_node.id)
        for descendant in iter_nodes(new_node):
            if descendant is new_node:
                continue
            if not descendant.id or descendant.id in taken:
                descendant.id = new_node_id()
            taken.add(descendant.id)

        parent.children.append(new_node)
        return self._commit(
            working, [f"Added {new_node.type.value} component {new_node.id} to {parent_id}"]
        )

    def remove_component(self, node_id: str) -> SchemaEditResult:
        if node_id == ROOT_ID:
            return self._fail("Cannot remove root node")

        working = self._working_copy()
        parent = find_parent(working.root, node_id)
        if parent is None:
            return self._fail(f"Node {node_id} not found or has no parent")

        index = next(i for i, child in enumerate(parent.children) if child.id == node_id)
        removed = parent.children.pop(index)
        kind = type_name(removed.type) or "untyped"
        return self._commit(working, [f"Removed {kind} component {node_id}"])

    def move_component(self, node_id: str, new_parent_id: str, index: int | None = None) -> SchemaEditResult:
        """Detach ``node_id`` and insert it into ``new_parent_id`` at ``index`` (default: end)."""
        working = self._working_copy()
        node = find_node(working.root, node_id)
        if node is None:
            return self._fail(f"Node {node_id} not found")

        new_parent = find_node(working.root, new_parent_id)
        if new_parent is None:
            return self._fail(f"New parent {new_parent_id} not found")

        if index is not None and index < 0:
            return self._fail(f"Invalid index {index} for move of {node_id}")

        if contains(node, new_parent_id):
            return self._fail(f"Cannot move {node_id} into itself or its descendant {new_parent_id}")

        current_parent = find_parent(working.root, node_id)
        if current_parent is not None:
            current_parent.children = [c for c in current_parent.children if c is not node]

        insert_at = len(new_parent.children) if index is None else index
        new_parent.children.insert(insert_at, node)

        kind = type_name(node.type) or "untyped"
        return self._commit(working, [f"Moved {kind} component {node_id} to {new_parent_id}"])

    def apply_operations(
        self, operations: Sequence[SchemaEditOperation | dict[str, Any]]
    ) -> SchemaEditResult:
        """
        Run operations in order, best-effort.

        A failed step does not stop later steps and earlier steps are not
        rolled back. ``success`` is the AND of every step and of validation.
        The final tree is validated and fixed once.
        """
        changes: list[str] = []
        warnings: list[str] = []
        success = True

        for operation in operations:
            result = self._apply_one(operation)
            changes.extend(result.changes)
            warnings.extend(result.warnings)
            if not result.success:
                success = False

        return self._finalize(success, changes, warnings)

    def accept_revision(self, candidate: UISchema) -> SchemaEditResult:
        """
        Adopt an externally produced tree as the next version of this document.

        Document id and createdAt are kept, the root id is forced to "root",
        empty or duplicate node ids are reassigned, then the result is
        validated and fixed like a batch.
        """
        working = candidate.model_copy(deep=True)
        warnings: list[str] = []

        working.id = self._schema.id
        working.metadata.created_at = self._schema.metadata.created_at

        if working.root.id != ROOT_ID:
            warnings.append(f"Root id {working.root.id!r} replaced with {ROOT_ID!r}")
            working.root.id = ROOT_ID

        seen: set[str] = set()
        for node in iter_nodes(working.root):
            if not node.id or node.id in seen:
                fresh = new_node_id()
                warnings.append(f"Node id {node.id!r} reassigned to {fresh}")
                node.id = fresh
            seen.add(node.id)

        working.version = self._schema.version
        working.touch()
        self._schema = working

        return self._finalize(True, [f"Accepted revision of {working.id}"], warnings)

    def _apply_one(self, operation: SchemaEditOperation | dict[str, Any]) -> SchemaEditResult:
        if isinstance(operation, dict):
            try:
                operation = parse_operations([operation])[0]
            except ValidationError:
                return self._fail(f"Unknown operation type: {operation.get('type')}")

        match operation:
            case UpdateFunctionOperation(node_id=node_id, data=text):
                return self.update_function(node_id, text)
            case UpdatePropsOperation(node_id=node_id, data=props):
                return self.update_props(node_id, props)
            case UpdateStyleOperation(node_id=node_id, data=style):
                return self.update_style(node_id, style)
            case AddComponentOperation(node_id=parent_id, data=draft):
                return self.add_component(parent_id, draft)
            case RemoveComponentOperation(node_id=node_id):
                return self.remove_component(node_id)
            case MoveComponentOperation(node_id=node_id, data=target):
                return self.move_component(node_id, target.parent_id, target.index)
            case _:
                return self._fail(f"Unknown operation type: {type(operation).__name__}")

    def _finalize(self, success: bool, changes: list[str], warnings: list[str]) -> SchemaEditResult:
        validation = validate_schema(self._schema)
        if not validation.is_valid:
            warnings.extend(validation.errors)
            success = False
        warnings.extend(validation.warnings)

        self._schema = fix_schema(self._schema)

        logger.info(
            "edits_finalized",
            success=success,
            version=self._schema.version,
            changes=len(changes),
            warnings=len(warnings),
        )
        return SchemaEditResult(
            success=success, updated_schema=self.schema, changes=changes, warnings=warnings
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_node(self, node_id: str) -> UISchemaNode | None:
        node = find_node(self._schema.root, node_id)
        return node.model_copy(deep=True) if node is not None else None

    def find_parent(self, node_id: str) -> UISchemaNode | None:
        parent = find_parent(self._schema.root, node_id)
        return parent.model_copy(deep=True) if parent is not None else None

    def get_all_nodes(self) -> list[UISchemaNode]:
        return list(iter_nodes(self.schema.root))

    def get_nodes_by_type(self, node_type: str) -> list[UISchemaNode]:
        return [node for node in self.get_all_nodes() if node.type == node_type]

    def get_hierarchy(self) -> list[HierarchyEntry]:
        return hierarchy(self.schema.root)
