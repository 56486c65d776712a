"""Tree traversal helpers.

All lookups are depth-first over ``children`` and O(n) in tree size.
"""

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass

from .models import UISchemaNode


@dataclass(frozen=True)
class HierarchyEntry:
    """A node with its depth and dotted id path, for outline displays."""

    node: UISchemaNode
    depth: int
    path: str


def iter_nodes(root: UISchemaNode) -> Iterator[UISchemaNode]:
    """Yield every node, pre-order."""
    yield root
    for child in root.children:
        yield from iter_nodes(child)


def find_node(root: UISchemaNode, node_id: str) -> UISchemaNode | None:
    """Find a node by id."""
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def find_parent(root: UISchemaNode, node_id: str) -> UISchemaNode | None:
    """Find the node whose children contain ``node_id``."""
    for node in iter_nodes(root):
        for child in node.children:
            if child.id == node_id:
                return node
    return None


def contains(node: UISchemaNode, node_id: str) -> bool:
    """True if ``node_id`` is ``node`` itself or one of its descendants."""
    return find_node(node, node_id) is not None


def count_nodes(root: UISchemaNode) -> int:
    return sum(1 for _ in iter_nodes(root))


def has_node_type(root: UISchemaNode, node_type: str) -> bool:
    return any(node.type == node_type for node in iter_nodes(root))


def collect_ids(root: UISchemaNode) -> list[str]:
    return [node.id for node in iter_nodes(root)]


def duplicate_ids(root: UISchemaNode) -> list[str]:
    """Non-empty ids that occur more than once, in first-seen order."""
    counts = Counter(node_id for node_id in collect_ids(root) if node_id)
    return [node_id for node_id, count in counts.items() if count > 1]


def hierarchy(root: UISchemaNode) -> list[HierarchyEntry]:
    """Flatten the tree into (node, depth, path) entries, pre-order."""
    entries: list[HierarchyEntry] = []

    def walk(node: UISchemaNode, depth: int, path: str) -> None:
        current = f"{path}.{node.id}" if path else node.id
        entries.append(HierarchyEntry(node=node, depth=depth, path=current))
        for child in node.children:
            walk(child, depth + 1, current)

    walk(root, 0, "")
    return entries
