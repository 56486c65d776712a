"""UI document model, validation, repair and editing."""

from .models import (
    ROOT_ID,
    CamelModel,
    NodeType,
    Position,
    UISchemaNode,
    NodeDraft,
    SchemaMetadata,
    UISchema,
)
from .tree import HierarchyEntry, iter_nodes, find_node, find_parent, count_nodes, has_node_type
from .validator import ValidationReport, validate_schema
from .fixer import fix_schema
from .defaults import create_default_schema
from .parser import parse_schema, parse_schema_dict, schema_or_default
from .render import schema_to_jsx
from .operations import SchemaEditOperation, parse_operations
from .editor import SchemaEditor, SchemaEditResult

__all__ = [
    "ROOT_ID",
    "CamelModel",
    "NodeType",
    "Position",
    "UISchemaNode",
    "NodeDraft",
    "SchemaMetadata",
    "UISchema",
    "HierarchyEntry",
    "iter_nodes",
    "find_node",
    "find_parent",
    "count_nodes",
    "has_node_type",
    "ValidationReport",
    "validate_schema",
    "fix_schema",
    "create_default_schema",
    "parse_schema",
    "parse_schema_dict",
    "schema_or_default",
    "schema_to_jsx",
    "SchemaEditOperation",
    "parse_operations",
    "SchemaEditor",
    "SchemaEditResult",
]
