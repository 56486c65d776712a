"""Structural and accessibility checks for UI documents.

Validation is advisory: errors make ``is_valid`` false but nothing here
raises or blocks a document.
"""

from dataclasses import dataclass, field

from .contrast import MIN_CONTRAST, contrast_ratio
from .models import NodeType, UISchema, UISchemaNode
from .tree import duplicate_ids


@dataclass
class ValidationReport:
    """Outcome of validate_schema."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _validate_node(node: UISchemaNode, path: str, report: ValidationReport) -> None:
    if not node.id:
        report.errors.append(f"Missing id at {path}")
    if not node.type:
        report.errors.append(f"Missing type at {path}")
    elif not isinstance(node.type, NodeType):
        report.warnings.append(f"Unknown type '{node.type}' at {path}, rendered as a generic element")
    if not node.function:
        report.warnings.append(f"Missing function description at {path}")

    match node.type:
        case NodeType.IMAGE:
            if not node.props.get("src"):
                report.warnings.append(f"Image at {path} has no src, will use placeholder")
        case NodeType.TEXT:
            if not node.props.get("content"):
                report.warnings.append(f"Text node at {path} has no content")
        case NodeType.BUTTON:
            if not node.props.get("text"):
                report.warnings.append(f"Button at {path} has no text")

    color = node.style.get("color")
    background = node.style.get("backgroundColor")
    if color and background:
        ratio = contrast_ratio(color, background)
        if ratio < MIN_CONTRAST:
            report.warnings.append(f"Low contrast text at {path} (ratio: {ratio:.2f})")

    if node.style.get("position") == "absolute":
        report.warnings.append(f"Absolute positioning detected at {path}, consider using flex/grid")

    for index, child in enumerate(node.children):
        _validate_node(child, f"{path}.children[{index}]", report)


def validate_schema(schema: UISchema) -> ValidationReport:
    """
    Check a document depth-first.

    Errors: missing id, missing type.
    Warnings: unknown type, missing function, empty image src / text content / button text,
    low contrast, absolute positioning, duplicate ids.
    """
    report = ValidationReport()
    _validate_node(schema.root, "root", report)

    for node_id in duplicate_ids(schema.root):
        report.warnings.append(f"Duplicate id {node_id}")

    return report
