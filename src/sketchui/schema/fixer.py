"""Deterministic repair pass for UI documents."""

import re
from typing import Any

from sketchui.core.json import safe_json_dumps

from .contrast import MIN_CONTRAST, contrast_ratio, readable_text_color
from .defaults import PLACEHOLDER_ALT, PLACEHOLDER_IMAGE_URL, default_function
from .models import NodeType, UISchema, UISchemaNode


_KEBAB = re.compile(r"-([a-z])")
_LAYOUT_MARKER = re.compile(r"\bgrid\b|\bflex\b")
LAYOUT_CLASSES = "flex flex-col"


def camel_case(key: str) -> str:
    """``background-color`` -> ``backgroundColor``."""
    return _KEBAB.sub(lambda m: m.group(1).upper(), key)


def _style_value(value: Any) -> str:
    return value if isinstance(value, str) else safe_json_dumps(value)


def normalize_style(style: dict[str, Any]) -> dict[str, str]:
    return {camel_case(key): _style_value(value) for key, value in style.items()}


def _fix_node(node: UISchemaNode) -> None:
    if not isinstance(node.children, list):
        node.children = []
    if not isinstance(node.props, dict):
        node.props = {}

    node.style = normalize_style(node.style) if isinstance(node.style, dict) else {}

    if node.type == NodeType.IMAGE and not node.props.get("src"):
        node.props["src"] = PLACEHOLDER_IMAGE_URL
        node.props["alt"] = node.props.get("alt") or PLACEHOLDER_ALT

    color = node.style.get("color")
    background = node.style.get("backgroundColor")
    if color and background and contrast_ratio(color, background) < MIN_CONTRAST:
        node.style["color"] = readable_text_color(background)

    if node.style.get("position") == "absolute":
        node.style["position"] = "relative"
        base = str(node.props.get("className") or "")
        if not _LAYOUT_MARKER.search(base):
            node.props["className"] = f"{base} {LAYOUT_CLASSES}".strip()

    if not node.function:
        node.function = default_function(node.type)

    for child in node.children:
        _fix_node(child)


def fix_schema(schema: UISchema) -> UISchema:
    """
    Return a repaired deep copy of ``schema`` with ``version + 1``.

    The input is never mutated. Repairs are idempotent: fixing a fixed
    document changes nothing but version and lastModified.
    """
    fixed = schema.model_copy(deep=True)
    _fix_node(fixed.root)
    fixed.touch()
    return fixed
