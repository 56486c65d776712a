"""JSX export.

Every emitted element carries ``data-schema-id`` so a renderer can map
hit-tests and selections back to tree nodes.
"""

import html
from typing import Any

from sketchui.core.json import safe_json_dumps

from .models import NodeType, UISchema, UISchemaNode, type_name


NODE_ID_ATTRIBUTE = "data-schema-id"

TAG_NAMES: dict[str, str] = {
    NodeType.CONTAINER.value: "div",
    NodeType.BUTTON.value: "button",
    NodeType.TEXT.value: "p",
    NodeType.IMAGE.value: "img",
    NodeType.CARD.value: "div",
    NodeType.NAVIGATION.value: "nav",
    NodeType.HERO.value: "section",
    NodeType.SECTION.value: "section",
}

# Props rendered as element text rather than attributes
_TEXT_PROPS = ("content", "text")


def tag_name(node_type: NodeType | str | None) -> str:
    return TAG_NAMES.get(type_name(node_type), "div")


def _attribute(key: str, value: Any) -> str:
    if isinstance(value, str):
        return f'{key}="{html.escape(value, quote=True)}"'
    return f"{key}={{{safe_json_dumps(value)}}}"


def _style_attribute(style: dict[str, Any]) -> str:
    body = ", ".join(f"{key}: {safe_json_dumps(value)}" for key, value in style.items())
    return f"style={{{{ {body} }}}}"


def _node_text(node: UISchemaNode) -> str | None:
    for key in _TEXT_PROPS:
        value = node.props.get(key)
        if isinstance(value, str) and value:
            return html.escape(value, quote=False)
    return None


def node_to_jsx(node: UISchemaNode, depth: int = 0) -> str:
    indent = "  " * depth
    tag = tag_name(node.type)

    attributes = [_attribute(NODE_ID_ATTRIBUTE, node.id)]
    attributes += [
        _attribute(key, value) for key, value in node.props.items() if key not in _TEXT_PROPS
    ]
    if node.style:
        attributes.append(_style_attribute(node.style))
    opening = f"{tag} {' '.join(attributes)}"

    if tag == "img":
        return f"{indent}<{opening} />"

    if node.children:
        children = "\n".join(node_to_jsx(child, depth + 1) for child in node.children)
        return f"{indent}<{opening}>\n{children}\n{indent}</{tag}>"

    text = _node_text(node)
    if text is not None:
        return f"{indent}<{opening}>{text}</{tag}>"
    return f"{indent}<{opening} />"


def schema_to_jsx(schema: UISchema) -> str:
    """Render the document tree as indented JSX."""
    return node_to_jsx(schema.root)
