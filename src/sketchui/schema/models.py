"""UI Document Models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sketchui.core.id import new_schema_id, now_ms
from sketchui.core.json import safe_json_dumps


ROOT_ID = "root"


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class NodeType(str, Enum):
    """Node kinds with known rendering and defaults."""

    CONTAINER = "container"
    BUTTON = "button"
    TEXT = "text"
    IMAGE = "image"
    CARD = "card"
    NAVIGATION = "navigation"
    HERO = "hero"
    SECTION = "section"


def type_name(node_type: NodeType | str | None) -> str:
    """Wire name of a node type, known kind or not."""
    if node_type is None:
        return ""
    return node_type.value if isinstance(node_type, NodeType) else str(node_type)


class Position(CamelModel):
    """Legacy absolute layout box."""

    x: float
    y: float
    width: float
    height: float


class _NodeFields(CamelModel):
    """Fields shared by nodes and node drafts."""

    props: dict[str, Any] = Field(default_factory=dict)
    style: dict[str, Any] = Field(default_factory=dict)
    function: str = ""
    children: list["UISchemaNode"] = Field(default_factory=list)
    position: Position | None = None

    @field_validator("props", "style", mode="before")
    @classmethod
    def _mapping_or_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("children", mode="before")
    @classmethod
    def _children_or_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("function", mode="before")
    @classmethod
    def _function_or_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class UISchemaNode(_NodeFields):
    """
    One element of the UI tree.

    ``id`` and ``type`` tolerate absence so untrusted documents can still be
    loaded and reported on by the validator. A type outside ``NodeType`` is
    kept as its plain string.
    """

    id: str = ""
    type: NodeType | str | None = Field(default=None, union_mode="left_to_right")

    @field_validator("id", mode="before")
    @classmethod
    def _id_or_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class NodeDraft(_NodeFields):
    """A node about to be inserted; the editor assigns its id."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    type: NodeType


class SchemaMetadata(CamelModel):
    """Document metadata."""

    title: str = "Generated UI"
    description: str = ""
    created_at: int = Field(default_factory=now_ms)
    last_modified: int = Field(default_factory=now_ms)


class UISchema(CamelModel):
    """Root UI document."""

    id: str = Field(default_factory=new_schema_id)
    version: int = 1
    root: UISchemaNode
    metadata: SchemaMetadata = Field(default_factory=SchemaMetadata)

    def touch(self) -> None:
        """Record a mutation: bump the version and refresh lastModified."""
        self.version += 1
        self.metadata.last_modified = now_ms()

    def to_json(self, indent: int = 0) -> str:
        """Serialize with camelCase keys."""
        return safe_json_dumps(self.to_wire(), indent=indent)


_NodeFields.model_rebuild()
UISchemaNode.model_rebuild()
NodeDraft.model_rebuild()
