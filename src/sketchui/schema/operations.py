"""Edit operations accepted by SchemaEditor.apply_operations.

Wire form mirrors ``{"type": ..., "nodeId": ..., "data": ...}``.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from .models import CamelModel, NodeDraft


class UpdateFunctionOperation(CamelModel):
    type: Literal["update_function"] = "update_function"
    node_id: str
    data: str


class UpdatePropsOperation(CamelModel):
    type: Literal["update_props"] = "update_props"
    node_id: str
    data: dict[str, Any]


class UpdateStyleOperation(CamelModel):
    type: Literal["update_style"] = "update_style"
    node_id: str
    data: dict[str, Any]


class AddComponentOperation(CamelModel):
    """``node_id`` is the parent that receives the new component."""

    type: Literal["add_component"] = "add_component"
    node_id: str
    data: NodeDraft


class RemoveComponentOperation(CamelModel):
    type: Literal["remove_component"] = "remove_component"
    node_id: str
    data: Any = None


class MoveTarget(CamelModel):
    parent_id: str
    index: int | None = Field(default=None, ge=0)


class MoveComponentOperation(CamelModel):
    type: Literal["move_component"] = "move_component"
    node_id: str
    data: MoveTarget


SchemaEditOperation = Annotated[
    Union[
        UpdateFunctionOperation,
        UpdatePropsOperation,
        UpdateStyleOperation,
        AddComponentOperation,
        RemoveComponentOperation,
        MoveComponentOperation,
    ],
    Field(discriminator="type"),
]

_operations_adapter: TypeAdapter[list[SchemaEditOperation]] = TypeAdapter(list[SchemaEditOperation])


def parse_operations(raw: list[dict[str, Any]]) -> list[SchemaEditOperation]:
    """Validate a list of wire-form operations.

    Raises:
        pydantic.ValidationError: Unknown ``type`` or malformed payload
    """
    return _operations_adapter.validate_python(raw)
