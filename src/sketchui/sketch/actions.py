"""
Planned actions.

A plan is a list of ``SketchAction`` variants tagged by ``type``. Each variant
types the parameters it knows and keeps any others the planner sends.
Status moves one way only: pending -> completed | failed.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from sketchui.core.errors import InvalidTransitionError
from sketchui.core.id import new_action_id, now_ms
from sketchui.schema.models import CamelModel


class ActionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


def check_transition(current: ActionStatus, target: ActionStatus) -> ActionStatus:
    """Return ``target`` if ``current -> target`` is allowed.

    Raises:
        InvalidTransitionError: ``current`` is terminal
    """
    if current is not ActionStatus.PENDING:
        raise InvalidTransitionError(f"Action already {current.value}, cannot become {target.value}")
    return target


class _OpenParams(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class CreatePageParams(_OpenParams):
    page_name: str = "New Page"
    route: str = "/new-page"


class AddComponentParams(_OpenParams):
    component_type: str | None = None
    component_name: str | None = None
    content: Any = None
    style: Any = None
    position: Any = None
    functionality: str | None = None


class ModifyComponentParams(_OpenParams):
    """Free-form change description."""


class AddFeatureParams(_OpenParams):
    functionality: str | None = None


class _ActionBase(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=new_action_id)
    description: str = ""
    target_element: str | None = None
    status: ActionStatus = ActionStatus.PENDING
    created_at: int = Field(default_factory=now_ms)

    def mark(self, status: ActionStatus) -> None:
        self.status = check_transition(self.status, status)


class CreatePageAction(_ActionBase):
    type: Literal["create_page"] = "create_page"
    parameters: CreatePageParams = Field(default_factory=CreatePageParams)


class AddComponentAction(_ActionBase):
    type: Literal["add_component"] = "add_component"
    parameters: AddComponentParams = Field(default_factory=AddComponentParams)


class ModifyComponentAction(_ActionBase):
    type: Literal["modify_component"] = "modify_component"
    parameters: ModifyComponentParams = Field(default_factory=ModifyComponentParams)


class AddFeatureAction(_ActionBase):
    type: Literal["add_feature"] = "add_feature"
    parameters: AddFeatureParams = Field(default_factory=AddFeatureParams)


SketchAction = Annotated[
    Union[CreatePageAction, AddComponentAction, ModifyComponentAction, AddFeatureAction],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[SketchAction] = TypeAdapter(SketchAction)

# Fields a planner must not choose for itself
_ASSIGNED_FIELDS = ("id", "status", "createdAt", "created_at")


def parse_action(raw: dict[str, Any]) -> SketchAction:
    """Validate a stored action.

    Raises:
        pydantic.ValidationError: Unknown ``type`` or malformed parameters
    """
    return _action_adapter.validate_python(raw)


def action_from_plan(raw: dict[str, Any]) -> SketchAction:
    """Build a fresh pending action from one planner entry.

    Raises:
        pydantic.ValidationError: Unknown ``type`` or malformed parameters
    """
    cleaned = {key: value for key, value in raw.items() if key not in _ASSIGNED_FIELDS}
    if cleaned.get("parameters") is None:
        cleaned.pop("parameters", None)
    return _action_adapter.validate_python(cleaned)


def parameters_dict(action: SketchAction) -> dict[str, Any]:
    """Known and extra parameters, camelCase keys, unset ones omitted."""
    return action.parameters.model_dump(mode="json", by_alias=True, exclude_none=True)
