"""Annotation Models."""

from enum import Enum

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from sketchui.core.id import new_session_id, now_ms
from sketchui.schema.models import CamelModel


class SketchType(str, Enum):
    """Drawing tools."""

    PEN = "pen"
    CIRCLE = "circle"
    ARROW = "arrow"
    TEXT = "text"
    RECTANGLE = "rectangle"
    HIGHLIGHT = "highlight"


class SketchIntent(str, Enum):
    """What an analyzed annotation asks for."""

    ADD_COMPONENT = "add_component"
    MODIFY_COMPONENT = "modify_component"
    ADD_PAGE = "add_page"
    HIGHLIGHT = "highlight"
    NOTE = "note"


class ComponentKind(str, Enum):
    """Kinds of preview elements a user can select."""

    BUTTON = "button"
    NAVBAR_ITEM = "navbar-item"
    CARD = "card"
    TEXT_BLOCK = "text-block"
    IMAGE = "image"
    NAVIGATION = "navigation"
    HERO_SECTION = "hero-section"
    UNKNOWN = "unknown"


class Point(CamelModel):
    x: float
    y: float


class Bounds(CamelModel):
    x: float
    y: float
    width: float
    height: float


class SketchDraft(CamelModel):
    """An annotation as drawn, before the store assigns identity."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    type: SketchType
    points: list[Point] = Field(default_factory=list)
    color: str = "#ef4444"
    stroke_width: float = 2
    text: str | None = None
    position: Point | None = None
    description: str | None = None
    action: SketchIntent | None = None


class SketchElement(SketchDraft):
    """
    A stored annotation.

    ``description`` and ``action`` are filled in once by analysis.
    """

    id: str
    timestamp: int = Field(default_factory=now_ms)
    session_id: str

    @property
    def is_analyzed(self) -> bool:
        return bool(self.description)


class ElementInfo(CamelModel):
    """DOM facts captured when a preview element is selected."""

    tag_name: str
    class_name: str = ""
    text_content: str | None = None
    bounds: Bounds


class ComponentDraft(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    type: ComponentKind = ComponentKind.UNKNOWN
    element: ElementInfo
    function: str = ""
    description: str | None = None


class ComponentInfo(ComponentDraft):
    """A selected preview element with the function the user assigned to it."""

    id: str
    timestamp: int = Field(default_factory=now_ms)
    session_id: str


class SketchSession(CamelModel):
    """One working session: a prompt, its current document and its annotations."""

    id: str = Field(default_factory=new_session_id)
    prompt: str = ""
    generated_code: str = ""
    sketches: list[SketchElement] = Field(default_factory=list)
    components: list[ComponentInfo] = Field(default_factory=list)
    created_at: int = Field(default_factory=now_ms)
    last_modified: int = Field(default_factory=now_ms)
    version: int = 1

    def touch(self) -> None:
        self.version += 1
        self.last_modified = now_ms()
