"""Annotations, sessions and planned actions."""

from .models import (
    SketchType,
    SketchIntent,
    ComponentKind,
    Point,
    Bounds,
    SketchDraft,
    SketchElement,
    ElementInfo,
    ComponentDraft,
    ComponentInfo,
    SketchSession,
)
from .actions import (
    ActionStatus,
    CreatePageAction,
    AddComponentAction,
    ModifyComponentAction,
    AddFeatureAction,
    SketchAction,
    action_from_plan,
    parse_action,
)
from .persistence import KeyValueStore, MemoryKeyValueStore, FileKeyValueStore
from .store import SketchStore, DEFAULT_STORE_KEY

__all__ = [
    "SketchType",
    "SketchIntent",
    "ComponentKind",
    "Point",
    "Bounds",
    "SketchDraft",
    "SketchElement",
    "ElementInfo",
    "ComponentDraft",
    "ComponentInfo",
    "SketchSession",
    "ActionStatus",
    "CreatePageAction",
    "AddComponentAction",
    "ModifyComponentAction",
    "AddFeatureAction",
    "SketchAction",
    "action_from_plan",
    "parse_action",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "SketchStore",
    "DEFAULT_STORE_KEY",
]
