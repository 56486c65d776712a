"""
Annotation Store - sessions, annotations, selected components and planned actions.

State is mirrored to a key-value backend after every mutation under one key,
laid out as::

    {"sessions": [[id, session], ...], "currentSessionId": ..., "actions": [...]}

Backend failures are logged and never raised; the in-memory state stays
authoritative for the rest of the process.
"""

from typing import Any

import orjson
from pydantic import ValidationError

from sketchui.core import get_logger, safe_json_dumps
from sketchui.core.errors import NoActiveSessionError
from sketchui.core.id import new_component_id, new_sketch_id

from .actions import ActionStatus, SketchAction, parse_action
from .models import ComponentDraft, ComponentInfo, SketchDraft, SketchElement, SketchIntent, SketchSession
from .persistence import KeyValueStore

logger = get_logger(__name__)

DEFAULT_STORE_KEY = "sketchui-sketch-store"


class SketchStore:
    """
    Session-scoped annotation state.

    Constructed explicitly with its persistence backend; use ``load()`` /
    ``close()`` or the context manager form. Getters return copies.
    """

    def __init__(self, persistence: KeyValueStore, store_key: str = DEFAULT_STORE_KEY) -> None:
        self._persistence = persistence
        self._store_key = store_key
        self._sessions: dict[str, SketchSession] = {}
        self._current_session_id: str | None = None
        self._actions: list[SketchAction] = []

    def __enter__(self) -> "SketchStore":
        return self.load()

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> "SketchStore":
        """Replace in-memory state with what the backend holds, if anything."""
        try:
            raw = self._persistence.get(self._store_key)
            if raw:
                data = orjson.loads(raw)
                sessions = {
                    session_id: SketchSession.model_validate(session)
                    for session_id, session in data.get("sessions") or []
                }
                actions = [parse_action(action) for action in data.get("actions") or []]
                self._sessions = sessions
                self._current_session_id = data.get("currentSessionId")
                self._actions = actions
                logger.info(
                    "store_loaded",
                    sessions=len(self._sessions),
                    actions=len(self._actions),
                )
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error("store_load_failed", key=self._store_key, error=str(e))
        return self

    def close(self) -> None:
        self._save()

    def _save(self) -> None:
        data = {
            "sessions": [[session_id, session.to_wire()] for session_id, session in self._sessions.items()],
            "currentSessionId": self._current_session_id,
            "actions": [action.to_wire() for action in self._actions],
        }
        try:
            self._persistence.set(self._store_key, safe_json_dumps(data))
        except (OSError, ValueError) as e:
            logger.error("store_save_failed", key=self._store_key, error=str(e))

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def create_session(self, prompt: str, generated_code: str = "") -> str:
        session = SketchSession(prompt=prompt, generated_code=generated_code)
        self._sessions[session.id] = session
        self._current_session_id = session.id
        self._save()
        logger.info("session_created", session_id=session.id)
        return session.id

    def _session(self) -> SketchSession | None:
        if self._current_session_id is None:
            return None
        return self._sessions.get(self._current_session_id)

    def _require_session(self) -> SketchSession:
        session = self._session()
        if session is None:
            raise NoActiveSessionError("No active session")
        return session

    def _commit(self, session: SketchSession) -> None:
        session.touch()
        self._save()

    @property
    def current_session(self) -> SketchSession | None:
        session = self._session()
        return session.model_copy(deep=True) if session is not None else None

    def update_generated_code(self, code: str) -> bool:
        session = self._session()
        if session is None:
            return False
        session.generated_code = code
        self._commit(session)
        return True

    def get_session_history(self) -> list[SketchSession]:
        """All sessions, most recently modified first."""
        ordered = sorted(self._sessions.values(), key=lambda s: s.last_modified, reverse=True)
        return [session.model_copy(deep=True) for session in ordered]

    def export_session(self, session_id: str | None = None) -> str:
        """Pretty JSON for one session (default: current), or "" if there is none."""
        target = session_id or self._current_session_id
        session = self._sessions.get(target) if target else None
        if session is None:
            return ""
        return safe_json_dumps(session.to_wire(), indent=2)

    def import_session(self, data: str) -> bool:
        """Add a session from exported JSON and make it current."""
        try:
            session = SketchSession.model_validate_json(data)
        except ValidationError as e:
            logger.error("session_import_failed", error_count=e.error_count())
            return False

        self._sessions[session.id] = session
        self._current_session_id = session.id
        self._save()
        logger.info("session_imported", session_id=session.id)
        return True

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def add_sketch(self, sketch: SketchDraft | dict[str, Any]) -> str:
        """
        Append an annotation to the current session.

        Raises:
            NoActiveSessionError: No session has been created or imported
        """
        session = self._require_session()
        draft = sketch if isinstance(sketch, SketchDraft) else SketchDraft.model_validate(sketch)
        element = SketchElement(
            **draft.model_dump(include=set(SketchDraft.model_fields)),
            id=new_sketch_id(),
            session_id=session.id,
        )
        session.sketches.append(element)
        self._commit(session)
        return element.id

    def update_sketch_description(
        self, sketch_id: str, description: str, action: SketchIntent | str | None = None
    ) -> bool:
        """
        Record analysis for an annotation.

        Analysis happens once per annotation: an already-described annotation
        is left unchanged and False is returned.
        """
        session = self._session()
        if session is None:
            return False

        sketch = next((s for s in session.sketches if s.id == sketch_id), None)
        if sketch is None:
            return False
        if sketch.description:
            logger.warning("sketch_already_analyzed", sketch_id=sketch_id)
            return False

        sketch.description = description
        if action:
            sketch.action = SketchIntent(action)
        self._commit(session)
        return True

    def get_sketches(self) -> list[SketchElement]:
        session = self._session()
        return [s.model_copy(deep=True) for s in session.sketches] if session else []

    def clear_sketches(self) -> None:
        session = self._session()
        if session is not None:
            session.sketches = []
            self._commit(session)

    # ------------------------------------------------------------------
    # Selected components
    # ------------------------------------------------------------------

    def add_component(self, component: ComponentDraft | dict[str, Any]) -> str:
        """
        Raises:
            NoActiveSessionError: No session has been created or imported
        """
        session = self._require_session()
        draft = component if isinstance(component, ComponentDraft) else ComponentDraft.model_validate(component)
        info = ComponentInfo(
            **draft.model_dump(include=set(ComponentDraft.model_fields)),
            id=new_component_id(),
            session_id=session.id,
        )
        session.components.append(info)
        self._commit(session)
        return info.id

    def get_components(self) -> list[ComponentInfo]:
        session = self._session()
        return [c.model_copy(deep=True) for c in session.components] if session else []

    def update_component_function(
        self, component_id: str, function: str, description: str | None = None
    ) -> bool:
        session = self._session()
        if session is None:
            return False

        component = next((c for c in session.components if c.id == component_id), None)
        if component is None:
            return False

        component.function = function
        if description:
            component.description = description
        self._commit(session)
        return True

    def clear_components(self) -> None:
        session = self._session()
        if session is not None:
            session.components = []
            self._commit(session)

    # ------------------------------------------------------------------
    # Planned actions
    # ------------------------------------------------------------------

    def add_action(self, action: SketchAction) -> str:
        self._actions.append(action.model_copy(deep=True))
        self._save()
        return action.id

    def update_action_status(self, action_id: str, status: ActionStatus | str) -> bool:
        """
        Move an action to ``status``.

        Raises:
            InvalidTransitionError: The action already reached a terminal status
        """
        action = next((a for a in self._actions if a.id == action_id), None)
        if action is None:
            return False
        action.mark(ActionStatus(status))
        self._save()
        return True

    def get_actions(self) -> list[SketchAction]:
        return [a.model_copy(deep=True) for a in self._actions]

    def get_pending_actions(self) -> list[SketchAction]:
        return [a.model_copy(deep=True) for a in self._actions if a.status is ActionStatus.PENDING]
