"""Pytest configuration and fixtures."""

from collections.abc import Iterable

import pytest

from sketchui.ai.client import GenerationRequest, GenerationResponse
from sketchui.core.errors import CollaboratorError
from sketchui.schema.defaults import create_default_schema
from sketchui.schema.models import NodeType, UISchema, UISchemaNode, ROOT_ID
from sketchui.sketch.persistence import MemoryKeyValueStore
from sketchui.sketch.store import SketchStore


# ============================================================================
# Fake Collaborators
# ============================================================================


class FakeGenerationClient:
    """
    Scripted generation client.

    Each call pops the next scripted item: a string becomes the response
    text, an exception instance is raised. Every request is recorded.
    """

    def __init__(self, responses: Iterable[str | Exception] = ()) -> None:
        self.responses: list[str | Exception] = list(responses)
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.requests.append(request)
        if not self.responses:
            raise CollaboratorError("No scripted response left")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return GenerationResponse(text=item, model="fake")


class BrokenKeyValueStore:
    """Backend whose every call fails."""

    def get(self, key: str) -> str | None:
        raise OSError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("disk unavailable")


# ============================================================================
# Schema Fixtures
# ============================================================================


def build_landing_schema() -> UISchema:
    """root -> [nav, hero -> [hero-title, hero-button], features -> [feature-card -> [feature-image]]]"""
    return UISchema(
        id="schema_landing",
        root=UISchemaNode(
            id=ROOT_ID,
            type=NodeType.CONTAINER,
            function="Page container",
            children=[
                UISchemaNode(
                    id="nav",
                    type=NodeType.NAVIGATION,
                    props={"className": "flex gap-4"},
                    function="Top navigation",
                ),
                UISchemaNode(
                    id="hero",
                    type=NodeType.HERO,
                    style={"backgroundColor": "#f8fafc"},
                    function="Hero section",
                    children=[
                        UISchemaNode(
                            id="hero-title",
                            type=NodeType.TEXT,
                            props={"content": "Ship faster"},
                            style={"color": "#1f2937"},
                            function="Headline",
                        ),
                        UISchemaNode(
                            id="hero-button",
                            type=NodeType.BUTTON,
                            props={"text": "Get Started"},
                            function="Primary call-to-action button",
                        ),
                    ],
                ),
                UISchemaNode(
                    id="features",
                    type=NodeType.SECTION,
                    function="Feature list",
                    children=[
                        UISchemaNode(
                            id="feature-card",
                            type=NodeType.CARD,
                            function="Feature card",
                            children=[
                                UISchemaNode(
                                    id="feature-image",
                                    type=NodeType.IMAGE,
                                    props={"src": "https://example.com/a.png", "alt": "Feature"},
                                    function="Feature illustration",
                                )
                            ],
                        )
                    ],
                ),
            ],
        ),
    )


@pytest.fixture
def landing_schema() -> UISchema:
    return build_landing_schema()


@pytest.fixture
def default_schema() -> UISchema:
    return create_default_schema("Untitled")


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def memory_backend() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(memory_backend) -> SketchStore:
    """Loaded store over an in-memory backend."""
    return SketchStore(memory_backend).load()


@pytest.fixture
def session_store(store, default_schema) -> SketchStore:
    """Store with a current session holding the default document."""
    store.create_session("Landing page for a bakery", default_schema.to_json())
    return store


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def scripted_client():
    """Factory: ``scripted_client(["...", CollaboratorError(...)])``."""
    return FakeGenerationClient


@pytest.fixture
def broken_backend() -> BrokenKeyValueStore:
    return BrokenKeyValueStore()
