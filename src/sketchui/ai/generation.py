"""
Schema generation service.

Generates whole documents from a prompt and applies free-form edit
instructions, always handing back a validated and fixed document.
"""

from dataclasses import dataclass, field, replace

from returns.pipeline import is_successful
from returns.result import Failure, Result

from sketchui.core import LRUCache, get_logger, hash_fields
from sketchui.core.errors import CollaboratorError, SchemaParseError
from sketchui.core.validate import SchemaEditRequest, SchemaGenerationRequest
from sketchui.schema.editor import SchemaEditor
from sketchui.schema.fixer import fix_schema
from sketchui.schema.models import NodeType, UISchema
from sketchui.schema.parser import parse_schema, schema_or_default
from sketchui.schema.render import schema_to_jsx
from sketchui.schema.tree import count_nodes, has_node_type
from sketchui.schema.validator import validate_schema

from .client import GenerationClient, GenerationRequest, ImagePayload
from .prompts import SCHEMA_EDIT_SYSTEM, SCHEMA_GENERATION_SYSTEM, schema_edit_prompt, schema_generation_prompt

logger = get_logger(__name__)

NEEDS_HELP_MESSAGE = "I couldn't process this. Please describe what this element should do."

# Below this many nodes a layout is considered sparse
MIN_RICH_LAYOUT_NODES = 5


@dataclass
class SchemaGenerationResponse:
    schema: UISchema
    jsx: str
    description: str
    suggestions: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    fallback: bool = False

    def copy(self) -> "SchemaGenerationResponse":
        return replace(
            self,
            schema=self.schema.model_copy(deep=True),
            suggestions=list(self.suggestions),
            warnings=list(self.warnings),
        )


@dataclass
class SchemaEditResponse:
    success: bool
    schema: UISchema
    warnings: list[str] = field(default_factory=list)
    needs_help: bool = False
    error: str | None = None


def layout_suggestions(schema: UISchema) -> list[str]:
    """Improvement hints for a generated layout."""
    suggestions = []
    if count_nodes(schema.root) < MIN_RICH_LAYOUT_NODES:
        suggestions.append("Consider adding more components for a richer layout")
    if not has_node_type(schema.root, NodeType.IMAGE):
        suggestions.append("Add images to make the layout more visually appealing")
    if not has_node_type(schema.root, NodeType.BUTTON):
        suggestions.append("Add interactive buttons for better user engagement")
    return suggestions


class SchemaGenerator:
    """
    Prompt-to-document generation with caching.

    Collaborator and parse failures fall back to the default document; only
    ``MissingCredentialsError`` escapes.
    """

    def __init__(
        self,
        client: GenerationClient,
        cache_size: int = 100,
        cache_ttl: int | None = 3600,
        enable_cache: bool = True,
    ) -> None:
        self.client = client
        self.enable_cache = enable_cache
        self._cache: LRUCache[SchemaGenerationResponse] = LRUCache(max_size=cache_size, ttl_seconds=cache_ttl)

    @property
    def cache(self) -> LRUCache[SchemaGenerationResponse]:
        return self._cache

    async def _request_schema(self, request: GenerationRequest) -> Result[UISchema, SchemaParseError]:
        try:
            response = await self.client.generate(request)
        except CollaboratorError as e:
            return Failure(SchemaParseError(str(e)))
        return parse_schema(response.text)

    async def generate(self, request: SchemaGenerationRequest) -> SchemaGenerationResponse:
        key = hash_fields(request.prompt, request.style, request.color_scheme, request.layout)
        if self.enable_cache:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("generation_cache_hit", prompt=request.prompt[:50])
                return cached.copy()

        result = await self._request_schema(
            GenerationRequest(
                system=SCHEMA_GENERATION_SYSTEM,
                user=schema_generation_prompt(request),
                json_mode=True,
            )
        )
        fallback = not is_successful(result)
        schema = schema_or_default(result, request.prompt)

        report = validate_schema(schema)
        fixed = fix_schema(schema)

        response = SchemaGenerationResponse(
            schema=fixed,
            jsx=schema_to_jsx(fixed),
            description=fixed.metadata.description or f"Generated UI for: {request.prompt}",
            suggestions=layout_suggestions(fixed),
            warnings=report.errors + report.warnings,
            fallback=fallback,
        )

        logger.info(
            "schema_generated",
            prompt=request.prompt[:50],
            nodes=count_nodes(fixed.root),
            fallback=fallback,
        )

        if self.enable_cache and not fallback:
            self._cache.set(key, response)
        return response.copy()

    async def edit(
        self,
        schema: UISchema,
        instruction: str = "",
        sketch_image: ImagePayload | None = None,
    ) -> SchemaEditResponse:
        """
        Apply a free-form instruction, optionally guided by a sketch image.

        The reply is adopted through ``SchemaEditor.accept_revision`` so the
        document keeps its id and its version keeps increasing.
        """
        edit_request = SchemaEditRequest(instruction=instruction)
        result = await self._request_schema(
            GenerationRequest(
                system=SCHEMA_EDIT_SYSTEM,
                user=schema_edit_prompt(schema.to_json(), edit_request.instruction),
                image=sketch_image,
                json_mode=True,
            )
        )

        if not is_successful(result):
            logger.warning("schema_edit_failed", error=str(result.failure()))
            return SchemaEditResponse(
                success=False,
                schema=schema.model_copy(deep=True),
                needs_help=True,
                error=NEEDS_HELP_MESSAGE,
            )

        editor = SchemaEditor(schema)
        outcome = editor.accept_revision(result.unwrap())
        return SchemaEditResponse(
            success=True,
            schema=outcome.updated_schema,
            warnings=outcome.warnings,
        )
