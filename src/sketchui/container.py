"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from sketchui.ai.analysis import SketchAnalyzer
from sketchui.ai.client import GenerationClient, create_generation_client
from sketchui.ai.executor import ActionExecutor
from sketchui.ai.generation import SchemaGenerator
from sketchui.ai.orchestrator import ActionOrchestrator
from sketchui.ai.planner import ActionPlanner
from sketchui.core.config import Settings, get_settings
from sketchui.core.logging_config import configure_logging
from sketchui.sketch.persistence import FileKeyValueStore, KeyValueStore
from sketchui.sketch.store import SketchStore


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_generation_client(self, settings: Settings) -> GenerationClient:
        """Provide the client for the configured provider."""
        return create_generation_client(settings)

    @singleton
    @provider
    def provide_persistence(self, settings: Settings) -> KeyValueStore:
        return FileKeyValueStore(settings.store_dir)

    @singleton
    @provider
    def provide_store(self, settings: Settings, persistence: KeyValueStore) -> SketchStore:
        """Provide a loaded annotation store."""
        return SketchStore(persistence, store_key=settings.store_key).load()

    @singleton
    @provider
    def provide_schema_generator(self, settings: Settings, client: GenerationClient) -> SchemaGenerator:
        return SchemaGenerator(
            client,
            cache_size=settings.cache_size,
            cache_ttl=settings.cache_ttl,
            enable_cache=settings.enable_cache,
        )

    @singleton
    @provider
    def provide_analyzer(self, client: GenerationClient) -> SketchAnalyzer:
        return SketchAnalyzer(client)

    @singleton
    @provider
    def provide_planner(self, client: GenerationClient) -> ActionPlanner:
        return ActionPlanner(client)

    @singleton
    @provider
    def provide_executor(self, client: GenerationClient) -> ActionExecutor:
        return ActionExecutor(client)

    @singleton
    @provider
    def provide_orchestrator(
        self,
        settings: Settings,
        store: SketchStore,
        analyzer: SketchAnalyzer,
        planner: ActionPlanner,
        executor: ActionExecutor,
    ) -> ActionOrchestrator:
        """Provide the orchestrator with pacing from settings."""
        return ActionOrchestrator(
            store,
            analyzer,
            planner,
            executor,
            analysis_delay=settings.analysis_delay,
            action_delay=settings.action_delay,
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])


def bootstrap(settings: Settings | None = None) -> Injector:
    """Configure logging from settings, then build the container."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    return create_container(settings)
