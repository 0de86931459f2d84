"""Litestar plugin for infinicanvas integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from infinicanvas.config import EngineConfig
from infinicanvas.core.engine import WhiteboardEngine
from infinicanvas.services.export import ExportService
from infinicanvas.services.pages import PageManager
from infinicanvas.web.router import create_router

if TYPE_CHECKING:
    from litestar.config.app import AppConfig


@dataclass
class InfinicanvasConfig:
    """Configuration for the infinicanvas plugin.

    Attributes:
        engine_config: Engine tuning values. Defaults read the environment.
        enable_api: Whether to mount the REST API routes. Defaults to True.
        api_path: Base path for mounting API routes. Defaults to "/api".
        attach_surface: Whether the engine renders into a raster surface.
            Without one, image export answers 503. Defaults to True.

    Example:
        >>> config = InfinicanvasConfig(api_path="/api/v1", attach_surface=False)
    """

    engine_config: EngineConfig = field(default_factory=EngineConfig)
    enable_api: bool = True
    api_path: str = "/api"
    attach_surface: bool = True


class InfinicanvasPlugin(InitPluginProtocol):
    """Litestar plugin hosting one whiteboard session.

    The plugin owns a single :class:`PageManager` (and its live engine) for the
    lifetime of the application and registers it, the engine and an
    :class:`ExportService` with the dependency injection system.

    Example:
        >>> from litestar import Litestar
        >>> from infinicanvas import InfinicanvasPlugin, InfinicanvasConfig
        >>>
        >>> app = Litestar(plugins=[InfinicanvasPlugin(InfinicanvasConfig())])

    Accessing the engine in a route handler:

        >>> from litestar import get
        >>> from infinicanvas.core.engine import WhiteboardEngine
        >>>
        >>> @get("/count")
        ... async def count(engine: WhiteboardEngine) -> dict:
        ...     return {"count": engine.element_count}
    """

    def __init__(self, config: InfinicanvasConfig | None = None) -> None:
        """Initialize the plugin with optional configuration.

        Args:
            config: Plugin configuration. Defaults to InfinicanvasConfig().
        """
        self._config = config or InfinicanvasConfig()
        self._pages: PageManager | None = None
        self._export_service: ExportService | None = None

    @property
    def pages(self) -> PageManager | None:
        """The session's page manager, available after app init."""
        return self._pages

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Create the session and register its dependencies.

        Args:
            app_config: The Litestar application configuration object.

        Returns:
            The modified application configuration.
        """
        engine_config = self._config.engine_config
        engine = WhiteboardEngine(engine_config)
        if self._config.attach_surface:
            engine.attach_surface()
        self._pages = PageManager(engine)
        self._export_service = ExportService(engine_config)

        def provide_pages() -> PageManager:
            """Dependency provider for PageManager."""
            if self._pages is None:
                msg = "Page manager not initialized"
                raise RuntimeError(msg)
            return self._pages

        def provide_engine() -> WhiteboardEngine:
            """Dependency provider for the live WhiteboardEngine."""
            return provide_pages().engine

        def provide_export_service() -> ExportService:
            """Dependency provider for ExportService."""
            if self._export_service is None:
                msg = "Export service not initialized"
                raise RuntimeError(msg)
            return self._export_service

        app_config.dependencies["pages"] = Provide(provide_pages, sync_to_thread=False)
        app_config.dependencies["engine"] = Provide(provide_engine, sync_to_thread=False)
        app_config.dependencies["export_service"] = Provide(provide_export_service, sync_to_thread=False)

        if self._config.enable_api:
            app_config.route_handlers.append(create_router(path=self._config.api_path))

        return app_config
