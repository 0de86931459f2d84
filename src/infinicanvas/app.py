"""Main Litestar application for infinicanvas.

This module provides the application factory and a configured app instance
for hosting the whiteboard engine over HTTP, e.g. ``uvicorn infinicanvas.app:app``.
"""

from __future__ import annotations

import os

from litestar import Litestar
from litestar.openapi import OpenAPIConfig
from litestar.openapi.plugins import ScalarRenderPlugin, SwaggerRenderPlugin

from infinicanvas import __version__
from infinicanvas.cli import InfinicanvasCLIPlugin
from infinicanvas.config import EngineConfig
from infinicanvas.core.error_handling import get_exception_handlers
from infinicanvas.core.logging import CorrelationIdMiddleware, RequestLoggingMiddleware, configure_logging
from infinicanvas.plugin import InfinicanvasConfig, InfinicanvasPlugin


def create_app(
    *,
    debug: bool = False,
    json_logs: bool = False,
    attach_surface: bool = True,
    engine_config: EngineConfig | None = None,
) -> Litestar:
    """Create and configure the Litestar application.

    Args:
        debug: Whether to enable debug mode and debug-level logs.
        json_logs: Whether to output logs as JSON (for production).
        attach_surface: Whether the engine renders into a raster surface.
        engine_config: Engine configuration. Defaults read the environment.

    Returns:
        Configured Litestar application instance.
    """
    configure_logging(debug=debug, json_logs=json_logs)

    plugin = InfinicanvasPlugin(
        InfinicanvasConfig(
            engine_config=engine_config or EngineConfig(),
            api_path="/api",
            attach_surface=attach_surface,
        )
    )

    return Litestar(
        route_handlers=[],
        plugins=[plugin, InfinicanvasCLIPlugin()],
        debug=debug,
        middleware=[CorrelationIdMiddleware, RequestLoggingMiddleware],
        exception_handlers=get_exception_handlers(),
        openapi_config=OpenAPIConfig(
            title="infinicanvas API",
            version=__version__,
            description="Infinite-canvas whiteboard engine driven over HTTP",
            path="/schema",
            render_plugins=[ScalarRenderPlugin(path="/"), SwaggerRenderPlugin(path="/swagger")],
            use_handler_docstrings=True,
        ),
    )


# Default application instance for uvicorn
# Use INFINICANVAS_DEBUG=true for dev mode, defaults to False (production)
_debug = os.environ.get("INFINICANVAS_DEBUG", "").lower() in ("true", "1", "yes")
app = create_app(debug=_debug)
