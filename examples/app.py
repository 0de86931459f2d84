"""Minimal example hosting the infinicanvas engine with Litestar.

This example demonstrates how to mount the whiteboard engine in your own
Litestar application using the plugin system.

The application will:
    - Create a WhiteboardEngine rendering into an in-memory surface
    - Wrap it in a PageManager and mount REST API endpoints at /api
    - Enable dependency injection for the engine, pages and export service

Running the Application:
    python examples/app.py

Then visit:
    - http://127.0.0.1:8000/schema - OpenAPI documentation
    - http://127.0.0.1:8000/api/board - Board state

Example API Usage:
    # Draw a rectangle
    curl -X PUT http://127.0.0.1:8000/api/board/settings \\
        -H "Content-Type: application/json" -d '{"tool": "rectangle"}'
    curl -X POST http://127.0.0.1:8000/api/board/pointer/down \\
        -H "Content-Type: application/json" -d '{"x": 100, "y": 100}'
    curl -X POST http://127.0.0.1:8000/api/board/pointer/move \\
        -H "Content-Type: application/json" -d '{"x": 300, "y": 200}'
    curl -X POST http://127.0.0.1:8000/api/board/pointer/up \\
        -H "Content-Type: application/json" -d '{"x": 300, "y": 200}'

    # Download the current frame
    curl -o board.png http://127.0.0.1:8000/api/board/export.png
"""

from __future__ import annotations

from litestar import Litestar

from infinicanvas import EngineConfig, InfinicanvasConfig, InfinicanvasPlugin
from infinicanvas.core.error_handling import get_exception_handlers

app = Litestar(
    plugins=[
        InfinicanvasPlugin(
            InfinicanvasConfig(
                engine_config=EngineConfig(viewport_width=1024, viewport_height=768),
                # Mount API routes at /api
                api_path="/api",
            )
        )
    ],
    exception_handlers=get_exception_handlers(),
    debug=True,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="127.0.0.1",
        port=8000,
        log_level="info",
    )
