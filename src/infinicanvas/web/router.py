"""Router configuration for the infinicanvas API."""

from __future__ import annotations

from litestar import Router

from infinicanvas.web.controllers import BoardController, PageController


def create_router(path: str = "/api") -> Router:
    """Create the infinicanvas API router.

    Args:
        path: The base path for all API routes. Defaults to "/api".

    Returns:
        A Litestar Router holding the board and page controllers.

    Example:
        >>> router = create_router("/api/v1")
    """
    return Router(
        path=path,
        route_handlers=[BoardController, PageController],
    )
