"""Web layer for the infinicanvas API."""

from infinicanvas.web.controllers import BoardController, PageController
from infinicanvas.web.router import create_router

__all__ = ["BoardController", "PageController", "create_router"]
