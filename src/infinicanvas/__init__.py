"""Infinicanvas: an infinite-canvas whiteboard engine with a Litestar host.

This package provides an interactive drawing engine for a single whiteboard
document on an unbounded 2-D plane. It includes the element model, the
pan/zoom view transform, a tool state machine that turns pointer, wheel and
key input into element mutations, a full-snapshot undo/redo history, a
Pillow render pipeline with PNG export, and a multi-page session wrapper.

Key Components:
    - Engine: WhiteboardEngine, EngineConfig
    - Models: Element, Stroke, Rectangle, Circle, Line, Arrow, Text, Sticky, Point
    - Services: ExportService (snapshot serialization), PageManager (pages)
    - Web: REST API controllers and router
    - Plugin: InfinicanvasPlugin for Litestar integration

Quick Start:
    >>> from infinicanvas import PointerEvent, Tool, WhiteboardEngine
    >>>
    >>> engine = WhiteboardEngine()
    >>> engine.set_tool(Tool.RECTANGLE)
    >>> engine.pointer_down(PointerEvent(10, 10))
    >>> engine.pointer_move(PointerEvent(110, 60))
    >>> engine.pointer_up(PointerEvent(110, 60))
    >>> engine.element_count
    1

Hosting over HTTP:
    >>> from litestar import Litestar
    >>> from infinicanvas import InfinicanvasPlugin, InfinicanvasConfig
    >>>
    >>> app = Litestar(plugins=[InfinicanvasPlugin(InfinicanvasConfig())])
"""

from __future__ import annotations

from infinicanvas.config import EngineConfig
from infinicanvas.core import (
    Arrow,
    BoardSnapshot,
    Circle,
    Element,
    ElementType,
    KeyEvent,
    Line,
    Point,
    PointerButton,
    PointerEvent,
    Rectangle,
    Sticky,
    Stroke,
    Text,
    TextRequest,
    Tool,
    ToolState,
    ViewTransform,
    WheelEvent,
    WhiteboardEngine,
)
from infinicanvas.exceptions import (
    ExportUnavailableError,
    InfinicanvasError,
    InvalidSnapshotError,
    PageNotFoundError,
)
from infinicanvas.plugin import InfinicanvasConfig, InfinicanvasPlugin
from infinicanvas.services import ExportService, Page, PageManager
from infinicanvas.web import BoardController, PageController, create_router

__all__ = [
    "Arrow",
    "BoardController",
    "BoardSnapshot",
    "Circle",
    "Element",
    "ElementType",
    "EngineConfig",
    "ExportService",
    "ExportUnavailableError",
    "InfinicanvasConfig",
    "InfinicanvasError",
    "InfinicanvasPlugin",
    "InvalidSnapshotError",
    "KeyEvent",
    "Line",
    "Page",
    "PageController",
    "PageManager",
    "PageNotFoundError",
    "Point",
    "PointerButton",
    "PointerEvent",
    "Rectangle",
    "Sticky",
    "Stroke",
    "Text",
    "TextRequest",
    "Tool",
    "ToolState",
    "ViewTransform",
    "WheelEvent",
    "WhiteboardEngine",
    "create_router",
]

__version__ = "0.1.0"
