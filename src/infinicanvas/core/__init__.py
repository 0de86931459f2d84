"""Core drawing engine for infinicanvas."""

from infinicanvas.core.engine import WhiteboardEngine
from infinicanvas.core.events import KeyEvent, PointerEvent, TextRequest, WheelEvent, touch_to_pointer
from infinicanvas.core.history import History
from infinicanvas.core.hit_testing import hit_test, is_valid
from infinicanvas.core.models import Arrow, Circle, Element, Line, Point, Rectangle, Sticky, Stroke, Text
from infinicanvas.core.render import Renderer, Surface
from infinicanvas.core.snapshot import BoardSnapshot
from infinicanvas.core.style import ToolSettings
from infinicanvas.core.transform import ViewTransform
from infinicanvas.core.types import ElementType, KeyAction, PointerButton, Tool, ToolState

__all__ = [
    "Arrow",
    "BoardSnapshot",
    "Circle",
    "Element",
    "ElementType",
    "History",
    "KeyAction",
    "KeyEvent",
    "Line",
    "Point",
    "PointerButton",
    "PointerEvent",
    "Rectangle",
    "Renderer",
    "Sticky",
    "Stroke",
    "Surface",
    "Text",
    "TextRequest",
    "Tool",
    "ToolSettings",
    "ToolState",
    "ViewTransform",
    "WheelEvent",
    "WhiteboardEngine",
    "hit_test",
    "is_valid",
    "touch_to_pointer",
]
