"""Core type definitions for infinicanvas."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class ElementType(StrEnum):
    """Enumeration of drawable element kinds."""

    STROKE = "stroke"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    LINE = "line"
    ARROW = "arrow"
    TEXT = "text"
    STICKY = "sticky"


class Tool(StrEnum):
    """Enumeration of the tools a pointer gesture can be interpreted with."""

    SELECT = "select"
    PEN = "pen"
    ERASER = "eraser"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    LINE = "line"
    ARROW = "arrow"
    TEXT = "text"
    STICKY = "sticky"


class ToolState(StrEnum):
    """States of the pointer state machine."""

    IDLE = "idle"
    PANNING = "panning"
    DRAWING = "drawing"
    ERASING = "erasing"


class PointerButton(IntEnum):
    """Mouse button numbers as reported by pointer events."""

    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


class KeyAction(StrEnum):
    """Whether a key event is a press or a release."""

    DOWN = "down"
    UP = "up"
