"""Core domain models for the infinicanvas element model.

All models are immutable. Gestures that change an element build a new value
with :func:`dataclasses.replace` instead of mutating a shared instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar
from uuid import uuid4

from infinicanvas.config import STICKY_COLORS
from infinicanvas.core.style import DEFAULT_COLOR, DEFAULT_FONT_SIZE, DEFAULT_STROKE_WIDTH
from infinicanvas.core.types import ElementType

STICKY_WIDTH = 180.0
STICKY_HEIGHT = 160.0


def generate_id() -> str:
    """Return a new opaque element id."""
    return uuid4().hex


@dataclass(frozen=True)
class Point:
    """A point in world coordinates.

    Attributes:
        x: X-coordinate position.
        y: Y-coordinate position.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Element:
    """Base class for all canvas elements.

    Attributes:
        id: Unique identifier for the element.
        opacity: Opacity level from 0.0 (transparent) to 1.0 (opaque).
    """

    element_type: ClassVar[ElementType]

    id: str = field(default_factory=generate_id)
    opacity: float = 1.0


@dataclass(frozen=True)
class Stroke(Element):
    """A freehand path.

    Attributes:
        points: Ordered points of the path.
        color: Stroke color in hex format.
        line_width: Width of the path in world units.
    """

    element_type: ClassVar[ElementType] = ElementType.STROKE

    points: tuple[Point, ...] = ()
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_STROKE_WIDTH


@dataclass(frozen=True)
class Rectangle(Element):
    """An axis-aligned rectangle anchored at its top-left corner."""

    element_type: ClassVar[ElementType] = ElementType.RECTANGLE

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_STROKE_WIDTH
    fill: str | None = None


@dataclass(frozen=True)
class Circle(Element):
    """An ellipse with independent horizontal and vertical radii."""

    element_type: ClassVar[ElementType] = ElementType.CIRCLE

    cx: float = 0.0
    cy: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_STROKE_WIDTH
    fill: str | None = None


@dataclass(frozen=True)
class LinearElement(Element):
    """Shared geometry of directed segments (lines and arrows)."""

    element_type: ClassVar[ElementType] = ElementType.LINE

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_STROKE_WIDTH

    @property
    def start(self) -> Point:
        """The anchored endpoint."""
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        """The free endpoint."""
        return Point(self.x2, self.y2)


@dataclass(frozen=True)
class Line(LinearElement):
    """A plain directed segment."""

    element_type: ClassVar[ElementType] = ElementType.LINE


@dataclass(frozen=True)
class Arrow(LinearElement):
    """A segment with a triangular head at its free endpoint."""

    element_type: ClassVar[ElementType] = ElementType.ARROW


@dataclass(frozen=True)
class Text(Element):
    """A block of text anchored at its top-left corner.

    Attributes:
        x: Left edge in world units.
        y: Top edge in world units.
        text: Text content, lines separated by ``\\n``.
        color: Text color in hex format.
        font_size: Font size in world units.
    """

    element_type: ClassVar[ElementType] = ElementType.TEXT

    x: float = 0.0
    y: float = 0.0
    text: str = ""
    color: str = DEFAULT_COLOR
    font_size: int = DEFAULT_FONT_SIZE

    @property
    def lines(self) -> list[str]:
        """Text content split into display lines."""
        return self.text.split("\n")


@dataclass(frozen=True)
class Sticky(Element):
    """A sticky note: a colored box holding text."""

    element_type: ClassVar[ElementType] = ElementType.STICKY

    x: float = 0.0
    y: float = 0.0
    width: float = STICKY_WIDTH
    height: float = STICKY_HEIGHT
    text: str = ""
    bg_color: str = STICKY_COLORS[0]


ELEMENT_CLASSES: dict[ElementType, type[Element]] = {
    ElementType.STROKE: Stroke,
    ElementType.RECTANGLE: Rectangle,
    ElementType.CIRCLE: Circle,
    ElementType.LINE: Line,
    ElementType.ARROW: Arrow,
    ElementType.TEXT: Text,
    ElementType.STICKY: Sticky,
}
