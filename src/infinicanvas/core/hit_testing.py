"""Validation of finished elements and eraser hit-testing.

The hit tests are deliberately approximate: text has no glyph metrics, so its
box is estimated from character count and font size.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from infinicanvas.core.geometry import dist_to_segment, distance, point_in_rect
from infinicanvas.core.models import Circle, Element, LinearElement, Rectangle, Sticky, Stroke, Text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from infinicanvas.core.models import Point

MIN_RECTANGLE_SIZE = 2.0
TEXT_CHAR_WIDTH = 0.6
TEXT_LINE_HEIGHT = 1.4


def is_valid(element: Element) -> bool:
    """Check whether a finished element may enter the committed list.

    Strokes need at least two points and rectangles must reach the minimum
    size on at least one axis; every other kind is valid once created.
    """
    if isinstance(element, Stroke):
        return len(element.points) >= 2
    if isinstance(element, Rectangle):
        return element.width >= MIN_RECTANGLE_SIZE or element.height >= MIN_RECTANGLE_SIZE
    return True


def text_bounds(text: Text) -> tuple[float, float]:
    """Approximate width and height of a text element."""
    return len(text.text) * text.font_size * TEXT_CHAR_WIDTH, text.font_size * TEXT_LINE_HEIGHT


def hit_test(element: Element, point: Point, radius: float) -> bool:  # noqa: PLR0911
    """Check whether an eraser at ``point`` with ``radius`` touches ``element``.

    Args:
        element: The element to test.
        point: Eraser position in world coordinates.
        radius: Eraser radius in world units.

    Returns:
        True if the element should be erased.
    """
    if isinstance(element, Stroke):
        return any(distance(p, point) < radius for p in element.points)

    if isinstance(element, Rectangle):
        cx = element.x + element.width / 2
        cy = element.y + element.height / 2
        return (
            abs(point.x - cx) <= element.width / 2 + radius
            and abs(point.y - cy) <= element.height / 2 + radius
        )

    if isinstance(element, Circle):
        rx = abs(element.rx) + radius
        ry = abs(element.ry) + radius
        if rx == 0 or ry == 0:
            return point.x == element.cx and point.y == element.cy
        dx = (point.x - element.cx) / rx
        dy = (point.y - element.cy) / ry
        return dx * dx + dy * dy <= 1

    if isinstance(element, LinearElement):
        return dist_to_segment(point, element.start, element.end) <= radius

    if isinstance(element, Text):
        width, height = text_bounds(element)
        return point_in_rect(point, element.x, element.y, width, height, radius)

    if isinstance(element, Sticky):
        return point_in_rect(point, element.x, element.y, element.width, element.height, radius)

    return False


def erase_at(elements: Iterable[Element], point: Point, radius: float) -> list[Element]:
    """Return ``elements`` without every element the eraser touches, order preserved."""
    return [element for element in elements if not hit_test(element, point, radius)]
