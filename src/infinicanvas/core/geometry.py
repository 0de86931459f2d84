"""Pure geometry helpers used by hit-testing and rendering."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from infinicanvas.core.models import Point

if TYPE_CHECKING:
    from collections.abc import Sequence

# Substitutes for a zero-length segment so projection never divides by zero.
_MIN_SEGMENT_LENGTH = 1e-6


def distance(a: Point, b: Point) -> float:
    """Return the Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def dist_to_segment(p: Point, a: Point, b: Point) -> float:
    """Return the distance from ``p`` to the segment ``a``-``b``.

    The projection of ``p`` is clamped to the segment, so points beyond either
    end measure to the nearest endpoint.

    Args:
        p: The point to measure from.
        a: First endpoint of the segment.
        b: Second endpoint of the segment.

    Returns:
        The shortest distance from ``p`` to any point on the segment.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    length = math.hypot(dx, dy) or _MIN_SEGMENT_LENGTH
    t = ((p.x - a.x) * dx + (p.y - a.y) * dy) / (length * length)
    t = max(0.0, min(1.0, t))
    return math.hypot(p.x - (a.x + t * dx), p.y - (a.y + t * dy))


def point_in_rect(p: Point, x: float, y: float, width: float, height: float, padding: float = 0.0) -> bool:
    """Return True if ``p`` lies inside the rectangle grown by ``padding`` on every side."""
    return x - padding <= p.x <= x + width + padding and y - padding <= p.y <= y + height + padding


def quadratic_point(start: Point, control: Point, end: Point, t: float) -> Point:
    """Evaluate a quadratic Bezier curve at parameter ``t``."""
    u = 1.0 - t
    return Point(
        u * u * start.x + 2 * u * t * control.x + t * t * end.x,
        u * u * start.y + 2 * u * t * control.y + t * t * end.y,
    )


def smooth_path(points: Sequence[Point], segments: int = 8) -> list[Point]:
    """Flatten a freehand path into a smoothed polyline.

    Each interior point becomes the control point of a quadratic curve that
    ends at the midpoint to the next point; the path finishes with a straight
    segment to the last point.

    Args:
        points: The raw path.
        segments: Number of line segments used per quadratic curve.

    Returns:
        The flattened polyline. Paths shorter than three points are returned as-is.
    """
    if len(points) < 3:
        return list(points)

    path = [points[0]]
    current = points[0]
    for i in range(1, len(points) - 1):
        control = points[i]
        nxt = points[i + 1]
        mid = Point((control.x + nxt.x) / 2, (control.y + nxt.y) / 2)
        path.extend(quadratic_point(current, control, mid, step / segments) for step in range(1, segments + 1))
        current = mid
    path.append(points[-1])
    return path
