"""World <-> screen view transform with pointer-anchored zoom."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from infinicanvas.core.models import Point

MIN_SCALE = 0.05
MAX_SCALE = 10.0


def clamp_scale(scale: float) -> float:
    """Clamp a scale factor to the supported zoom range."""
    return min(MAX_SCALE, max(MIN_SCALE, scale))


@dataclass(frozen=True)
class ViewTransform:
    """Uniform scale plus offset mapping world space to screen space.

    A world point ``(x, y)`` appears on screen at
    ``(x * scale + offset_x, y * scale + offset_y)``.

    Attributes:
        scale: Zoom factor, always within ``[MIN_SCALE, MAX_SCALE]``.
        offset_x: Horizontal screen offset of the world origin.
        offset_y: Vertical screen offset of the world origin.
    """

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def __post_init__(self) -> None:
        """Clamp the scale into the supported range."""
        object.__setattr__(self, "scale", clamp_scale(self.scale))

    def to_world(self, screen: Point) -> Point:
        """Map a screen point to world coordinates."""
        return Point((screen.x - self.offset_x) / self.scale, (screen.y - self.offset_y) / self.scale)

    def to_screen(self, world: Point) -> Point:
        """Map a world point to screen coordinates."""
        return Point(world.x * self.scale + self.offset_x, world.y * self.scale + self.offset_y)

    def zoom(self, focal: Point, factor: float) -> ViewTransform:
        """Scale by ``factor`` while keeping the world point under ``focal`` fixed.

        Args:
            focal: Screen point that stays anchored, usually the cursor.
            factor: Multiplier applied to the current scale before clamping.

        Returns:
            The zoomed transform.
        """
        return self.zoom_to(focal, self.scale * factor)

    def zoom_to(self, focal: Point, scale: float) -> ViewTransform:
        """Set an absolute scale anchored at ``focal``."""
        new_scale = clamp_scale(scale)
        ratio = new_scale / self.scale
        return ViewTransform(
            scale=new_scale,
            offset_x=focal.x - ratio * (focal.x - self.offset_x),
            offset_y=focal.y - ratio * (focal.y - self.offset_y),
        )

    def pan(self, dx: float, dy: float) -> ViewTransform:
        """Shift the offset by raw screen-space deltas."""
        return replace(self, offset_x=self.offset_x + dx, offset_y=self.offset_y + dy)

    @property
    def zoom_percent(self) -> int:
        """Scale as a rounded percentage for display."""
        return math.floor(self.scale * 100 + 0.5)


def to_world(screen: Point, transform: ViewTransform) -> Point:
    """Map a screen point to world coordinates under ``transform``."""
    return transform.to_world(screen)


def to_screen(world: Point, transform: ViewTransform) -> Point:
    """Map a world point to screen coordinates under ``transform``."""
    return transform.to_screen(world)


def zoom(focal: Point, factor: float, transform: ViewTransform) -> ViewTransform:
    """Return ``transform`` zoomed by ``factor`` around the screen point ``focal``."""
    return transform.zoom(focal, factor)


def pan(transform: ViewTransform, dx: float, dy: float) -> ViewTransform:
    """Return ``transform`` panned by screen-space deltas."""
    return transform.pan(dx, dy)
