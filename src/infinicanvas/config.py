"""Engine configuration for infinicanvas."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

STICKY_COLORS: tuple[str, ...] = ("#fef08a", "#86efac", "#93c5fd", "#f9a8d4", "#fdba74")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


@dataclass
class EngineConfig:
    """Tuning values for the drawing engine and its render pipeline.

    Environment variables:
        INFINICANVAS_BACKGROUND_COLOR: Canvas background color (hex)
        INFINICANVAS_VIEWPORT_WIDTH: Initial viewport width in pixels
        INFINICANVAS_VIEWPORT_HEIGHT: Initial viewport height in pixels
        INFINICANVAS_GRID_SPACING: Grid spacing in world units
    """

    background_color: str = field(default_factory=lambda: os.getenv("INFINICANVAS_BACKGROUND_COLOR", "#1a1a2e"))
    viewport_width: int = field(default_factory=lambda: _env_int("INFINICANVAS_VIEWPORT_WIDTH", 1280))
    viewport_height: int = field(default_factory=lambda: _env_int("INFINICANVAS_VIEWPORT_HEIGHT", 800))
    grid_spacing: float = field(default_factory=lambda: _env_float("INFINICANVAS_GRID_SPACING", 40.0))
    grid_color: str = "#ffffff0a"

    # Auto-pan while drawing near a viewport edge
    edge_margin: float = 80.0
    auto_pan_speed: float = 10.0

    # Wheel handling
    zoom_sensitivity: float = 0.001
    scroll_speed: float = 1.2

    # Eraser radius is stroke_width * eraser_factor screen pixels
    eraser_factor: float = 12.0

    sticky_width: float = 180.0
    sticky_height: float = 160.0
    sticky_colors: tuple[str, ...] = STICKY_COLORS

    # Line segments used to flatten each quadratic curve of a stroke
    curve_segments: int = 8
