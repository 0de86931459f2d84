"""Style defaults and the current tool settings for new elements."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import ImageColor

from infinicanvas.exceptions import InvalidColorError

DEFAULT_COLOR = "#f8fafc"
DEFAULT_STROKE_WIDTH = 3.0
DEFAULT_FONT_SIZE = 20
FILL_ALPHA_SUFFIX = "33"

PRESET_COLORS: tuple[str, ...] = (
    "#f8fafc",
    "#f87171",
    "#fb923c",
    "#facc15",
    "#4ade80",
    "#34d399",
    "#38bdf8",
    "#818cf8",
    "#c084fc",
    "#f472b6",
)


@dataclass
class ToolSettings:
    """Styling applied to elements created by the next gesture.

    Attributes:
        color: Stroke/text color in hex format.
        stroke_width: Line width for strokes and shapes, also scales the eraser.
        fill_shape: Whether rectangles and circles get a translucent fill.
        font_size: Font size for text elements.
    """

    color: str = DEFAULT_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH
    fill_shape: bool = False
    font_size: int = DEFAULT_FONT_SIZE

    @property
    def fill(self) -> str | None:
        """Fill color for closed shapes, or None when filling is off."""
        if not self.fill_shape:
            return None
        r, g, b = ImageColor.getrgb(self.color)[:3]
        return f"#{r:02x}{g:02x}{b:02x}{FILL_ALPHA_SUFFIX}"


def check_color(color: object) -> str:
    """Return ``color`` unchanged if it is a color Pillow can draw with.

    Accepts ``#rgb``, ``#rrggbb``, ``#rrggbbaa`` and CSS color names.

    Raises:
        InvalidColorError: If ``color`` is not a parseable color string.
    """
    if not isinstance(color, str):
        raise InvalidColorError(color)
    try:
        ImageColor.getrgb(color)
    except ValueError as e:
        raise InvalidColorError(color) from e
    return color
