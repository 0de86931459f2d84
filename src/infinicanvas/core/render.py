"""Raster render pipeline for the whiteboard, backed by Pillow.

Each frame clears to the background color, draws a world-aligned grid, then
draws elements in list order (later elements on top) under the view
transform. An in-progress element is simply appended to the list by the
caller so the active gesture is always drawn last.
"""

from __future__ import annotations

import base64
import io
import math
from functools import lru_cache
from typing import TYPE_CHECKING

from PIL import Image, ImageColor, ImageDraw, ImageFont

from infinicanvas.config import EngineConfig
from infinicanvas.core.geometry import smooth_path
from infinicanvas.core.hit_testing import TEXT_LINE_HEIGHT
from infinicanvas.core.models import Arrow, Circle, Line, Point, Rectangle, Sticky, Stroke, Text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from infinicanvas.core.models import Element
    from infinicanvas.core.transform import ViewTransform

RGBA = tuple[int, int, int, int]

ARROW_HEAD_BASE = 16.0
ARROW_HEAD_ANGLE = math.pi / 6
STICKY_TEXT_COLOR = "#1a1a2e"
STICKY_FONT_SIZE = 13.0
STICKY_MIN_FONT_PX = 8
STICKY_PADDING = 10.0


def parse_color(color: str | None) -> RGBA:
    """Parse a color string into an RGBA tuple.

    Hex colors may carry an alpha byte (``#rrggbbaa``); anything else is
    resolved through Pillow's color names.
    """
    if not color:
        return (0, 0, 0, 255)
    if color.startswith("#"):
        value = color.lstrip("#")
        if len(value) == 6:
            return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16), 255)
        if len(value) == 8:
            return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16), int(value[6:8], 16))
    rgb = ImageColor.getrgb(color)
    if len(rgb) == 3:
        return (*rgb, 255)
    return rgb


@lru_cache(maxsize=64)
def _font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


class Surface:
    """Raster backing store the render pipeline draws into.

    Attributes:
        image: The RGB Pillow image holding the last rendered frame.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a surface of the given pixel size.

        Args:
            width: Width in pixels.
            height: Height in pixels.
        """
        self.image = Image.new("RGB", (max(1, int(width)), max(1, int(height))))

    @property
    def width(self) -> int:
        """Width in pixels."""
        return self.image.width

    @property
    def height(self) -> int:
        """Height in pixels."""
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)`` in pixels."""
        return self.image.size

    def resize(self, width: int, height: int) -> None:
        """Replace the backing image with a blank one of the new size."""
        self.image = Image.new("RGB", (max(1, int(width)), max(1, int(height))))


class Renderer:
    """Draws an element list onto a :class:`Surface` under a view transform."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Engine configuration supplying background, grid and curve settings.
        """
        self.config = config or EngineConfig()

    def render(self, surface: Surface, elements: Iterable[Element], transform: ViewTransform) -> None:
        """Draw one complete frame.

        Args:
            surface: The surface to draw on.
            elements: Elements in draw order.
            transform: The current view transform.
        """
        image = surface.image
        image.paste(parse_color(self.config.background_color)[:3], (0, 0, image.width, image.height))
        draw = ImageDraw.Draw(image, "RGBA")
        self._draw_grid(draw, image.size, transform)

        for element in elements:
            if element.opacity <= 0:
                continue
            if element.opacity >= 1:
                self._draw_element(draw, element, transform)
                continue
            # Translucent elements are composited from their own layer.
            layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
            self._draw_element(ImageDraw.Draw(layer), element, transform)
            alpha = layer.getchannel("A").point(lambda a, o=element.opacity: round(a * o))
            layer.putalpha(alpha)
            image.paste(layer, (0, 0), layer)

    def _draw_grid(self, draw: ImageDraw.ImageDraw, size: tuple[int, int], transform: ViewTransform) -> None:
        """Draw the reference grid, aligned with the world origin."""
        width, height = size
        spacing = self.config.grid_spacing * transform.scale
        if spacing <= 0:
            return
        color = parse_color(self.config.grid_color)

        x = transform.offset_x % spacing
        while x < width:
            draw.line([(x, 0), (x, height)], fill=color, width=1)
            x += spacing
        y = transform.offset_y % spacing
        while y < height:
            draw.line([(0, y), (width, y)], fill=color, width=1)
            y += spacing

    def _draw_element(self, draw: ImageDraw.ImageDraw, element: Element, transform: ViewTransform) -> None:
        """Draw an element with the variant-specific routine."""
        if isinstance(element, Stroke):
            self._draw_stroke(draw, element, transform)
        elif isinstance(element, Rectangle):
            self._draw_rectangle(draw, element, transform)
        elif isinstance(element, Circle):
            self._draw_circle(draw, element, transform)
        elif isinstance(element, Arrow):
            self._draw_arrow(draw, element, transform)
        elif isinstance(element, Line):
            self._draw_line(draw, element, transform)
        elif isinstance(element, Text):
            self._draw_text(draw, element, transform)
        elif isinstance(element, Sticky):
            self._draw_sticky(draw, element, transform)

    @staticmethod
    def _xy(transform: ViewTransform, x: float, y: float) -> tuple[float, float]:
        p = transform.to_screen(Point(x, y))
        return (p.x, p.y)

    @staticmethod
    def _width(line_width: float, transform: ViewTransform) -> int:
        return max(1, round(line_width * transform.scale))

    def _draw_stroke(self, draw: ImageDraw.ImageDraw, stroke: Stroke, transform: ViewTransform) -> None:
        """Draw a freehand path smoothed through quadratic curves."""
        if len(stroke.points) < 2:
            return
        color = parse_color(stroke.color)
        width = self._width(stroke.line_width, transform)
        path = [self._xy(transform, p.x, p.y) for p in smooth_path(stroke.points, self.config.curve_segments)]
        draw.line(path, fill=color, width=width, joint="curve")

        # Round caps
        radius = width / 2
        for x, y in (path[0], path[-1]):
            draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=color)

    def _draw_rectangle(self, draw: ImageDraw.ImageDraw, rect: Rectangle, transform: ViewTransform) -> None:
        """Draw a rectangle with optional fill."""
        x0, y0 = self._xy(transform, rect.x, rect.y)
        x1, y1 = self._xy(transform, rect.x + rect.width, rect.y + rect.height)
        if rect.fill:
            draw.rectangle([x0, y0, x1, y1], fill=parse_color(rect.fill))
        draw.rectangle(
            [x0, y0, x1, y1],
            outline=parse_color(rect.color),
            width=self._width(rect.line_width, transform),
        )

    def _draw_circle(self, draw: ImageDraw.ImageDraw, circle: Circle, transform: ViewTransform) -> None:
        """Draw an ellipse with optional fill."""
        rx = abs(circle.rx)
        ry = abs(circle.ry)
        x0, y0 = self._xy(transform, circle.cx - rx, circle.cy - ry)
        x1, y1 = self._xy(transform, circle.cx + rx, circle.cy + ry)
        if circle.fill:
            draw.ellipse([x0, y0, x1, y1], fill=parse_color(circle.fill))
        draw.ellipse(
            [x0, y0, x1, y1],
            outline=parse_color(circle.color),
            width=self._width(circle.line_width, transform),
        )

    def _draw_line(self, draw: ImageDraw.ImageDraw, line: Line, transform: ViewTransform) -> None:
        """Draw a straight segment."""
        draw.line(
            [self._xy(transform, line.x1, line.y1), self._xy(transform, line.x2, line.y2)],
            fill=parse_color(line.color),
            width=self._width(line.line_width, transform),
        )

    def _draw_arrow(self, draw: ImageDraw.ImageDraw, arrow: Arrow, transform: ViewTransform) -> None:
        """Draw a segment with a filled triangular head at its free end."""
        color = parse_color(arrow.color)
        start = self._xy(transform, arrow.x1, arrow.y1)
        end = self._xy(transform, arrow.x2, arrow.y2)
        draw.line([start, end], fill=color, width=self._width(arrow.line_width, transform))

        head = ARROW_HEAD_BASE + arrow.line_width * 2
        angle = math.atan2(arrow.y2 - arrow.y1, arrow.x2 - arrow.x1)
        left = self._xy(
            transform,
            arrow.x2 - head * math.cos(angle - ARROW_HEAD_ANGLE),
            arrow.y2 - head * math.sin(angle - ARROW_HEAD_ANGLE),
        )
        right = self._xy(
            transform,
            arrow.x2 - head * math.cos(angle + ARROW_HEAD_ANGLE),
            arrow.y2 - head * math.sin(angle + ARROW_HEAD_ANGLE),
        )
        draw.polygon([end, left, right], fill=color)

    def _draw_text(self, draw: ImageDraw.ImageDraw, text: Text, transform: ViewTransform) -> None:
        """Draw multi-line text from its top-left corner."""
        font = _font(max(1, round(text.font_size * transform.scale)))
        color = parse_color(text.color)
        for i, line in enumerate(text.lines):
            position = self._xy(transform, text.x, text.y + i * text.font_size * TEXT_LINE_HEIGHT)
            draw.text(position, line, fill=color, font=font, anchor="lt")

    def _draw_sticky(self, draw: ImageDraw.ImageDraw, sticky: Sticky, transform: ViewTransform) -> None:
        """Draw a sticky note as a filled box holding its text."""
        x0, y0 = self._xy(transform, sticky.x, sticky.y)
        x1, y1 = self._xy(transform, sticky.x + sticky.width, sticky.y + sticky.height)
        draw.rectangle([x0, y0, x1, y1], fill=parse_color(sticky.bg_color))
        if not sticky.text:
            return
        font_px = max(STICKY_MIN_FONT_PX, round(STICKY_FONT_SIZE * transform.scale))
        padding = STICKY_PADDING * transform.scale
        draw.multiline_text(
            (x0 + padding, y0 + padding),
            sticky.text,
            fill=parse_color(STICKY_TEXT_COLOR),
            font=_font(font_px),
        )


def export_png(surface: Surface, background: str) -> bytes:
    """Re-rasterize a surface onto an opaque background and encode it as PNG.

    Args:
        surface: The surface holding the current frame.
        background: Color pre-filled behind the frame.

    Returns:
        PNG image as bytes.
    """
    offscreen = Image.new("RGB", surface.size, parse_color(background)[:3])
    offscreen.paste(surface.image, (0, 0))
    buffer = io.BytesIO()
    offscreen.save(buffer, format="PNG")
    return buffer.getvalue()


def png_data_url(png: bytes) -> str:
    """Wrap PNG bytes in a ``data:`` URL."""
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
