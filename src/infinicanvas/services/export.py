"""Export service for board snapshots and rendered images."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from infinicanvas.config import EngineConfig
from infinicanvas.core.history import History
from infinicanvas.core.models import Arrow, Circle, Line, Point, Rectangle, Sticky, Stroke, Text
from infinicanvas.core.render import Renderer, Surface, export_png, png_data_url
from infinicanvas.core.snapshot import BoardSnapshot
from infinicanvas.core.style import check_color
from infinicanvas.core.transform import ViewTransform
from infinicanvas.core.types import ElementType
from infinicanvas.exceptions import InvalidColorError, InvalidSnapshotError

if TYPE_CHECKING:
    from infinicanvas.core.models import Element


def _optional_color(value: object) -> str | None:
    return None if value is None else check_color(value)


class ExportService:
    """Service for converting board snapshots to and from portable formats.

    Supports:
    - dict/JSON: The document, its history and the view, using camelCase keys
    - PNG: A rasterized frame of the snapshot's live elements
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialize the export service.

        Args:
            config: Engine configuration used when rasterizing snapshots.
        """
        self.config = config or EngineConfig()

    def to_dict(self, snapshot: BoardSnapshot) -> dict[str, Any]:
        """Export a snapshot to a dictionary.

        Args:
            snapshot: The snapshot to export.

        Returns:
            Dictionary representation of the snapshot.
        """
        transform = snapshot.view_transform
        return {
            "elements": [self._element_to_dict(e) for e in snapshot.elements],
            "history": [[self._element_to_dict(e) for e in entry] for entry in snapshot.history],
            "historyIndex": snapshot.history_index,
            "viewTransform": {
                "scale": transform.scale,
                "offsetX": transform.offset_x,
                "offsetY": transform.offset_y,
            },
        }

    def to_json(self, snapshot: BoardSnapshot, *, indent: int | None = 2) -> str:
        """Export a snapshot to JSON.

        Args:
            snapshot: The snapshot to export.
            indent: JSON indentation level (None for compact).

        Returns:
            JSON string representation of the snapshot.
        """
        return json.dumps(self.to_dict(snapshot), indent=indent)

    def from_dict(self, data: dict[str, Any]) -> BoardSnapshot:
        """Build a snapshot from its dictionary form.

        Element ids are kept, so an element that appears both live and in
        history decodes to equal values.

        Raises:
            InvalidSnapshotError: If a field is missing or malformed, an element
                type is unknown, or the history breaks its invariants.
        """
        if not isinstance(data, dict):
            msg = "Snapshot must be an object"
            raise InvalidSnapshotError(msg)
        try:
            elements = tuple(self._element_from_dict(e) for e in data.get("elements", []))
            history = tuple(
                tuple(self._element_from_dict(e) for e in entry) for entry in data.get("history", [[]])
            )
            history_index = int(data.get("historyIndex", 0))
            view = data.get("viewTransform") or {}
            transform = ViewTransform(
                scale=float(view.get("scale", 1.0)),
                offset_x=float(view.get("offsetX", 0.0)),
                offset_y=float(view.get("offsetY", 0.0)),
            )
        except (KeyError, TypeError, ValueError, AttributeError, InvalidColorError) as e:
            msg = f"Malformed snapshot: {e}"
            raise InvalidSnapshotError(msg) from e

        # Validates the history invariants
        History(history, history_index)

        return BoardSnapshot(
            elements=elements,
            history=history,
            history_index=history_index,
            view_transform=transform,
        )

    def from_json(self, payload: str | bytes) -> BoardSnapshot:
        """Build a snapshot from JSON.

        Raises:
            InvalidSnapshotError: If the payload is not valid JSON or not a valid snapshot.
        """
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            msg = f"Snapshot is not valid JSON: {e.msg}"
            raise InvalidSnapshotError(msg) from e
        return self.from_dict(data)

    def to_png(self, snapshot: BoardSnapshot, *, width: int | None = None, height: int | None = None) -> bytes:
        """Rasterize a snapshot's live elements under its own view transform.

        Args:
            snapshot: The snapshot to render.
            width: Image width in pixels. Defaults to the configured viewport width.
            height: Image height in pixels. Defaults to the configured viewport height.

        Returns:
            PNG image as bytes.
        """
        surface = Surface(width or self.config.viewport_width, height or self.config.viewport_height)
        Renderer(self.config).render(surface, snapshot.elements, snapshot.view_transform)
        return export_png(surface, self.config.background_color)

    def to_data_url(self, snapshot: BoardSnapshot, *, width: int | None = None, height: int | None = None) -> str:
        """Rasterize a snapshot and wrap the PNG in a data URL."""
        return png_data_url(self.to_png(snapshot, width=width, height=height))

    def _element_to_dict(self, element: Element) -> dict[str, Any]:
        """Convert an element to its dictionary form."""
        base: dict[str, Any] = {"id": element.id, "type": element.element_type.value}
        if element.opacity != 1.0:
            base["opacity"] = element.opacity

        if isinstance(element, Stroke):
            base["points"] = [{"x": p.x, "y": p.y} for p in element.points]
            base["color"] = element.color
            base["lineWidth"] = element.line_width

        elif isinstance(element, Rectangle):
            base.update(x=element.x, y=element.y, width=element.width, height=element.height)
            base["color"] = element.color
            base["lineWidth"] = element.line_width
            if element.fill:
                base["fill"] = element.fill

        elif isinstance(element, Circle):
            base.update(cx=element.cx, cy=element.cy, rx=element.rx, ry=element.ry)
            base["color"] = element.color
            base["lineWidth"] = element.line_width
            if element.fill:
                base["fill"] = element.fill

        elif isinstance(element, (Line, Arrow)):
            base.update(x1=element.x1, y1=element.y1, x2=element.x2, y2=element.y2)
            base["color"] = element.color
            base["lineWidth"] = element.line_width

        elif isinstance(element, Text):
            base.update(x=element.x, y=element.y, text=element.text, color=element.color)
            base["fontSize"] = element.font_size

        elif isinstance(element, Sticky):
            base.update(x=element.x, y=element.y, width=element.width, height=element.height, text=element.text)
            base["bgColor"] = element.bg_color

        return base

    def _element_from_dict(self, data: dict[str, Any]) -> Element:
        """Convert a dictionary back to an element.

        Raises:
            InvalidSnapshotError: If the element type is unknown.
            KeyError: If a required field is missing.
            InvalidColorError: If a color field cannot be parsed.
        """
        try:
            element_type = ElementType(data["type"])
        except ValueError as e:
            msg = f"Unknown element type: {data['type']!r}"
            raise InvalidSnapshotError(msg) from e

        common: dict[str, Any] = {"id": str(data["id"]), "opacity": float(data.get("opacity", 1.0))}

        if element_type is ElementType.STROKE:
            return Stroke(
                points=tuple(Point(float(p["x"]), float(p["y"])) for p in data["points"]),
                color=check_color(data["color"]),
                line_width=float(data["lineWidth"]),
                **common,
            )
        if element_type is ElementType.RECTANGLE:
            return Rectangle(
                x=float(data["x"]),
                y=float(data["y"]),
                width=float(data["width"]),
                height=float(data["height"]),
                color=check_color(data["color"]),
                line_width=float(data["lineWidth"]),
                fill=_optional_color(data.get("fill")),
                **common,
            )
        if element_type is ElementType.CIRCLE:
            return Circle(
                cx=float(data["cx"]),
                cy=float(data["cy"]),
                rx=float(data["rx"]),
                ry=float(data["ry"]),
                color=check_color(data["color"]),
                line_width=float(data["lineWidth"]),
                fill=_optional_color(data.get("fill")),
                **common,
            )
        if element_type in (ElementType.LINE, ElementType.ARROW):
            segment_cls = Arrow if element_type is ElementType.ARROW else Line
            return segment_cls(
                x1=float(data["x1"]),
                y1=float(data["y1"]),
                x2=float(data["x2"]),
                y2=float(data["y2"]),
                color=check_color(data["color"]),
                line_width=float(data["lineWidth"]),
                **common,
            )
        if element_type is ElementType.TEXT:
            return Text(
                x=float(data["x"]),
                y=float(data["y"]),
                text=data["text"],
                color=check_color(data["color"]),
                font_size=int(data["fontSize"]),
                **common,
            )
        return Sticky(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
            text=data["text"],
            bg_color=check_color(data["bgColor"]),
            **common,
        )
