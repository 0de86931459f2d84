"""The whiteboard engine: element model, view transform, tool state machine and history.

One engine owns exactly one document. All mutation happens synchronously
inside the input or command call that caused it, and every visible change
triggers a render when a surface is attached.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, ClassVar

import structlog

from infinicanvas.config import EngineConfig
from infinicanvas.core.events import TextRequest
from infinicanvas.core.history import History
from infinicanvas.core.hit_testing import erase_at, is_valid
from infinicanvas.core.models import Arrow, Circle, Element, Line, LinearElement, Point, Rectangle, Sticky, Stroke, Text
from infinicanvas.core.render import Renderer, Surface, export_png, png_data_url
from infinicanvas.core.snapshot import BoardSnapshot
from infinicanvas.core.style import ToolSettings, check_color
from infinicanvas.core.transform import ViewTransform
from infinicanvas.core.types import KeyAction, PointerButton, Tool, ToolState
from infinicanvas.exceptions import ExportUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from infinicanvas.core.events import KeyEvent, PointerEvent, WheelEvent

logger = structlog.get_logger(__name__)


# Gesture states. Each value is owned by the engine and replaced, never mutated.


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""

    name: ClassVar[ToolState] = ToolState.IDLE


@dataclass(frozen=True)
class Panning:
    """Dragging the viewport.

    Attributes:
        last: Screen position of the previous pointer sample.
    """

    name: ClassVar[ToolState] = ToolState.PANNING

    last: Point


@dataclass(frozen=True)
class Drawing:
    """Building a new element.

    Attributes:
        element: The in-progress element.
        anchor: World point where the gesture began.
    """

    name: ClassVar[ToolState] = ToolState.DRAWING

    element: Element
    anchor: Point


@dataclass(frozen=True)
class Erasing:
    """Dragging the eraser."""

    name: ClassVar[ToolState] = ToolState.ERASING


Gesture = Idle | Panning | Drawing | Erasing

_SHAPE_TOOLS = (Tool.PEN, Tool.RECTANGLE, Tool.CIRCLE, Tool.LINE, Tool.ARROW)


def _empty_prompt() -> str:
    return ""


class WhiteboardEngine:
    """Interactive drawing engine for one page of an infinite canvas.

    The engine interprets pointer, wheel and key input against the selected
    tool to create, mutate and delete elements, keeps a full-snapshot
    undo/redo history, and renders into an optional Pillow surface.

    Attributes:
        config: Engine tuning values.
        settings: Color, stroke width, fill and font size used for new elements.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        prompt_text: Callable[[], str | None] | None = None,
        on_text_request: Callable[[TextRequest], None] | None = None,
        rng: random.Random | None = None,
        surface: Surface | None = None,
    ) -> None:
        """Initialize an engine with an empty document.

        Args:
            config: Engine configuration. Defaults to :class:`EngineConfig`.
            prompt_text: Blocking collaborator asked for sticky-note text.
                Returning None cancels the note. Defaults to a stub returning "".
            on_text_request: Called when the text tool asks the host for input.
            rng: Random source for sticky-note colors.
            surface: Surface to render into. Rendering is skipped without one.
        """
        self.config = config or EngineConfig()
        self.settings = ToolSettings()
        self._tool = Tool.PEN
        self._elements: tuple[Element, ...] = ()
        self._history = History()
        self._transform = ViewTransform()
        self._gesture: Gesture = Idle()
        self._space_down = False
        self._text_request: TextRequest | None = None
        self._prompt_text = prompt_text or _empty_prompt
        self._on_text_request = on_text_request
        self._rng = rng or random.Random()
        self._renderer = Renderer(self.config)
        self._surface = surface
        self._viewport = surface.size if surface else (self.config.viewport_width, self.config.viewport_height)
        self.render()

    # Observable state

    @property
    def tool(self) -> Tool:
        """The selected tool."""
        return self._tool

    @property
    def state(self) -> ToolState:
        """The pointer state machine's current state."""
        return self._gesture.name

    @property
    def elements(self) -> tuple[Element, ...]:
        """The committed element list in draw order."""
        return self._elements

    @property
    def element_count(self) -> int:
        """Number of committed elements."""
        return len(self._elements)

    @property
    def in_progress(self) -> Element | None:
        """The element being drawn by the current gesture, if any."""
        if isinstance(self._gesture, Drawing):
            return self._gesture.element
        return None

    @property
    def view_transform(self) -> ViewTransform:
        """The current world-to-screen transform."""
        return self._transform

    @property
    def zoom_percent(self) -> int:
        """Current zoom as a rounded percentage."""
        return self._transform.zoom_percent

    @property
    def can_undo(self) -> bool:
        """Whether undo would change the document."""
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        """Whether redo would change the document."""
        return self._history.can_redo

    @property
    def history_index(self) -> int:
        """Position within the history."""
        return self._history.index

    @property
    def history_length(self) -> int:
        """Number of recorded history snapshots."""
        return len(self._history)

    @property
    def text_request(self) -> TextRequest | None:
        """The pending text-entry request, if the host still owes text."""
        return self._text_request

    @property
    def space_held(self) -> bool:
        """Whether the space bar pan override is active."""
        return self._space_down

    @property
    def viewport_size(self) -> tuple[int, int]:
        """Viewport ``(width, height)`` in pixels, used for auto-pan."""
        return self._viewport

    @property
    def surface(self) -> Surface | None:
        """The attached render surface."""
        return self._surface

    # Commands

    def set_tool(self, tool: Tool | str) -> None:
        """Select a tool. Any gesture in progress is discarded without a commit."""
        self._tool = Tool(tool)
        if not isinstance(self._gesture, Idle):
            self._gesture = Idle()
            self.render()

    def set_color(self, color: str) -> None:
        """Set the color used by new elements.

        Raises:
            InvalidColorError: If ``color`` cannot be parsed. The current color is kept.
        """
        self.settings.color = check_color(color)

    def set_stroke_width(self, width: float) -> None:
        """Set the line width used by new elements and the eraser."""
        self.settings.stroke_width = width

    def set_fill_shape(self, fill: bool) -> None:  # noqa: FBT001
        """Toggle translucent fill for new rectangles and circles."""
        self.settings.fill_shape = fill

    def set_font_size(self, size: int) -> None:
        """Set the font size used by new text elements."""
        self.settings.font_size = size

    def undo(self) -> bool:
        """Restore the previous snapshot.

        Returns:
            True if the document changed, False at the start of history.
        """
        snapshot = self._history.undo()
        if snapshot is None:
            logger.debug("Undo ignored at start of history")
            return False
        self._elements = snapshot
        logger.debug("Undo", history_index=self._history.index, element_count=len(snapshot))
        self.render()
        return True

    def redo(self) -> bool:
        """Re-apply the next snapshot.

        Returns:
            True if the document changed, False at the end of history.
        """
        snapshot = self._history.redo()
        if snapshot is None:
            logger.debug("Redo ignored at end of history")
            return False
        self._elements = snapshot
        logger.debug("Redo", history_index=self._history.index, element_count=len(snapshot))
        self.render()
        return True

    def clear(self) -> None:
        """Remove every element as a single undoable step."""
        self._commit(())
        logger.info("Canvas cleared", history_index=self._history.index)
        self.render()

    # Pointer input

    def pointer_down(self, event: PointerEvent) -> None:
        """Begin a gesture.

        The middle button or a held space bar always starts panning. Otherwise
        only the primary button acts, according to the selected tool.
        """
        if event.button == PointerButton.MIDDLE or self._space_down:
            self._gesture = Panning(last=event.screen)
            return
        if event.button != PointerButton.PRIMARY:
            return

        anchor = self._transform.to_world(event.screen)
        tool = self._tool
        if tool in _SHAPE_TOOLS:
            self._gesture = Drawing(element=self._start_element(tool, anchor), anchor=anchor)
            self.render()
        elif tool is Tool.ERASER:
            self._gesture = Erasing()
        elif tool is Tool.TEXT:
            self._gesture = Idle()
            self._request_text(anchor, event.screen)
        elif tool is Tool.STICKY:
            self._gesture = Idle()
            self._create_sticky(anchor)
        # Tool.SELECT has no pointer behavior

    def pointer_move(self, event: PointerEvent) -> None:
        """Continue the current gesture."""
        gesture = self._gesture
        if isinstance(gesture, Panning):
            screen = event.screen
            dx = screen.x - gesture.last.x
            dy = screen.y - gesture.last.y
            self._gesture = Panning(last=screen)
            self._transform = self._transform.pan(dx, dy)
            self.render()
        elif isinstance(gesture, Erasing):
            self._erase(self._transform.to_world(event.screen))
        elif isinstance(gesture, Drawing):
            point = self._transform.to_world(event.screen)
            self._gesture = replace(gesture, element=self._extend_element(gesture.element, gesture.anchor, point))
            self._auto_pan(event.screen)
            self.render()

    def pointer_up(self, event: PointerEvent | None = None) -> None:  # noqa: ARG002
        """Finish the current gesture.

        A drawn element is committed only if it is valid; it is discarded
        either way. Panning and erasing just stop.
        """
        gesture = self._gesture
        self._gesture = Idle()
        if not isinstance(gesture, Drawing):
            return
        element = gesture.element
        if is_valid(element):
            self._commit((*self._elements, element))
        else:
            logger.debug("Discarded degenerate element", element_type=element.element_type.value)
        self.render()

    def pointer_cancel(self, event: PointerEvent | None = None) -> None:
        """Interrupted gestures resolve exactly like pointer-up."""
        self.pointer_up(event)

    # Wheel and keyboard input

    def wheel(self, event: WheelEvent) -> None:
        """Zoom around the cursor with ctrl/meta held, otherwise pan both axes."""
        if event.zooming:
            factor = 1 - event.delta_y * self.config.zoom_sensitivity
            self._transform = self._transform.zoom(Point(event.client_x, event.client_y), factor)
        else:
            speed = self.config.scroll_speed
            self._transform = self._transform.pan(-event.delta_x * speed, -event.delta_y * speed)
        self.render()

    def key_down(self, event: KeyEvent) -> bool:
        """Handle a key press.

        Returns:
            True if the key was an undo/redo shortcut.
        """
        if event.is_space:
            self._space_down = True
        if not event.command:
            return False
        key = event.key.lower()
        if key == "z":
            if event.shift:
                self.redo()
            else:
                self.undo()
            return True
        if key == "y":
            self.redo()
            return True
        return False

    def key_up(self, event: KeyEvent) -> None:
        """Handle a key release."""
        if event.is_space:
            self._space_down = False

    def handle_key(self, event: KeyEvent) -> bool:
        """Dispatch a key event by its action."""
        if event.action is KeyAction.UP:
            self.key_up(event)
            return False
        return self.key_down(event)

    # Text entry

    def commit_text(self, text: str) -> Text | None:
        """Complete a pending text request.

        Args:
            text: Text supplied by the host. Surrounding whitespace is trimmed.

        Returns:
            The created element, or None if there was no request or the text was blank.
        """
        request = self._text_request
        self._text_request = None
        content = text.strip()
        if request is None or not content:
            return None
        element = Text(
            x=request.world_anchor.x,
            y=request.world_anchor.y,
            text=content,
            color=self.settings.color,
            font_size=self.settings.font_size,
        )
        self._commit((*self._elements, element))
        self.render()
        return element

    def cancel_text(self) -> None:
        """Drop a pending text request."""
        self._text_request = None

    # Snapshot interface

    def get_snapshot(self) -> BoardSnapshot:
        """Capture the document, history and view for later restoration."""
        return BoardSnapshot(
            elements=self._elements,
            history=self._history.snapshots,
            history_index=self._history.index,
            view_transform=self._transform,
        )

    def load_snapshot(self, snapshot: BoardSnapshot) -> None:
        """Replace the document, history and view with ``snapshot``.

        All four parts are replaced together; nothing is merged. Any gesture or
        pending text request is dropped.

        Raises:
            InvalidSnapshotError: If the snapshot's history is inconsistent.
        """
        history = History(snapshot.history, snapshot.history_index)
        self._elements = tuple(snapshot.elements)
        self._history = history
        self._transform = snapshot.view_transform
        self._gesture = Idle()
        self._text_request = None
        logger.debug("Snapshot loaded", element_count=len(self._elements), history_index=history.index)
        self.render()

    # Surface and export

    def attach_surface(self, width: int | None = None, height: int | None = None) -> Surface:
        """Create and attach a render surface, sized to the viewport by default."""
        size = (width or self._viewport[0], height or self._viewport[1])
        self._surface = Surface(*size)
        self._viewport = self._surface.size
        self.render()
        return self._surface

    def detach_surface(self) -> None:
        """Detach the render surface; rendering becomes a no-op."""
        self._surface = None

    def resize(self, width: int, height: int) -> None:
        """Resize the viewport and its surface, then redraw."""
        self._viewport = (int(width), int(height))
        if self._surface is not None:
            self._surface.resize(width, height)
        self.render()

    def render(self) -> None:
        """Draw the committed elements plus any in-progress element."""
        if self._surface is None:
            return
        elements: Iterable[Element] = self._elements
        if (current := self.in_progress) is not None:
            elements = (*self._elements, current)
        self._renderer.render(self._surface, elements, self._transform)

    def export_png(self) -> bytes:
        """Encode the current frame as PNG.

        Raises:
            ExportUnavailableError: If no surface is attached.
        """
        if self._surface is None:
            logger.warning("Export requested without a surface")
            raise ExportUnavailableError
        return export_png(self._surface, self.config.background_color)

    def export_image(self) -> str:
        """Encode the current frame as a PNG data URL.

        Raises:
            ExportUnavailableError: If no surface is attached.
        """
        return png_data_url(self.export_png())

    # Internals

    def _commit(self, elements: Iterable[Element]) -> None:
        self._elements = self._history.commit(elements)
        logger.debug("Committed", element_count=len(self._elements), history_index=self._history.index)

    def _start_element(self, tool: Tool, anchor: Point) -> Element:
        """Create the zero-size element a new gesture starts from."""
        settings = self.settings
        if tool is Tool.PEN:
            return Stroke(points=(anchor,), color=settings.color, line_width=settings.stroke_width)
        if tool is Tool.RECTANGLE:
            return Rectangle(
                x=anchor.x,
                y=anchor.y,
                color=settings.color,
                line_width=settings.stroke_width,
                fill=settings.fill,
            )
        if tool is Tool.CIRCLE:
            return Circle(
                cx=anchor.x,
                cy=anchor.y,
                color=settings.color,
                line_width=settings.stroke_width,
                fill=settings.fill,
            )
        segment_cls = Arrow if tool is Tool.ARROW else Line
        return segment_cls(
            x1=anchor.x,
            y1=anchor.y,
            x2=anchor.x,
            y2=anchor.y,
            color=settings.color,
            line_width=settings.stroke_width,
        )

    @staticmethod
    def _extend_element(element: Element, anchor: Point, point: Point) -> Element:
        """Return ``element`` updated for the pointer now at ``point``."""
        if isinstance(element, Stroke):
            return replace(element, points=(*element.points, point))
        if isinstance(element, Rectangle):
            return replace(
                element,
                x=min(anchor.x, point.x),
                y=min(anchor.y, point.y),
                width=abs(point.x - anchor.x),
                height=abs(point.y - anchor.y),
            )
        if isinstance(element, Circle):
            return replace(
                element,
                cx=(anchor.x + point.x) / 2,
                cy=(anchor.y + point.y) / 2,
                rx=abs(point.x - anchor.x) / 2,
                ry=abs(point.y - anchor.y) / 2,
            )
        if isinstance(element, LinearElement):
            return replace(element, x2=point.x, y2=point.y)
        return element

    def _auto_pan(self, screen: Point) -> None:
        """Scroll the view while drawing near a viewport edge."""
        width, height = self._viewport
        margin = self.config.edge_margin
        speed = self.config.auto_pan_speed

        dx = dy = 0.0
        if screen.y > height - margin:
            dy = speed
        elif screen.y < margin:
            dy = -speed
        if screen.x > width - margin:
            dx = speed
        elif screen.x < margin:
            dx = -speed
        if dx or dy:
            self._transform = self._transform.pan(dx, dy)

    def _erase(self, point: Point) -> None:
        """Remove everything under the eraser; each effective step is its own commit."""
        radius = self.settings.stroke_width * self.config.eraser_factor / self._transform.scale
        remaining = erase_at(self._elements, point, radius)
        if len(remaining) == len(self._elements):
            return
        removed = len(self._elements) - len(remaining)
        self._commit(remaining)
        logger.debug("Erased elements", removed=removed, radius=radius)
        self.render()

    def _request_text(self, anchor: Point, screen: Point) -> None:
        self._text_request = TextRequest(world_anchor=anchor, screen_anchor=screen)
        if self._on_text_request is not None:
            self._on_text_request(self._text_request)

    def _create_sticky(self, anchor: Point) -> None:
        """Ask for note text and commit a sticky note immediately."""
        text = self._prompt_text()
        if text is None:
            logger.debug("Sticky note cancelled")
            return
        sticky = Sticky(
            x=anchor.x,
            y=anchor.y,
            width=self.config.sticky_width,
            height=self.config.sticky_height,
            text=text,
            bg_color=self._rng.choice(self.config.sticky_colors),
        )
        self._commit((*self._elements, sticky))
        self.render()
