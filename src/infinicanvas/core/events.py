"""Normalized input records consumed by the whiteboard engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from infinicanvas.core.models import Point
from infinicanvas.core.types import KeyAction, PointerButton

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class PointerEvent:
    """A pointer sample in screen coordinates.

    Mouse, pen and single-finger touch input are all adapted to this shape.

    Attributes:
        client_x: Horizontal screen position.
        client_y: Vertical screen position.
        button: Button that triggered the event (pointer-down only).
    """

    client_x: float
    client_y: float
    button: int = PointerButton.PRIMARY

    @property
    def screen(self) -> Point:
        """The event position as a screen point."""
        return Point(self.client_x, self.client_y)


@dataclass(frozen=True)
class WheelEvent:
    """A scroll-wheel or trackpad sample.

    Attributes:
        client_x: Cursor horizontal screen position.
        client_y: Cursor vertical screen position.
        delta_x: Horizontal scroll amount.
        delta_y: Vertical scroll amount.
        ctrl: Whether the control key was held.
        meta: Whether the meta/command key was held.
    """

    client_x: float
    client_y: float
    delta_x: float = 0.0
    delta_y: float = 0.0
    ctrl: bool = False
    meta: bool = False

    @property
    def zooming(self) -> bool:
        """Wheel events with a zoom modifier zoom instead of pan."""
        return self.ctrl or self.meta


@dataclass(frozen=True)
class KeyEvent:
    """A keyboard press or release.

    Attributes:
        key: Logical key value, e.g. ``"z"``.
        code: Physical key code, e.g. ``"Space"``.
        action: Press or release.
        ctrl: Whether the control key was held.
        meta: Whether the meta/command key was held.
        shift: Whether the shift key was held.
    """

    key: str
    code: str = ""
    action: KeyAction = KeyAction.DOWN
    ctrl: bool = False
    meta: bool = False
    shift: bool = False

    @property
    def command(self) -> bool:
        """Whether a platform command modifier (ctrl or meta) was held."""
        return self.ctrl or self.meta

    @property
    def is_space(self) -> bool:
        """Whether this is the space bar."""
        return self.code == "Space" or self.key == " "


@dataclass(frozen=True)
class TextRequest:
    """Request for the host to collect text for a new text element.

    Attributes:
        world_anchor: Where the text will be placed in world coordinates.
        screen_anchor: Where the host should position its input widget.
    """

    world_anchor: Point
    screen_anchor: Point


def touch_to_pointer(touches: Sequence[tuple[float, float]]) -> PointerEvent | None:
    """Adapt active touch points to a pointer event.

    Exactly one touch maps to a primary-button pointer; multi-touch gestures
    are ignored.

    Args:
        touches: ``(client_x, client_y)`` of every active touch.

    Returns:
        The adapted pointer event, or None if the touches should be ignored.
    """
    if len(touches) != 1:
        return None
    x, y = touches[0]
    return PointerEvent(client_x=x, client_y=y, button=PointerButton.PRIMARY)


def touch_ended(remaining_touches: Sequence[tuple[float, float]]) -> bool:
    """Whether a touch end/cancel should be delivered as pointer-up."""
    return len(remaining_touches) == 0
