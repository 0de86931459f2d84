"""Data Transfer Objects (DTOs) for the infinicanvas API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from infinicanvas.core.events import KeyEvent, PointerEvent, WheelEvent
from infinicanvas.core.types import KeyAction, PointerButton, Tool, ToolState

if TYPE_CHECKING:
    from infinicanvas.core.engine import WhiteboardEngine
    from infinicanvas.core.events import TextRequest
    from infinicanvas.services.pages import Page


# Input DTOs


@dataclass
class PointerDTO:
    """DTO for a pointer sample in screen coordinates.

    Attributes:
        x: Horizontal position relative to the viewport.
        y: Vertical position relative to the viewport.
        button: Pointer button (0 primary, 1 middle, 2 secondary). Other buttons
            are accepted and ignored.
    """

    x: float
    y: float
    button: int = PointerButton.PRIMARY


@dataclass
class WheelDTO:
    """DTO for a wheel or trackpad event."""

    x: float
    y: float
    delta_x: float = 0.0
    delta_y: float = 0.0
    ctrl: bool = False
    meta: bool = False


@dataclass
class KeyDTO:
    """DTO for a key press or release."""

    key: str
    code: str = ""
    action: KeyAction = KeyAction.DOWN
    ctrl: bool = False
    meta: bool = False
    shift: bool = False


@dataclass
class SettingsDTO:
    """DTO for updating the tool and style settings.

    All fields are optional. Only provided fields will be updated.
    """

    tool: Tool | None = None
    color: str | None = None
    stroke_width: float | None = None
    fill_shape: bool | None = None
    font_size: int | None = None


@dataclass
class TextDTO:
    """DTO for completing a pending text request."""

    text: str


@dataclass
class RenamePageDTO:
    """DTO for renaming a page."""

    name: str


# Response DTOs


@dataclass
class TextRequestDTO:
    """DTO for a pending text-entry request."""

    world_x: float
    world_y: float
    screen_x: float
    screen_y: float


@dataclass
class BoardStateDTO:
    """DTO for the engine's observable state.

    Attributes:
        tool: The selected tool.
        state: The pointer state machine's current state.
        element_count: Number of committed elements.
        zoom_percent: Current zoom as a rounded percentage.
        scale: View scale factor.
        offset_x: Horizontal view offset in screen pixels.
        offset_y: Vertical view offset in screen pixels.
        can_undo: Whether undo would change the document.
        can_redo: Whether redo would change the document.
        history_index: Position within the history.
        history_length: Number of recorded snapshots.
        color: Color used for new elements.
        stroke_width: Line width used for new elements.
        fill_shape: Whether new rectangles and circles are filled.
        font_size: Font size used for new text.
        text_request: The pending text request, if any.
    """

    tool: Tool
    state: ToolState
    element_count: int
    zoom_percent: int
    scale: float
    offset_x: float
    offset_y: float
    can_undo: bool
    can_redo: bool
    history_index: int
    history_length: int
    color: str
    stroke_width: float
    fill_shape: bool
    font_size: int
    text_request: TextRequestDTO | None = None


@dataclass
class CommandResultDTO:
    """DTO for commands that may or may not change the board."""

    changed: bool
    board: BoardStateDTO


@dataclass
class ExportDTO:
    """DTO for an exported image."""

    data_url: str


@dataclass
class PageDTO:
    """DTO for a page summary."""

    id: str
    name: str
    index: int
    current: bool
    element_count: int


# Conversion functions


def pointer_from_dto(dto: PointerDTO) -> PointerEvent:
    """Convert a PointerDTO to a pointer event."""
    return PointerEvent(client_x=dto.x, client_y=dto.y, button=dto.button)


def wheel_from_dto(dto: WheelDTO) -> WheelEvent:
    """Convert a WheelDTO to a wheel event."""
    return WheelEvent(
        client_x=dto.x,
        client_y=dto.y,
        delta_x=dto.delta_x,
        delta_y=dto.delta_y,
        ctrl=dto.ctrl,
        meta=dto.meta,
    )


def key_from_dto(dto: KeyDTO) -> KeyEvent:
    """Convert a KeyDTO to a key event."""
    return KeyEvent(
        key=dto.key,
        code=dto.code,
        action=KeyAction(dto.action),
        ctrl=dto.ctrl,
        meta=dto.meta,
        shift=dto.shift,
    )


def text_request_to_response(request: TextRequest | None) -> TextRequestDTO | None:
    """Convert a text request to its response DTO."""
    if request is None:
        return None
    return TextRequestDTO(
        world_x=request.world_anchor.x,
        world_y=request.world_anchor.y,
        screen_x=request.screen_anchor.x,
        screen_y=request.screen_anchor.y,
    )


def board_to_response(engine: WhiteboardEngine) -> BoardStateDTO:
    """Convert the engine's observable state to a BoardStateDTO."""
    transform = engine.view_transform
    settings = engine.settings
    return BoardStateDTO(
        tool=engine.tool,
        state=engine.state,
        element_count=engine.element_count,
        zoom_percent=engine.zoom_percent,
        scale=transform.scale,
        offset_x=transform.offset_x,
        offset_y=transform.offset_y,
        can_undo=engine.can_undo,
        can_redo=engine.can_redo,
        history_index=engine.history_index,
        history_length=engine.history_length,
        color=settings.color,
        stroke_width=settings.stroke_width,
        fill_shape=settings.fill_shape,
        font_size=settings.font_size,
        text_request=text_request_to_response(engine.text_request),
    )


def page_to_response(page: Page, index: int, current_index: int) -> PageDTO:
    """Convert a page to a PageDTO."""
    return PageDTO(
        id=page.id,
        name=page.name,
        index=index,
        current=index == current_index,
        element_count=len(page.snapshot.elements),
    )
