"""Litestar controllers for infinicanvas API endpoints."""

from __future__ import annotations

from typing import Any, ClassVar

from litestar import Controller, delete, get, patch, post, put
from litestar.response import Response
from litestar.status_codes import HTTP_200_OK, HTTP_204_NO_CONTENT

from infinicanvas.core.engine import WhiteboardEngine
from infinicanvas.services.export import ExportService
from infinicanvas.services.pages import PageManager
from infinicanvas.web.dto import (
    BoardStateDTO,
    CommandResultDTO,
    ExportDTO,
    KeyDTO,
    PageDTO,
    PointerDTO,
    RenamePageDTO,
    SettingsDTO,
    TextDTO,
    WheelDTO,
    board_to_response,
    key_from_dto,
    page_to_response,
    pointer_from_dto,
    wheel_from_dto,
)


def _page_list(pages: PageManager) -> list[PageDTO]:
    current = pages.current_index
    return [page_to_response(page, i, current) for i, page in enumerate(pages.pages)]


class BoardController(Controller):
    """Controller for driving the live drawing engine.

    Input endpoints forward normalized pointer, wheel and key events to the
    engine and answer with its observable state.
    """

    path = "/board"
    tags: ClassVar[list[str]] = ["Board"]

    @get("/")
    async def get_board(self, engine: WhiteboardEngine) -> BoardStateDTO:
        """Get the engine's observable state.

        Args:
            engine: The live engine (injected).

        Returns:
            The current tool, state, view and history position.
        """
        return board_to_response(engine)

    @put("/settings")
    async def update_settings(self, data: SettingsDTO, engine: WhiteboardEngine) -> BoardStateDTO:
        """Update the tool and style settings.

        Only provided fields are updated. Changing the tool discards any
        gesture in progress. The color is checked first, so a rejected color
        leaves every setting unchanged.

        Args:
            data: The settings to change.
            engine: The live engine (injected).

        Returns:
            The updated board state.

        Raises:
            InvalidColorError: If the color cannot be parsed.
        """
        if data.color is not None:
            engine.set_color(data.color)
        if data.tool is not None:
            engine.set_tool(data.tool)
        if data.stroke_width is not None:
            engine.set_stroke_width(data.stroke_width)
        if data.fill_shape is not None:
            engine.set_fill_shape(data.fill_shape)
        if data.font_size is not None:
            engine.set_font_size(data.font_size)
        return board_to_response(engine)

    @post("/pointer/down", status_code=HTTP_200_OK)
    async def pointer_down(self, data: PointerDTO, engine: WhiteboardEngine) -> BoardStateDTO:
        """Begin a gesture with the selected tool."""
        engine.pointer_down(pointer_from_dto(data))
        return board_to_response(engine)

    @post("/pointer/move", status_code=HTTP_200_OK)
    async def pointer_move(self, data: PointerDTO, engine: WhiteboardEngine) -> BoardStateDTO:
        """Continue the current gesture."""
        engine.pointer_move(pointer_from_dto(data))
        return board_to_response(engine)

    @post("/pointer/up", status_code=HTTP_200_OK)
    async def pointer_up(self, data: PointerDTO, engine: WhiteboardEngine) -> BoardStateDTO:
        """Finish the current gesture, committing a valid element."""
        engine.pointer_up(pointer_from_dto(data))
        return board_to_response(engine)

    @post("/pointer/cancel", status_code=HTTP_200_OK)
    async def pointer_cancel(self, engine: WhiteboardEngine) -> BoardStateDTO:
        """Resolve an interrupted gesture exactly like pointer-up."""
        engine.pointer_cancel()
        return board_to_response(engine)

    @post("/wheel", status_code=HTTP_200_OK)
    async def wheel(self, data: WheelDTO, engine: WhiteboardEngine) -> BoardStateDTO:
        """Zoom around the cursor (ctrl/meta held) or pan the view."""
        engine.wheel(wheel_from_dto(data))
        return board_to_response(engine)

    @post("/keys", status_code=HTTP_200_OK)
    async def key(self, data: KeyDTO, engine: WhiteboardEngine) -> CommandResultDTO:
        """Forward a key press or release.

        Returns:
            Whether the key was an undo/redo shortcut, and the board state.
        """
        handled = engine.handle_key(key_from_dto(data))
        return CommandResultDTO(changed=handled, board=board_to_response(engine))

    @post("/undo", status_code=HTTP_200_OK)
    async def undo(self, engine: WhiteboardEngine) -> CommandResultDTO:
        """Step back one history snapshot. A no-op at the start of history."""
        changed = engine.undo()
        return CommandResultDTO(changed=changed, board=board_to_response(engine))

    @post("/redo", status_code=HTTP_200_OK)
    async def redo(self, engine: WhiteboardEngine) -> CommandResultDTO:
        """Step forward one history snapshot. A no-op at the end of history."""
        changed = engine.redo()
        return CommandResultDTO(changed=changed, board=board_to_response(engine))

    @post("/clear", status_code=HTTP_200_OK)
    async def clear(self, engine: WhiteboardEngine) -> BoardStateDTO:
        """Remove every element as one undoable step."""
        engine.clear()
        return board_to_response(engine)

    @post("/text", status_code=HTTP_200_OK)
    async def commit_text(self, data: TextDTO, engine: WhiteboardEngine) -> CommandResultDTO:
        """Complete the pending text request.

        Returns:
            Whether a text element was created, and the board state.
        """
        element = engine.commit_text(data.text)
        return CommandResultDTO(changed=element is not None, board=board_to_response(engine))

    @delete("/text", status_code=HTTP_204_NO_CONTENT)
    async def cancel_text(self, engine: WhiteboardEngine) -> None:
        """Drop the pending text request."""
        engine.cancel_text()

    @get("/snapshot")
    async def get_snapshot(self, engine: WhiteboardEngine, export_service: ExportService) -> dict[str, Any]:
        """Get the document, history and view as a snapshot document."""
        return export_service.to_dict(engine.get_snapshot())

    @put("/snapshot")
    async def load_snapshot(
        self, data: dict[str, Any], engine: WhiteboardEngine, export_service: ExportService
    ) -> BoardStateDTO:
        """Replace the document, history and view with a snapshot document.

        Raises:
            InvalidSnapshotError: If the snapshot is malformed.
        """
        engine.load_snapshot(export_service.from_dict(data))
        return board_to_response(engine)

    @get("/export")
    async def export_image(self, engine: WhiteboardEngine) -> ExportDTO:
        """Export the current frame as a PNG data URL.

        Raises:
            ExportUnavailableError: If the engine has no drawing surface.
        """
        return ExportDTO(data_url=engine.export_image())

    @get("/export.png", media_type="image/png")
    async def export_png(self, engine: WhiteboardEngine) -> Response[bytes]:
        """Export the current frame as a PNG file.

        Raises:
            ExportUnavailableError: If the engine has no drawing surface.
        """
        return Response(
            content=engine.export_png(),
            media_type="image/png",
            headers={"Content-Disposition": 'attachment; filename="whiteboard.png"'},
        )


class PageController(Controller):
    """Controller for the page list wrapped around the engine."""

    path = "/pages"
    tags: ClassVar[list[str]] = ["Pages"]

    @get("/")
    async def list_pages(self, pages: PageManager) -> list[PageDTO]:
        """List all pages in order.

        Args:
            pages: The page manager (injected).
        """
        return _page_list(pages)

    @post("/")
    async def add_page(self, pages: PageManager) -> PageDTO:
        """Append an empty page and switch to it."""
        page = pages.add_page()
        return page_to_response(page, pages.current_index, pages.current_index)

    @patch("/{index:int}")
    async def rename_page(self, index: int, data: RenamePageDTO, pages: PageManager) -> PageDTO:
        """Rename a page.

        Raises:
            PageNotFoundError: If the index is out of range.
        """
        pages.rename_page(index, data.name)
        return _page_list(pages)[index]

    @post("/{index:int}/select", status_code=HTTP_200_OK)
    async def select_page(self, index: int, pages: PageManager) -> PageDTO:
        """Save the current page and load another.

        Raises:
            PageNotFoundError: If the index is out of range.
        """
        page = pages.select_page(index)
        return page_to_response(page, index, pages.current_index)

    @delete("/{index:int}", status_code=HTTP_200_OK)
    async def remove_page(self, index: int, pages: PageManager) -> list[PageDTO]:
        """Remove a page. The only remaining page is never removed.

        Returns:
            The page list after the removal.

        Raises:
            PageNotFoundError: If the index is out of range.
        """
        pages.remove_page(index)
        return _page_list(pages)
