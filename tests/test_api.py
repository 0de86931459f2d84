"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from litestar import Litestar
from litestar.testing import TestClient

from infinicanvas.app import create_app
from infinicanvas.config import EngineConfig


def _draw_rectangle(client: TestClient[Litestar], start: tuple[int, int], end: tuple[int, int]) -> dict:
    client.put("/api/board/settings", json={"tool": "rectangle"})
    client.post("/api/board/pointer/down", json={"x": start[0], "y": start[1]})
    client.post("/api/board/pointer/move", json={"x": end[0], "y": end[1]})
    return client.post("/api/board/pointer/up", json={"x": end[0], "y": end[1]}).json()


class TestBoardStateAPI:
    """Tests for reading and configuring the board."""

    def test_get_board(self, client: TestClient[Litestar]) -> None:
        """Test the initial board state."""
        response = client.get("/api/board")
        assert response.status_code == 200
        data = response.json()
        assert data["tool"] == "pen"
        assert data["state"] == "idle"
        assert data["element_count"] == 0
        assert data["zoom_percent"] == 100
        assert data["can_undo"] is False
        assert data["history_length"] == 1
        assert data["text_request"] is None

    def test_update_settings(self, client: TestClient[Litestar]) -> None:
        """Test updating tool and style."""
        response = client.put(
            "/api/board/settings",
            json={"tool": "circle", "color": "#ff0000", "stroke_width": 5, "fill_shape": True},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["tool"] == "circle"
        assert data["color"] == "#ff0000"
        assert data["stroke_width"] == 5.0
        assert data["fill_shape"] is True

    def test_update_settings_partial(self, client: TestClient[Litestar]) -> None:
        """Test omitted settings are left alone."""
        client.put("/api/board/settings", json={"font_size": 32})
        data = client.put("/api/board/settings", json={"tool": "text"}).json()
        assert data["font_size"] == 32
        assert data["tool"] == "text"

    def test_unknown_tool_rejected(self, client: TestClient[Litestar]) -> None:
        """Test settings validation."""
        response = client.put("/api/board/settings", json={"tool": "lasso"})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_invalid_color_rejected(self, client: TestClient[Litestar]) -> None:
        """Test unparseable colors are rejected with field details."""
        response = client.put("/api/board/settings", json={"color": "banana"})
        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "validation_error"
        assert data["details"][0]["field"] == "color"
        assert data["details"][0]["code"] == "invalid_color"

    def test_invalid_color_leaves_settings_unchanged(self, client: TestClient[Litestar]) -> None:
        """Test a rejected update applies none of its settings and the board still renders."""
        response = client.put("/api/board/settings", json={"tool": "rectangle", "color": "banana", "stroke_width": 9})
        assert response.status_code == 422

        data = client.get("/api/board").json()
        assert data["tool"] == "pen"
        assert data["color"] == "#f8fafc"
        assert data["stroke_width"] == 3.0
        assert client.get("/api/board/export.png").status_code == 200

    def test_short_hex_fill(self, client: TestClient[Litestar]) -> None:
        """Test a three-digit color draws a filled shape."""
        client.put("/api/board/settings", json={"color": "#abc", "fill_shape": True})
        _draw_rectangle(client, (100, 100), (200, 200))
        element = client.get("/api/board/snapshot").json()["elements"][0]
        assert element["color"] == "#abc"
        assert element["fill"] == "#aabbcc33"
        assert client.get("/api/board/export.png").status_code == 200


class TestPointerAPI:
    """Tests for pointer, wheel and key input."""

    def test_down_move_up_commits(self, client: TestClient[Litestar]) -> None:
        """Test the documented drag sequence commits a rectangle."""
        client.put("/api/board/settings", json={"tool": "rectangle"})
        client.post("/api/board/pointer/down", json={"x": 100, "y": 100})
        client.post("/api/board/pointer/move", json={"x": 300, "y": 200})
        data = client.post("/api/board/pointer/up", json={"x": 300, "y": 200}).json()
        assert data["element_count"] == 1
        element = client.get("/api/board/snapshot").json()["elements"][0]
        assert (element["width"], element["height"]) == (200, 100)

    def test_up_without_move_draws_nothing(self, client: TestClient[Litestar]) -> None:
        """Test a rectangle needs a move between down and up."""
        client.put("/api/board/settings", json={"tool": "rectangle"})
        client.post("/api/board/pointer/down", json={"x": 100, "y": 100})
        data = client.post("/api/board/pointer/up", json={"x": 300, "y": 200}).json()
        assert data["element_count"] == 0

    def test_draw_rectangle(self, client: TestClient[Litestar]) -> None:
        """Test a full rectangle gesture commits one element."""
        client.put("/api/board/settings", json={"tool": "rectangle"})
        client.post("/api/board/pointer/down", json={"x": 100, "y": 100})
        moving = client.post("/api/board/pointer/move", json={"x": 200, "y": 200})
        assert moving.status_code == 200
        assert moving.json()["state"] == "drawing"
        assert moving.json()["element_count"] == 0

        data = client.post("/api/board/pointer/up", json={"x": 200, "y": 200}).json()
        assert data["state"] == "idle"
        assert data["element_count"] == 1
        assert data["can_undo"] is True

    def test_pointer_cancel_commits_like_up(self, client: TestClient[Litestar]) -> None:
        """Test an interrupted gesture is resolved."""
        client.post("/api/board/pointer/down", json={"x": 100, "y": 100})
        client.post("/api/board/pointer/move", json={"x": 150, "y": 150})
        data = client.post("/api/board/pointer/cancel").json()
        assert data["state"] == "idle"
        assert data["element_count"] == 1

    def test_middle_button_pans(self, client: TestClient[Litestar]) -> None:
        """Test panning with the middle button."""
        client.post("/api/board/pointer/down", json={"x": 100, "y": 100, "button": 1})
        data = client.post("/api/board/pointer/move", json={"x": 130, "y": 90, "button": 1}).json()
        assert data["state"] == "panning"
        assert data["offset_x"] == 30
        assert data["offset_y"] == -10

    @pytest.mark.parametrize("button", [2, 3, 4, 7])
    def test_other_buttons_ignored(self, client: TestClient[Litestar], button: int) -> None:
        """Test buttons other than primary and middle are accepted and do nothing."""
        response = client.post("/api/board/pointer/down", json={"x": 100, "y": 100, "button": button})
        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "idle"
        assert data["element_count"] == 0

        data = client.post("/api/board/pointer/up", json={"x": 200, "y": 200, "button": button}).json()
        assert data["element_count"] == 0
        assert data["can_undo"] is False

    def test_missing_coordinates_rejected(self, client: TestClient[Litestar]) -> None:
        """Test pointer payloads need a position."""
        response = client.post("/api/board/pointer/down", json={"x": 100})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_wheel_zoom(self, client: TestClient[Litestar]) -> None:
        """Test ctrl + wheel zooms."""
        data = client.post("/api/board/wheel", json={"x": 400, "y": 300, "delta_y": -100, "ctrl": True}).json()
        assert data["zoom_percent"] == 110

    def test_wheel_pan(self, client: TestClient[Litestar]) -> None:
        """Test the plain wheel pans."""
        data = client.post("/api/board/wheel", json={"x": 400, "y": 300, "delta_x": 10, "delta_y": 20}).json()
        assert data["zoom_percent"] == 100
        assert data["offset_x"] == pytest.approx(-12)
        assert data["offset_y"] == pytest.approx(-24)

    def test_undo_shortcut(self, client: TestClient[Litestar]) -> None:
        """Test ctrl+z through the key endpoint."""
        _draw_rectangle(client, (100, 100), (200, 200))
        response = client.post("/api/board/keys", json={"key": "z", "ctrl": True})
        assert response.status_code == 200
        data = response.json()
        assert data["changed"] is True
        assert data["board"]["element_count"] == 0

    def test_space_pans(self, client: TestClient[Litestar]) -> None:
        """Test holding space turns a primary drag into a pan."""
        result = client.post("/api/board/keys", json={"key": " ", "code": "Space"}).json()
        assert result["changed"] is False
        data = client.post("/api/board/pointer/down", json={"x": 100, "y": 100}).json()
        assert data["state"] == "panning"

        client.post("/api/board/pointer/up", json={"x": 100, "y": 100})
        client.post("/api/board/keys", json={"key": " ", "code": "Space", "action": "up"})
        data = client.post("/api/board/pointer/down", json={"x": 100, "y": 100}).json()
        assert data["state"] == "drawing"


class TestCommandAPI:
    """Tests for undo, redo, clear and text entry."""

    def test_undo_redo(self, client: TestClient[Litestar]) -> None:
        """Test stepping through history."""
        _draw_rectangle(client, (100, 100), (200, 200))

        undo = client.post("/api/board/undo").json()
        assert undo["changed"] is True
        assert undo["board"]["element_count"] == 0
        assert undo["board"]["can_redo"] is True

        redo = client.post("/api/board/redo").json()
        assert redo["changed"] is True
        assert redo["board"]["element_count"] == 1

    def test_undo_at_start(self, client: TestClient[Litestar]) -> None:
        """Test undo with no history is reported as unchanged."""
        data = client.post("/api/board/undo").json()
        assert data["changed"] is False

    def test_clear(self, client: TestClient[Litestar]) -> None:
        """Test clearing is undoable."""
        _draw_rectangle(client, (100, 100), (200, 200))
        data = client.post("/api/board/clear").json()
        assert data["element_count"] == 0
        assert data["history_length"] == 3

        assert client.post("/api/board/undo").json()["board"]["element_count"] == 1

    def test_text_entry(self, client: TestClient[Litestar]) -> None:
        """Test the text tool's request and commit."""
        client.put("/api/board/settings", json={"tool": "text"})
        data = client.post("/api/board/pointer/down", json={"x": 150, "y": 120}).json()
        assert data["text_request"] == {"world_x": 150, "world_y": 120, "screen_x": 150, "screen_y": 120}

        result = client.post("/api/board/text", json={"text": "  Hello  "}).json()
        assert result["changed"] is True
        assert result["board"]["element_count"] == 1
        assert result["board"]["text_request"] is None

    def test_text_without_request(self, client: TestClient[Litestar]) -> None:
        """Test committing text with nothing pending creates nothing."""
        result = client.post("/api/board/text", json={"text": "Hello"}).json()
        assert result["changed"] is False

    def test_cancel_text(self, client: TestClient[Litestar]) -> None:
        """Test dropping a pending text request."""
        client.put("/api/board/settings", json={"tool": "text"})
        client.post("/api/board/pointer/down", json={"x": 150, "y": 120})
        assert client.delete("/api/board/text").status_code == 204
        assert client.get("/api/board").json()["text_request"] is None


class TestSnapshotAPI:
    """Tests for snapshot import and export."""

    def test_get_snapshot(self, client: TestClient[Litestar]) -> None:
        """Test the snapshot document."""
        _draw_rectangle(client, (100, 100), (200, 200))
        data = client.get("/api/board/snapshot").json()
        assert data["historyIndex"] == 1
        assert len(data["history"]) == 2
        assert data["elements"][0]["type"] == "rectangle"
        assert data["elements"][0]["width"] == 100
        assert data["viewTransform"] == {"scale": 1.0, "offsetX": 0.0, "offsetY": 0.0}

    def test_put_snapshot(self, client: TestClient[Litestar]) -> None:
        """Test replacing the board from a snapshot document."""
        _draw_rectangle(client, (100, 100), (200, 200))
        saved = client.get("/api/board/snapshot").json()
        client.post("/api/board/clear")

        data = client.put("/api/board/snapshot", json=saved).json()
        assert data["element_count"] == 1
        assert data["history_index"] == 1
        assert data["history_length"] == 2

    def test_put_invalid_snapshot(self, client: TestClient[Litestar]) -> None:
        """Test malformed snapshots are rejected."""
        response = client.put("/api/board/snapshot", json={"history": [[]], "historyIndex": 4})
        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "invalid_snapshot"
        assert "out of range" in data["message"]

    def test_put_snapshot_bad_color(self, client: TestClient[Litestar]) -> None:
        """Test snapshots with undrawable colors are rejected and the board is kept."""
        _draw_rectangle(client, (100, 100), (200, 200))
        saved = client.get("/api/board/snapshot").json()
        saved["elements"][0]["color"] = "banana"

        response = client.put("/api/board/snapshot", json=saved)
        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "invalid_snapshot"
        assert "Invalid color" in data["message"]
        assert client.get("/api/board").json()["element_count"] == 1
        assert client.get("/api/board/export.png").status_code == 200

    def test_export_data_url(self, client: TestClient[Litestar]) -> None:
        """Test exporting the frame as a data URL."""
        response = client.get("/api/board/export")
        assert response.status_code == 200
        assert response.json()["data_url"].startswith("data:image/png;base64,")

    def test_export_png(self, client: TestClient[Litestar]) -> None:
        """Test downloading the frame as a PNG file."""
        response = client.get("/api/board/export.png")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert "whiteboard.png" in response.headers["content-disposition"]
        assert response.content.startswith(b"\x89PNG")


class TestPageAPI:
    """Tests for page endpoints."""

    def test_list_pages(self, client: TestClient[Litestar]) -> None:
        """Test the initial page list."""
        response = client.get("/api/pages")
        assert response.status_code == 200
        assert response.json() == [
            {"id": "page-1", "name": "Page 1", "index": 0, "current": True, "element_count": 0},
        ]

    def test_add_page(self, client: TestClient[Litestar]) -> None:
        """Test adding a page switches to it."""
        _draw_rectangle(client, (100, 100), (200, 200))
        response = client.post("/api/pages")
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == "page-2"
        assert data["current"] is True
        assert client.get("/api/board").json()["element_count"] == 0

        pages = client.get("/api/pages").json()
        assert [p["element_count"] for p in pages] == [1, 0]
        assert [p["current"] for p in pages] == [False, True]

    def test_rename_page(self, client: TestClient[Litestar]) -> None:
        """Test renaming a page."""
        response = client.patch("/api/pages/0", json={"name": "Ideas"})
        assert response.status_code == 200
        assert response.json()["name"] == "Ideas"

    def test_select_page(self, client: TestClient[Litestar]) -> None:
        """Test switching back restores the page's board."""
        _draw_rectangle(client, (100, 100), (200, 200))
        client.post("/api/pages")

        response = client.post("/api/pages/0/select")
        assert response.status_code == 200
        assert response.json()["current"] is True
        assert client.get("/api/board").json()["element_count"] == 1

    def test_remove_page(self, client: TestClient[Litestar]) -> None:
        """Test removing a page returns the remaining pages."""
        client.post("/api/pages")
        response = client.delete("/api/pages/1")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == ["page-1"]

    def test_remove_last_page_kept(self, client: TestClient[Litestar]) -> None:
        """Test the only page is never removed."""
        response = client.delete("/api/pages/0")
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_page_not_found(self, client: TestClient[Litestar]) -> None:
        """Test unknown page indexes."""
        response = client.post("/api/pages/9/select")
        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "page_not_found"
        assert data["details"][0]["field"] == "index"


class TestApplication:
    """Tests for the assembled application."""

    @pytest.fixture
    def app_client(self, config: EngineConfig) -> TestClient[Litestar]:
        """Create a client for the full application without a drawing surface."""
        return TestClient(app=create_app(attach_surface=False, engine_config=config))

    def test_dependency_names(self, app: Litestar) -> None:
        """Test the plugin provides its services under the names controllers inject."""
        assert {"pages", "engine", "export_service"} <= set(app.dependencies)

    def test_export_unavailable(self, app_client: TestClient[Litestar]) -> None:
        """Test image export without a surface."""
        with app_client as client:
            response = client.get("/api/board/export")
        assert response.status_code == 503
        assert response.json()["code"] == "export_unavailable"

    def test_correlation_id_echoed(self, app_client: TestClient[Litestar]) -> None:
        """Test the correlation id is echoed on responses and errors."""
        with app_client as client:
            ok = client.get("/api/board", headers={"X-Correlation-ID": "req-123"})
            missing = client.post("/api/pages/5/select", headers={"X-Correlation-ID": "req-456"})

        assert ok.headers["x-correlation-id"] == "req-123"
        assert missing.headers["x-correlation-id"] == "req-456"
        assert missing.json()["correlation_id"] == "req-456"

    def test_correlation_id_generated(self, app_client: TestClient[Litestar]) -> None:
        """Test a correlation id is generated when none is sent."""
        with app_client as client:
            response = client.get("/api/board")
        assert response.headers["x-correlation-id"]

    def test_openapi_schema(self, app_client: TestClient[Litestar]) -> None:
        """Test the OpenAPI schema lists the board and page routes."""
        with app_client as client:
            response = client.get("/schema/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/board" in paths
        assert "/api/pages/{index}/select" in paths
