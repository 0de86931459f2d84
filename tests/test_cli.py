"""Tests for the board CLI commands."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner
from PIL import Image

from infinicanvas.cli import board_group
from infinicanvas.core.snapshot import BoardSnapshot
from infinicanvas.core.transform import ViewTransform

if TYPE_CHECKING:
    from pathlib import Path

    from infinicanvas.core.models import Rectangle, Sticky, Stroke
    from infinicanvas.services.export import ExportService


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def snapshot_file(
    tmp_path: Path,
    export_service: ExportService,
    sample_stroke: Stroke,
    sample_rectangle: Rectangle,
    sample_sticky: Sticky,
) -> Path:
    """Write a snapshot with three elements to a file."""
    elements = (sample_stroke, sample_rectangle, sample_sticky)
    snapshot = BoardSnapshot(
        elements=elements,
        history=((), elements[:2], elements),
        history_index=2,
        view_transform=ViewTransform(scale=0.5, offset_x=12, offset_y=-4),
    )
    path = tmp_path / "board.json"
    path.write_text(export_service.to_json(snapshot), encoding="utf-8")
    return path


class TestRenderCommand:
    """Tests for ``board render``."""

    def test_render(self, runner: CliRunner, snapshot_file: Path, tmp_path: Path) -> None:
        """Test rendering a snapshot file to PNG."""
        output = tmp_path / "board.png"
        result = runner.invoke(
            board_group, ["render", str(snapshot_file), "-o", str(output), "--width", "320", "--height", "240"]
        )

        assert result.exit_code == 0, result.output
        assert "Rendered" in result.output
        assert "3 elements" in result.output
        image = Image.open(io.BytesIO(output.read_bytes()))
        assert image.format == "PNG"
        assert image.size == (320, 240)

    def test_output_required(self, runner: CliRunner, snapshot_file: Path) -> None:
        """Test the output path is required."""
        result = runner.invoke(board_group, ["render", str(snapshot_file)])
        assert result.exit_code != 0

    def test_invalid_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a broken snapshot file is reported."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(board_group, ["render", str(path), "-o", str(tmp_path / "out.png")])

        assert result.exit_code == 1
        assert "Invalid snapshot" in result.output
        assert not (tmp_path / "out.png").exists()


class TestInfoCommand:
    """Tests for ``board info``."""

    def test_info(self, runner: CliRunner, snapshot_file: Path) -> None:
        """Test summarizing a snapshot file."""
        result = runner.invoke(board_group, ["info", str(snapshot_file)])

        assert result.exit_code == 0, result.output
        assert "Elements (3)" in result.output
        assert "rectangle: 1" in result.output
        assert "sticky: 1" in result.output
        assert "History: 2 of 2" in result.output
        assert "Zoom: 50%" in result.output
        assert "Offset: (12, -4)" in result.output

    def test_info_empty(self, runner: CliRunner, tmp_path: Path, export_service: ExportService) -> None:
        """Test summarizing an empty board."""
        path = tmp_path / "empty.json"
        path.write_text(export_service.to_json(BoardSnapshot()), encoding="utf-8")
        result = runner.invoke(board_group, ["info", str(path)])

        assert result.exit_code == 0, result.output
        assert "Elements (0)" in result.output
        assert "History: 0 of 0" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a missing snapshot path is rejected."""
        result = runner.invoke(board_group, ["info", str(tmp_path / "nope.json")])
        assert result.exit_code != 0
