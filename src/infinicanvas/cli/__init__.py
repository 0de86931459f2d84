"""Board CLI commands for infinicanvas.

Adds the ``board`` command group to the Litestar CLI for rasterizing and
inspecting serialized board snapshots.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

import rich_click as click
from litestar.plugins import CLIPluginProtocol
from rich.console import Console
from rich.table import Table

from infinicanvas.config import EngineConfig
from infinicanvas.exceptions import InvalidSnapshotError
from infinicanvas.services.export import ExportService

if TYPE_CHECKING:
    from infinicanvas.core.snapshot import BoardSnapshot

console = Console()


def _load_snapshot(service: ExportService, path: Path) -> BoardSnapshot:
    try:
        return service.from_json(path.read_text(encoding="utf-8"))
    except InvalidSnapshotError as e:
        raise click.ClickException(f"Invalid snapshot {path}: {e}") from e


@click.group(name="board", help="Render and inspect whiteboard snapshots.")
def board_group() -> None:
    """Render and inspect whiteboard snapshots."""


@board_group.command(name="render", help="Rasterize a snapshot file to PNG.")
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o", required=True, type=click.Path(dir_okay=False, path_type=Path), help="PNG file to write"
)
@click.option("--width", "-w", type=int, default=None, help="Image width in pixels")
@click.option("--height", type=int, default=None, help="Image height in pixels")
def board_render(snapshot: Path, output: Path, width: int | None, height: int | None) -> None:
    """Rasterize a snapshot's live elements under its saved view."""
    config = EngineConfig()
    service = ExportService(config)
    board = _load_snapshot(service, snapshot)

    png = service.to_png(board, width=width, height=height)
    output.write_bytes(png)
    console.print(
        f"[green]Rendered[/green] {len(board.elements)} elements to [cyan]{output}[/cyan] "
        f"({width or config.viewport_width}x{height or config.viewport_height})"
    )


@board_group.command(name="info", help="Show a snapshot's elements and history position.")
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def board_info(snapshot: Path) -> None:
    """Print a summary of a snapshot file."""
    board = _load_snapshot(ExportService(), snapshot)

    table = Table(title=f"Elements ({len(board.elements)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Color", style="green")

    for i, element in enumerate(board.elements):
        color = getattr(element, "color", None) or getattr(element, "bg_color", "-")
        table.add_row(str(i), element.element_type.value, element.id[:8], color)

    console.print(table)

    counts = Counter(e.element_type.value for e in board.elements)
    if counts:
        console.print(", ".join(f"{name}: {count}" for name, count in sorted(counts.items())))

    transform = board.view_transform
    console.print(
        f"History: [cyan]{board.history_index}[/cyan] of [cyan]{len(board.history) - 1}[/cyan]  "
        f"Zoom: [cyan]{transform.zoom_percent}%[/cyan]  "
        f"Offset: ({transform.offset_x:g}, {transform.offset_y:g})"
    )


class InfinicanvasCLIPlugin(CLIPluginProtocol):
    """CLI plugin that adds the ``board`` command group.

    Subcommands:
    - render: Rasterize a snapshot file to PNG
    - info: Show a snapshot's elements and history position
    """

    def on_cli_init(self, cli: click.Group) -> None:
        """Register the board command group."""
        cli.add_command(board_group)
