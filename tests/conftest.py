"""Pytest configuration and fixtures for infinicanvas tests."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest
from litestar import Litestar
from litestar.testing import TestClient

from infinicanvas.config import EngineConfig
from infinicanvas.core.engine import WhiteboardEngine
from infinicanvas.core.events import PointerEvent
from infinicanvas.core.models import Point, Rectangle, Sticky, Stroke, Text
from infinicanvas.core.types import Tool
from infinicanvas.plugin import InfinicanvasConfig, InfinicanvasPlugin
from infinicanvas.services.export import ExportService

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def config() -> EngineConfig:
    """Create an engine configuration independent of the environment."""
    return EngineConfig(background_color="#1a1a2e", viewport_width=800, viewport_height=600, grid_spacing=40.0)


# Engine fixtures


@pytest.fixture
def engine(config: EngineConfig) -> WhiteboardEngine:
    """Create a fresh engine without a surface."""
    return WhiteboardEngine(config, rng=random.Random(0))


@pytest.fixture
def surface_engine(config: EngineConfig) -> WhiteboardEngine:
    """Create a fresh engine rendering into an 800x600 surface."""
    engine = WhiteboardEngine(config, rng=random.Random(0))
    engine.attach_surface()
    return engine


def _drag(engine: WhiteboardEngine, *points: tuple[float, float]) -> None:
    first, *rest = points
    engine.pointer_down(PointerEvent(*first))
    for point in rest:
        engine.pointer_move(PointerEvent(*point))
    engine.pointer_up(PointerEvent(*points[-1]))


@pytest.fixture
def drag() -> Callable[..., None]:
    """Perform one primary-button gesture through the given screen points."""
    return _drag


@pytest.fixture
def draw_rectangle() -> Callable[..., None]:
    """Draw a rectangle between two screen points with the rectangle tool."""

    def _draw(engine: WhiteboardEngine, start: tuple[float, float], end: tuple[float, float]) -> None:
        previous = engine.tool
        engine.set_tool(Tool.RECTANGLE)
        _drag(engine, start, end)
        engine.set_tool(previous)

    return _draw


# Model fixtures


@pytest.fixture
def sample_stroke() -> Stroke:
    """Create a sample stroke for testing."""
    return Stroke(points=(Point(0, 0), Point(10, 10), Point(20, 5)), color="#ff0000", line_width=2.0)


@pytest.fixture
def sample_rectangle() -> Rectangle:
    """Create a sample 50x50 rectangle at the origin."""
    return Rectangle(x=0, y=0, width=50, height=50, color="#00ff00", line_width=3.0)


@pytest.fixture
def sample_text() -> Text:
    """Create a sample text element for testing."""
    return Text(x=100, y=100, text="Hello", color="#ffffff", font_size=20)


@pytest.fixture
def sample_sticky() -> Sticky:
    """Create a sample sticky note for testing."""
    return Sticky(x=300, y=300, text="Remember", bg_color="#86efac")


# Service fixtures


@pytest.fixture
def export_service(config: EngineConfig) -> ExportService:
    """Create an ExportService instance."""
    return ExportService(config)


# App and client fixtures


@pytest.fixture
def app(config: EngineConfig) -> Litestar:
    """Create a Litestar app with InfinicanvasPlugin for testing."""
    from infinicanvas.core.error_handling import get_exception_handlers

    return Litestar(
        plugins=[InfinicanvasPlugin(InfinicanvasConfig(engine_config=config))],
        exception_handlers=get_exception_handlers(),
    )


@pytest.fixture
def client(app: Litestar) -> TestClient[Litestar]:
    """Create a test client for the app."""
    return TestClient(app=app)
