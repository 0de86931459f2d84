"""Tests for geometry helpers."""

from __future__ import annotations

import pytest

from infinicanvas.core.geometry import dist_to_segment, distance, point_in_rect, quadratic_point, smooth_path
from infinicanvas.core.models import Point


class TestDistance:
    """Tests for point and segment distances."""

    def test_distance(self) -> None:
        """Test the Euclidean distance."""
        assert distance(Point(0, 0), Point(3, 4)) == 5.0

    def test_distance_to_segment_interior(self) -> None:
        """Test a point projecting onto the middle of a segment."""
        assert dist_to_segment(Point(5, 3), Point(0, 0), Point(10, 0)) == pytest.approx(3.0)

    def test_distance_to_segment_clamped(self) -> None:
        """Test points beyond an endpoint measure to that endpoint."""
        assert dist_to_segment(Point(-3, 4), Point(0, 0), Point(10, 0)) == pytest.approx(5.0)
        assert dist_to_segment(Point(13, 4), Point(0, 0), Point(10, 0)) == pytest.approx(5.0)

    def test_distance_to_degenerate_segment(self) -> None:
        """Test a zero-length segment behaves like a point."""
        assert dist_to_segment(Point(3, 4), Point(0, 0), Point(0, 0)) == pytest.approx(5.0)


class TestPointInRect:
    """Tests for padded rectangle containment."""

    def test_inside(self) -> None:
        """Test a point inside the rectangle."""
        assert point_in_rect(Point(5, 5), 0, 0, 10, 10)

    def test_edges_are_inclusive(self) -> None:
        """Test that edges count as inside."""
        assert point_in_rect(Point(10, 10), 0, 0, 10, 10)

    def test_padding(self) -> None:
        """Test that padding grows the rectangle on every side."""
        assert not point_in_rect(Point(-3, 5), 0, 0, 10, 10)
        assert point_in_rect(Point(-3, 5), 0, 0, 10, 10, padding=3)


class TestSmoothing:
    """Tests for stroke smoothing."""

    def test_quadratic_endpoints(self) -> None:
        """Test that a quadratic curve starts and ends at its endpoints."""
        start, control, end = Point(0, 0), Point(5, 10), Point(10, 0)
        assert quadratic_point(start, control, end, 0) == start
        assert quadratic_point(start, control, end, 1) == end
        assert quadratic_point(start, control, end, 0.5) == Point(5, 5)

    def test_short_paths_unchanged(self) -> None:
        """Test that paths with fewer than three points are not smoothed."""
        points = [Point(0, 0), Point(10, 10)]
        assert smooth_path(points) == points

    def test_smoothed_path_keeps_endpoints(self) -> None:
        """Test that smoothing keeps the first and last points."""
        points = [Point(0, 0), Point(10, 10), Point(20, 5)]
        path = smooth_path(points, segments=4)
        assert path[0] == points[0]
        assert path[-1] == points[-1]
        # One curve of four segments plus the start and the closing point
        assert len(path) == 6
