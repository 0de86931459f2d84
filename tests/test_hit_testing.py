"""Tests for element validation and eraser hit-testing."""

from __future__ import annotations

import pytest

from infinicanvas.core.hit_testing import erase_at, hit_test, is_valid, text_bounds
from infinicanvas.core.models import Arrow, Circle, Line, Point, Rectangle, Sticky, Stroke, Text


class TestValidation:
    """Tests for is_valid."""

    def test_stroke_needs_two_points(self) -> None:
        """Test that single-point strokes are invalid."""
        assert not is_valid(Stroke(points=(Point(0, 0),)))
        assert is_valid(Stroke(points=(Point(0, 0), Point(0, 0))))

    def test_rectangle_minimum_size(self) -> None:
        """Test that a rectangle must reach 2 units on one axis."""
        assert not is_valid(Rectangle(width=1, height=1))
        assert is_valid(Rectangle(width=2, height=0))
        assert is_valid(Rectangle(width=0, height=2))

    def test_other_variants_always_valid(self) -> None:
        """Test that zero-size circles, segments, text and stickies are valid."""
        assert is_valid(Circle())
        assert is_valid(Line())
        assert is_valid(Arrow())
        assert is_valid(Text(text="x"))
        assert is_valid(Sticky())


class TestHitTest:
    """Tests for hit_test."""

    def test_stroke_is_strictly_within_radius(self) -> None:
        """Test that a stroke point exactly at the radius is not hit."""
        stroke = Stroke(points=(Point(0, 0), Point(100, 0)))
        assert hit_test(stroke, Point(3, 4), 5.1)
        assert not hit_test(stroke, Point(3, 4), 5.0)

    def test_stroke_tests_points_not_segments(self) -> None:
        """Test that only sampled points count for strokes."""
        stroke = Stroke(points=(Point(0, 0), Point(100, 0)))
        assert not hit_test(stroke, Point(50, 0), 10)

    def test_rectangle_padded_box(self, sample_rectangle: Rectangle) -> None:
        """Test the padded box test for rectangles."""
        assert hit_test(sample_rectangle, Point(25, 25), 30)
        assert hit_test(sample_rectangle, Point(-10, 25), 10)
        assert not hit_test(sample_rectangle, Point(1000, 1000), 5)

    def test_circle_expanded_ellipse(self) -> None:
        """Test the normalized ellipse test with expanded radii."""
        circle = Circle(cx=0, cy=0, rx=20, ry=10)
        assert hit_test(circle, Point(0, 0), 1)
        assert hit_test(circle, Point(25, 0), 5)
        assert not hit_test(circle, Point(26, 0), 5)
        assert hit_test(circle, Point(0, 15), 5)

    def test_segment_distance(self) -> None:
        """Test lines and arrows hit within the radius, inclusive."""
        line = Line(x1=0, y1=0, x2=100, y2=0)
        arrow = Arrow(x1=0, y1=0, x2=100, y2=0)
        assert hit_test(line, Point(50, 5), 5)
        assert hit_test(arrow, Point(50, 5), 5)
        assert not hit_test(line, Point(50, 6), 5)

    def test_text_estimated_box(self) -> None:
        """Test the character-count estimate for text bounds."""
        text = Text(x=0, y=0, text="abcd", font_size=10)
        assert text_bounds(text) == pytest.approx((24.0, 14.0))
        assert hit_test(text, Point(23, 13), 0)
        assert not hit_test(text, Point(29.5, 5), 5)
        assert hit_test(text, Point(28.5, 5), 5)

    def test_sticky_box(self, sample_sticky: Sticky) -> None:
        """Test stickies hit their stored rectangle."""
        assert hit_test(sample_sticky, Point(400, 400), 1)
        assert hit_test(sample_sticky, Point(295, 300), 5)
        assert not hit_test(sample_sticky, Point(294, 300), 5)


class TestEraseAt:
    """Tests for erase_at."""

    def test_removes_only_hit_elements_in_order(self, sample_rectangle: Rectangle, sample_sticky: Sticky) -> None:
        """Test survivors keep their order."""
        far = Rectangle(x=1000, y=1000, width=10, height=10)
        remaining = erase_at([far, sample_rectangle, sample_sticky], Point(25, 25), 5)
        assert remaining == [far, sample_sticky]

    def test_no_hit(self, sample_rectangle: Rectangle) -> None:
        """Test nothing is removed when the eraser misses."""
        assert erase_at([sample_rectangle], Point(1000, 1000), 5) == [sample_rectangle]
