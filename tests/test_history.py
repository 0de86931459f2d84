"""Tests for the full-snapshot undo/redo history."""

from __future__ import annotations

import pytest

from infinicanvas.core.history import History
from infinicanvas.core.models import Point, Rectangle, Stroke
from infinicanvas.exceptions import InvalidSnapshotError


class TestHistory:
    """Tests for History."""

    def test_starts_with_empty_document(self) -> None:
        """Test the initial history is a single empty snapshot."""
        history = History()
        assert history.snapshots == ((),)
        assert history.index == 0
        assert not history.can_undo
        assert not history.can_redo

    def test_commit_advances(self, sample_stroke: Stroke) -> None:
        """Test that commit appends and moves the index."""
        history = History()
        stored = history.commit([sample_stroke])
        assert stored == (sample_stroke,)
        assert history.index == 1
        assert len(history) == 2
        assert history.can_undo
        assert not history.can_redo

    def test_undo_redo_boundaries_are_noops(self) -> None:
        """Test undo at the start and redo at the end do nothing."""
        history = History()
        assert history.undo() is None
        assert history.redo() is None
        assert history.index == 0

    def test_commit_after_undo_truncates_redo_tail(self) -> None:
        """Test that a new commit makes the old redo branch unreachable."""
        a = Rectangle(width=10, height=10)
        b = Rectangle(width=20, height=20)
        c = Rectangle(width=30, height=30)
        history = History()
        history.commit([a])
        history.commit([a, b])
        history.undo()
        history.commit([a, c])

        assert not history.can_redo
        assert history.snapshots == ((), (a,), (a, c))
        history.undo()
        assert history.redo() == (a, c)

    def test_round_trip(self) -> None:
        """Test undoing N commits then redoing N reproduces the final list."""
        history = History()
        elements: list[Stroke] = []
        for i in range(5):
            elements.append(Stroke(points=(Point(i, i), Point(i + 1, i + 1))))
            history.commit(elements)
        final = history.current

        for _ in range(5):
            assert history.undo() is not None
        assert history.current == ()
        for _ in range(5):
            assert history.redo() is not None
        assert history.current == final

    def test_snapshots_are_independent_of_caller_list(self, sample_stroke: Stroke) -> None:
        """Test that later changes to the committed list do not leak into history."""
        elements = [sample_stroke]
        history = History()
        history.commit(elements)
        elements.clear()
        assert history.current == (sample_stroke,)


class TestHistoryRestore:
    """Tests for restoring a saved history."""

    def test_restore(self, sample_stroke: Stroke) -> None:
        """Test restoring snapshots and index."""
        history = History([[], [sample_stroke]], index=0)
        assert history.can_redo
        assert history.redo() == (sample_stroke,)

    def test_empty_history_rejected(self) -> None:
        """Test that history must hold the empty document."""
        with pytest.raises(InvalidSnapshotError):
            History([])

    def test_non_empty_first_snapshot_rejected(self, sample_stroke: Stroke) -> None:
        """Test that the first snapshot must be empty."""
        with pytest.raises(InvalidSnapshotError):
            History([[sample_stroke]])

    @pytest.mark.parametrize("index", [-1, 2])
    def test_out_of_range_index_rejected(self, index: int) -> None:
        """Test that the index must point at a snapshot."""
        with pytest.raises(InvalidSnapshotError, match="out of range"):
            History([[], []], index=index)
