"""Full-snapshot history implementation for undo/redo functionality."""

from __future__ import annotations

from typing import TYPE_CHECKING

from infinicanvas.exceptions import InvalidSnapshotError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from infinicanvas.core.models import Element

Snapshot = tuple["Element", ...]


class History:
    """Linear undo/redo history of complete element lists.

    Every commit stores the whole element list rather than a diff. The first
    snapshot is always the empty document, and the current index always points
    at an existing snapshot. Committing after an undo truncates the redo tail
    before appending, so an abandoned branch is never reachable again.

    Attributes:
        index: Position of the current snapshot.
    """

    def __init__(self, snapshots: Sequence[Iterable[Element]] | None = None, index: int = 0) -> None:
        """Initialize history, optionally restoring a previous state.

        Args:
            snapshots: Previously recorded snapshots. Defaults to ``[[]]``.
            index: Current position within ``snapshots``.

        Raises:
            InvalidSnapshotError: If the restored state breaks the history invariants.
        """
        self._snapshots: list[Snapshot] = [tuple(s) for s in snapshots] if snapshots is not None else [()]
        if not self._snapshots:
            msg = "History must contain at least the empty document"
            raise InvalidSnapshotError(msg)
        if self._snapshots[0]:
            msg = "The first history snapshot must be the empty document"
            raise InvalidSnapshotError(msg)
        if not 0 <= index < len(self._snapshots):
            msg = f"History index {index} is out of range for {len(self._snapshots)} snapshots"
            raise InvalidSnapshotError(msg)
        self.index = index

    def commit(self, elements: Iterable[Element]) -> Snapshot:
        """Record a new element list as the current state.

        Any snapshots after the current index are discarded first.

        Args:
            elements: The full element list after the mutation.

        Returns:
            The stored snapshot.
        """
        snapshot = tuple(elements)
        del self._snapshots[self.index + 1 :]
        self._snapshots.append(snapshot)
        self.index += 1
        return snapshot

    def undo(self) -> Snapshot | None:
        """Step back one snapshot.

        Returns:
            The snapshot now current, or None if already at the empty document.
        """
        if not self.can_undo:
            return None
        self.index -= 1
        return self._snapshots[self.index]

    def redo(self) -> Snapshot | None:
        """Step forward one snapshot.

        Returns:
            The snapshot now current, or None if already at the newest snapshot.
        """
        if not self.can_redo:
            return None
        self.index += 1
        return self._snapshots[self.index]

    @property
    def can_undo(self) -> bool:
        """Check if there is an earlier snapshot."""
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        """Check if there is a later snapshot."""
        return self.index < len(self._snapshots) - 1

    @property
    def current(self) -> Snapshot:
        """The snapshot at the current index."""
        return self._snapshots[self.index]

    @property
    def snapshots(self) -> tuple[Snapshot, ...]:
        """All recorded snapshots, oldest first."""
        return tuple(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)
