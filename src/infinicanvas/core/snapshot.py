"""Opaque board state used for page switching and persistence."""

from __future__ import annotations

from dataclasses import dataclass, field

from infinicanvas.core.models import Element
from infinicanvas.core.transform import ViewTransform


@dataclass(frozen=True)
class BoardSnapshot:
    """Everything a page needs to be restored exactly.

    Attributes:
        elements: The live element list.
        history: Every recorded history snapshot, oldest first.
        history_index: Position of the current history snapshot.
        view_transform: The page's pan/zoom state.
    """

    elements: tuple[Element, ...] = ()
    history: tuple[tuple[Element, ...], ...] = ((),)
    history_index: int = 0
    view_transform: ViewTransform = field(default_factory=ViewTransform)
