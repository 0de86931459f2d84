"""Multi-page session built on a single live engine.

Only the current page is live inside the engine. Every other page is held as
an opaque :class:`BoardSnapshot` and restored verbatim when selected, so each
page keeps its own document, history and view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from infinicanvas.core.engine import WhiteboardEngine
from infinicanvas.core.snapshot import BoardSnapshot
from infinicanvas.exceptions import PageNotFoundError

if TYPE_CHECKING:
    from infinicanvas.config import EngineConfig

logger = structlog.get_logger(__name__)


@dataclass
class Page:
    """A named page of the whiteboard.

    Attributes:
        id: Stable page identifier (``page-<n>``).
        name: Display name.
        snapshot: Saved board state. Stale while the page is current.
    """

    id: str
    name: str
    snapshot: BoardSnapshot = field(default_factory=BoardSnapshot)


class PageManager:
    """Keeps an ordered list of pages and swaps them through one engine.

    Attributes:
        engine: The live engine holding the current page.
    """

    def __init__(self, engine: WhiteboardEngine | None = None, config: EngineConfig | None = None) -> None:
        """Start a session with a single empty page.

        Args:
            engine: Engine to drive. A new one is created when omitted.
            config: Configuration for a newly created engine.
        """
        self.engine = engine or WhiteboardEngine(config)
        self._counter = 0
        self._pages: list[Page] = []
        self._pages.append(self._new_page(snapshot=self.engine.get_snapshot()))
        self._current = 0

    @property
    def pages(self) -> list[Page]:
        """All pages in order, with the current page's snapshot refreshed."""
        self._store_current()
        return list(self._pages)

    @property
    def current_index(self) -> int:
        """Index of the page loaded in the engine."""
        return self._current

    @property
    def current_page(self) -> Page:
        """The page loaded in the engine."""
        self._store_current()
        return self._pages[self._current]

    def add_page(self) -> Page:
        """Append an empty page and switch to it.

        Returns:
            The new page.
        """
        self._store_current()
        page = self._new_page()
        self._pages.append(page)
        self._current = len(self._pages) - 1
        self.engine.load_snapshot(page.snapshot)
        logger.info("Page added", page_id=page.id, page_count=len(self._pages))
        return page

    def remove_page(self, index: int) -> bool:
        """Remove a page. The last remaining page cannot be removed.

        Removing the current page loads the page to its left (or the new first
        page). Removing a page left of the current one keeps the current page
        selected.

        Returns:
            True if a page was removed.

        Raises:
            PageNotFoundError: If ``index`` is out of range.
        """
        self._check_index(index)
        if len(self._pages) <= 1:
            logger.debug("Refused to remove the only page")
            return False

        self._store_current()
        removed = self._pages.pop(index)
        if index == self._current:
            self._current = max(0, index - 1)
            self.engine.load_snapshot(self._pages[self._current].snapshot)
        elif index < self._current:
            self._current -= 1
        logger.info("Page removed", page_id=removed.id, page_count=len(self._pages))
        return True

    def rename_page(self, index: int, name: str) -> Page:
        """Rename a page.

        Raises:
            PageNotFoundError: If ``index`` is out of range.
        """
        self._check_index(index)
        page = self._pages[index]
        page.name = name
        return page

    def select_page(self, index: int) -> Page:
        """Save the current page and load another.

        Raises:
            PageNotFoundError: If ``index`` is out of range.
        """
        self._check_index(index)
        if index != self._current:
            self._store_current()
            self._current = index
            self.engine.load_snapshot(self._pages[index].snapshot)
            logger.debug("Page selected", index=index, page_id=self._pages[index].id)
        return self._pages[index]

    def _new_page(self, snapshot: BoardSnapshot | None = None) -> Page:
        self._counter += 1
        return Page(
            id=f"page-{self._counter}",
            name=f"Page {len(self._pages) + 1}",
            snapshot=snapshot or BoardSnapshot(),
        )

    def _store_current(self) -> None:
        self._pages[self._current].snapshot = self.engine.get_snapshot()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._pages):
            raise PageNotFoundError(index)
