"""
Server-side stand-in for the scrolling list the front-end renders.

The viewer only needs two things from its display surface: the current
scroll offset, and a way to run code after the next render pass (so a
scroll offset can be restored once the list is back on screen). The
router calls ``render()`` right before it serialises a view.
"""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class Viewport:
    def __init__(self, scroll_top: int = 0) -> None:
        self._scroll_top = max(0, int(scroll_top))
        self._after_render: List[Callable[[], None]] = []

    @property
    def scroll_top(self) -> int:
        return self._scroll_top

    @scroll_top.setter
    def scroll_top(self, value: int) -> None:
        self._scroll_top = max(0, int(value))

    def scroll_to_top(self) -> None:
        self.scroll_top = 0

    def after_render(self, callback: Callable[[], None]) -> None:
        """Queue ``callback`` to run once the next render pass has happened."""
        self._after_render.append(callback)

    def render(self) -> None:
        """Run (and forget) the callbacks queued since the previous render."""
        callbacks, self._after_render = self._after_render, []
        for callback in callbacks:
            callback()
        if callbacks:
            logger.debug("Ran %d post-render callback(s)", len(callbacks))
