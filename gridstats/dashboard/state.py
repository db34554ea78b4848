"""Shared dashboard state: the filter store and the status line.

The filter controls and the leaderboard live in different parts of the
dashboard. Instead of reaching each other through globals, both hold the same
FilterStore: controls call ``set``/``reset``, the leaderboard subscribes and
re-renders.

    store = FilterStore()
    unsubscribe = store.subscribe(lambda state: print(state))
    store.set("min_touchdowns", "6")   # prints FilterState(..., min_touchdowns=6, ...)
    unsubscribe()
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..ranking import FilterState

logger = logging.getLogger(__name__)

FilterListener = Callable[[FilterState], None]


class FilterStore:
    """Observable holder of the current FilterState."""

    def __init__(self, initial: FilterState | None = None):
        self._state = initial or FilterState()
        self._listeners: list[FilterListener] = []

    @property
    def state(self) -> FilterState:
        return self._state

    def set(self, name: str, value: Any) -> FilterState:
        """Change one criterion; listeners are only notified on a real change."""
        new_state = self._state.updated(name, value)
        if new_state != self._state:
            self._state = new_state
            self._notify()
        return self._state

    def reset(self) -> FilterState:
        if self._state != FilterState():
            self._state = FilterState()
            self._notify()
        return self._state

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        """Register a listener and return a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        logger.debug(f"Filters changed: {self._state}")
        for listener in list(self._listeners):
            listener(self._state)


@dataclass
class StatusLine:
    """Text shown under the filter bar (the active filter summary)."""

    text: str = ""

    def __str__(self) -> str:
        return self.text

    def __bool__(self) -> bool:
        return bool(self.text)
