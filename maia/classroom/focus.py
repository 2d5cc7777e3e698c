"""
FocusedContent - The equation visualization currently on the desk.

A write-only sink from the tracker's point of view; the presentation layer
subscribes to it to redraw the active equation balance.
"""

import logging
from typing import Callable

from maia.schemas import FocusedEquationBalance, VisualizationConfig

logger = logging.getLogger(__name__)


class FocusedContent:
    def __init__(self):
        self._state = FocusedEquationBalance()
        self._subscribers: list[Callable[[FocusedEquationBalance], None]] = []

    def snapshot(self) -> FocusedEquationBalance:
        return self._state.model_copy()

    def subscribe(self, callback: Callable[[FocusedEquationBalance], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        return lambda: self._subscribers.remove(callback)

    def publish(self, config: VisualizationConfig):
        """Apply a partial config: only fields set on it change the focus."""
        updates = config.model_dump(exclude_none=True)
        logger.debug(f"Applying visualization config: {updates}")
        self._state = self._state.model_copy(update=updates)
        self._notify()

    def clear(self):
        self._state = FocusedEquationBalance()
        self._notify()

    def _notify(self):
        state = self.snapshot()
        for callback in list(self._subscribers):
            callback(state)
