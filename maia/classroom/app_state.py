"""
AppContext - Session-wide navigation state shared by views.
"""

from typing import Callable, Optional

from maia.schemas import AppState, LearnLineId


class AppContext:
    def __init__(self, state: Optional[AppState] = None):
        self.state = state or AppState()
        self._subscribers: list[Callable[[AppState], None]] = []

    def subscribe(self, callback: Callable[[AppState], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        return lambda: self._subscribers.remove(callback)

    def _notify(self):
        for callback in list(self._subscribers):
            callback(self.state)

    def toggle_learn_graph_map(self):
        self.state.learn_graph_map_open = not self.state.learn_graph_map_open
        self._notify()

    def set_current_learn_line(self, line_id: LearnLineId):
        """Select a line; closes the learn graph map."""
        self.state.current_learn_line = line_id
        self.state.learn_graph_map_open = False
        self._notify()
