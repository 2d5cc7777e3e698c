"""
Session state schemas for Maia.

State that lives for one session only and is never persisted:
- Focused equation balance shown on the desk
- App-level navigation state
"""

from typing import Optional

from pydantic import BaseModel

from .content import LearnLineId


class FocusedEquationBalance(BaseModel):
    """The equation visualization currently in focus."""
    active: bool = False
    left_side: str = ""
    right_side: str = ""
    x_value: float = 0
    x_symbol: str = "x"
    show_evaluation: bool = False


class AppState(BaseModel):
    learn_graph_map_open: bool = False
    current_learn_line: Optional[LearnLineId] = None
