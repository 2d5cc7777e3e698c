"""
Maia Classroom - Runtime components for working through learn lines.

This module provides:
- LearnGraph / LearnLineCatalog: Learn line index and prerequisite checks
- ProgressTracker: Learner status, cursor movement and completion
- Navigator: Availability, recommendations and overall progress
- FocusedContent: The equation visualization currently in focus
- AppContext: Session navigation state
"""

from .graph import (
    LearnGraph,
    LearnLineCatalog,
    build_learn_graph,
    is_unlocked,
)

from .focus import FocusedContent

from .tracker import (
    ProgressTracker,
    ProfileEvent,
)

from .navigator import (
    Navigator,
    LineAvailability,
    MapEntry,
    available_lines,
    recommended_lines,
    overall_progress,
    line_availability,
    learn_graph_map,
)

from .app_state import AppContext

__all__ = [
    # Graph
    "LearnGraph",
    "LearnLineCatalog",
    "build_learn_graph",
    "is_unlocked",
    # Focus
    "FocusedContent",
    # Tracker
    "ProgressTracker",
    "ProfileEvent",
    # Navigator
    "Navigator",
    "LineAvailability",
    "MapEntry",
    "available_lines",
    "recommended_lines",
    "overall_progress",
    "line_availability",
    "learn_graph_map",
    # App state
    "AppContext",
]
