"""
Navigator - Learn line availability, recommendations and overall progress.

Provides:
- Available lines (prerequisites satisfied)
- Recommended lines (in progress first, most recently accessed first)
- Overall progress percentage
- Learn graph map with status for each line
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from maia.config import DEFAULT_RECOMMENDATION_LIMIT
from maia.schemas import (
    LearnLine,
    LearnLineId,
    LineStatus,
    ProfileLearnLineStatus,
    UserProfile,
)

from .graph import LearnGraph, LearnLineCatalog, is_unlocked
from .tracker import ProgressTracker


class LineAvailability(str, Enum):
    """Learn line availability for the learn graph map."""
    LOCKED = "locked"           # Prerequisites not met
    AVAILABLE = "available"     # Can start
    IN_PROGRESS = "in_progress" # Started but not completed
    COMPLETED = "completed"     # Finished


@dataclass
class MapEntry:
    """Learn line with map metadata."""
    line: LearnLine
    availability: LineAvailability
    missing_prerequisites: list[LearnLineId]
    status: Optional[ProfileLearnLineStatus]


# -----------------------------------------------------------------------------
# Queries
# -----------------------------------------------------------------------------

def available_lines(graph: LearnGraph, completed: Iterable[LearnLineId]) -> list[LearnLineId]:
    """Ids of lines whose prerequisites are all completed, in graph order."""
    completed = set(completed)
    return [line.id for line in graph if is_unlocked(line, completed)]


def recommended_lines(
    graph: LearnGraph,
    profile: UserProfile,
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> list[LearnLineId]:
    """
    Recommend lines to work on next.

    Available, not yet completed lines, with lines in progress first and
    then the most recently accessed. Lines never accessed sort last.
    """
    completed = profile.completed
    candidates = [lid for lid in available_lines(graph, completed) if lid not in completed]

    def sort_key(line_id: LearnLineId) -> tuple[bool, float]:
        status = profile.learn_line_status.get(line_id)
        if status is None:
            return (True, 0.0)
        return (status.status != LineStatus.IN_PROGRESS, -status.last_accessed.timestamp())

    return sorted(candidates, key=sort_key)[:limit]


def overall_progress(graph: LearnGraph, profile: UserProfile) -> int:
    """Percentage of lines in the graph that are completed (0 with no lines)."""
    total = len(graph)
    if total == 0:
        return 0
    done = sum(1 for line_id in profile.completed_learn_lines if line_id in graph)
    # Round half up
    return int(done / total * 100 + 0.5)


def line_availability(
    graph: LearnGraph,
    profile: UserProfile,
    line_id: LearnLineId,
) -> tuple[LineAvailability, list[LearnLineId]]:
    """
    Check line availability based on progress and prerequisites.

    Returns:
        Tuple of (availability status, list of missing prerequisite IDs)
    """
    line = graph.get(line_id)
    if line is None:
        return LineAvailability.LOCKED, []

    status = profile.learn_line_status.get(line_id)
    if line_id in profile.completed or (status and status.status == LineStatus.MASTERED):
        return LineAvailability.COMPLETED, []
    if status and status.status == LineStatus.IN_PROGRESS:
        return LineAvailability.IN_PROGRESS, []

    missing = graph.missing_prerequisites(line, profile.completed)
    if missing:
        return LineAvailability.LOCKED, missing
    return LineAvailability.AVAILABLE, []


def learn_graph_map(graph: LearnGraph, profile: UserProfile) -> list[MapEntry]:
    """Every line, prerequisites first, annotated with availability."""
    entries = []
    for line_id in graph.topological_order():
        availability, missing = line_availability(graph, profile, line_id)
        entries.append(MapEntry(
            line=graph.learn_lines[line_id],
            availability=availability,
            missing_prerequisites=missing,
            status=profile.learn_line_status.get(line_id),
        ))
    return entries


# -----------------------------------------------------------------------------
# Navigator
# -----------------------------------------------------------------------------

class Navigator:
    """
    Navigate the learn lines with prerequisite checking.

    Combines LearnLineCatalog (content) with ProgressTracker (learner state)
    and always answers against the catalog's current graph.
    """

    def __init__(self, catalog: LearnLineCatalog, tracker: ProgressTracker):
        self.catalog = catalog
        self.tracker = tracker

    @property
    def graph(self) -> LearnGraph:
        return self.catalog.graph

    @property
    def profile(self) -> UserProfile:
        return self.tracker.profile

    def available_lines(self) -> list[LearnLineId]:
        return available_lines(self.graph, self.profile.completed)

    def recommended_lines(self, limit: int = DEFAULT_RECOMMENDATION_LIMIT) -> list[LearnLineId]:
        return recommended_lines(self.graph, self.profile, limit)

    def overall_progress(self) -> int:
        return overall_progress(self.graph, self.profile)

    def get_line_availability(self, line_id: LearnLineId) -> tuple[LineAvailability, list[LearnLineId]]:
        return line_availability(self.graph, self.profile, line_id)

    def is_line_available(self, line_id: LearnLineId) -> bool:
        """Check if a line can be started or revisited."""
        availability, _ = self.get_line_availability(line_id)
        return availability != LineAvailability.LOCKED

    def get_map(self) -> list[MapEntry]:
        return learn_graph_map(self.graph, self.profile)

    # -------------------------------------------------------------------------
    # Line Actions
    # -------------------------------------------------------------------------

    def start_line(self, line_id: LearnLineId) -> bool:
        """
        Start a line if available.

        Returns True if the line was started, False if it is locked.
        """
        if not self.is_line_available(line_id):
            return False
        return self.tracker.start(line_id) is not None

    def complete_line(self, line_id: LearnLineId) -> Optional[LearnLineId]:
        """
        Complete a line and return the top recommendation afterwards.

        Returns:
            ID of the next recommended line, or None if nothing is left
        """
        self.tracker.complete(line_id)
        recommended = self.recommended_lines(limit=1)
        return recommended[0] if recommended else None

    def get_progress_summary(self) -> dict:
        """Get progress summary for display."""
        entries = self.get_map()
        counts = {availability: 0 for availability in LineAvailability}
        for entry in entries:
            counts[entry.availability] += 1

        return {
            "total_lines": len(entries),
            "completed": counts[LineAvailability.COMPLETED],
            "in_progress": counts[LineAvailability.IN_PROGRESS],
            "available": counts[LineAvailability.AVAILABLE],
            "locked": counts[LineAvailability.LOCKED],
            "completion_percent": self.overall_progress(),
            "recommended": self.recommended_lines(),
        }
