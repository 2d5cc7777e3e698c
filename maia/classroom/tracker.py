"""
ProgressTracker - Walk a learner through learn lines and track their status.

Owns the UserProfile for the session:
- Per-line lifecycle (not started, in progress, mastered, needs review)
- Cursor movement through steps and content, with auto-proceed chaining
- Completion and mastery metrics
- Preferences

Every mutation is written through the ProfileStore and announced to
subscribers. Operations addressed to a line that is not in the current
learn graph are ignored (logged, returns None).
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from maia.schemas import (
    LearnLine,
    LearnLineId,
    LineStatus,
    NextAction,
    Preferences,
    ProfileLearnLineStatus,
    UserProfile,
    VisualizationContent,
    MAX_EFFICACY,
    MAX_VELOCITY,
    utcnow,
)
from maia.storage import ProfileStore, new_profile

from .focus import FocusedContent
from .graph import LearnLineCatalog

logger = logging.getLogger(__name__)

STATUS_FIELDS = set(ProfileLearnLineStatus.model_fields) - {"learn_line_id", "last_accessed"}


@dataclass
class ProfileEvent:
    """Sent to subscribers after every persisted change."""
    profile: UserProfile
    reset: bool = False  # dependent views must fully reload


class ProgressTracker:
    """
    Track learner progress against a LearnLineCatalog.

    Persistence is best effort: a failed write is logged by the store and
    the in-memory profile stays authoritative.
    """

    def __init__(
        self,
        catalog: LearnLineCatalog,
        store: ProfileStore,
        profile: Optional[UserProfile] = None,
        focus: Optional[FocusedContent] = None,
    ):
        """
        Initialize progress tracker.

        Args:
            catalog: Learn lines the learner can work through
            store: Durable storage for the profile
            profile: Starting profile (default: a fresh profile)
            focus: Surface that receives visualization configs while advancing
        """
        self.catalog = catalog
        self.store = store
        self.focus = focus
        self._profile = profile or new_profile()
        self._subscribers: list[Callable[[ProfileEvent], None]] = []

    @classmethod
    def load(
        cls,
        catalog: LearnLineCatalog,
        store: ProfileStore,
        focus: Optional[FocusedContent] = None,
    ) -> "ProgressTracker":
        """Start a session from the stored profile, or defaults if there is none."""
        profile = store.load()
        if profile is None:
            logger.info("No stored profile; starting with defaults")
        return cls(catalog, store, profile=profile, focus=focus)

    @property
    def profile(self) -> UserProfile:
        return self._profile

    def subscribe(self, callback: Callable[[ProfileEvent], None]) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)
        return lambda: self._subscribers.remove(callback)

    def _notify(self, reset: bool = False):
        event = ProfileEvent(profile=self._profile, reset=reset)
        for callback in list(self._subscribers):
            callback(event)

    def _lookup(self, line_id: LearnLineId) -> Optional[LearnLine]:
        line = self.catalog.graph.get(line_id)
        if line is None:
            logger.warning(f"Ignoring operation on unknown learn line: {line_id}")
        return line

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self) -> bool:
        """Refresh last_active, write the profile and notify subscribers."""
        self._profile.last_active = utcnow()
        saved = self.store.save(self._profile)
        self._notify()
        return saved

    def reset(self):
        """
        Discard all progress.

        Clears the stored entry and starts over with a default profile.
        Subscribers receive an event with reset=True.
        """
        self.store.clear()
        self._profile = new_profile()
        self._profile.last_active = utcnow()
        self.store.save(self._profile)
        self._notify(reset=True)

    # -------------------------------------------------------------------------
    # Line Status
    # -------------------------------------------------------------------------

    def get_status(self, line_id: LearnLineId) -> Optional[ProfileLearnLineStatus]:
        return self._profile.learn_line_status.get(line_id)

    def update_status(self, line_id: LearnLineId, **updates) -> Optional[ProfileLearnLineStatus]:
        """
        Merge fields into the line's status record, creating it if needed.

        Always refreshes last_accessed and persists the profile.

        Raises:
            TypeError: If a field name is not a status field
        """
        unknown = set(updates) - STATUS_FIELDS
        if unknown:
            raise TypeError(f"Unknown status fields: {sorted(unknown)}")
        if self._lookup(line_id) is None:
            return None

        current = self.get_status(line_id) or ProfileLearnLineStatus(learn_line_id=line_id)
        status = ProfileLearnLineStatus.model_validate({
            **current.model_dump(),
            **updates,
            "learn_line_id": line_id,
            "last_accessed": utcnow(),
        })
        self._profile.learn_line_status[line_id] = status
        self.save()
        return status

    def start(self, line_id: LearnLineId) -> Optional[ProfileLearnLineStatus]:
        """Start or resume a line. Not started and needs review become in progress."""
        if self._lookup(line_id) is None:
            return None
        current = self.get_status(line_id)
        status = current.status if current else LineStatus.NOT_STARTED
        if status in (LineStatus.NOT_STARTED, LineStatus.NEEDS_REVIEW):
            status = LineStatus.IN_PROGRESS
        return self.update_status(line_id, status=status)

    def complete(self, line_id: LearnLineId) -> Optional[ProfileLearnLineStatus]:
        """Mark a line mastered and add it to the completed set."""
        if self._lookup(line_id) is None:
            return None
        if line_id not in self._profile.completed_learn_lines:
            self._profile.completed_learn_lines.append(line_id)
        return self.update_status(
            line_id,
            status=LineStatus.MASTERED,
            velocity=MAX_VELOCITY,
            efficacy=MAX_EFFICACY,
        )

    # -------------------------------------------------------------------------
    # Cursor
    # -------------------------------------------------------------------------

    @staticmethod
    def _next_cursor(line: LearnLine, status: ProfileLearnLineStatus) -> Optional[tuple[int, int]]:
        """Position after the cursor, or None at the end of the line."""
        step_index = status.current_step_index
        if step_index >= len(line.steps):
            return None
        step = line.steps[step_index]
        if status.current_content_index < len(step.content) - 1:
            return step_index, status.current_content_index + 1
        if step_index < len(line.steps) - 1:
            return step_index + 1, 0
        return None

    def advance(self, line_id: LearnLineId) -> Optional[ProfileLearnLineStatus]:
        """
        Move the cursor to the next content item.

        After each move the new item is inspected: a visualization is
        published to the focused content surface, and unless the item asks
        for a continue button the cursor keeps moving. Stops at the last
        item of the last step; reaching the end does not complete the line.

        Returns:
            The status after advancing, or None for an unknown line
        """
        line = self._lookup(line_id)
        if line is None:
            return None

        status = self.get_status(line_id) or self.start(line_id)

        # Each pass moves the cursor forward, so a line can't take more passes
        # than it has positions.
        for _ in range(line.total_content + len(line.steps)):
            cursor = self._next_cursor(line, status)
            if cursor is None:
                break
            step_index, content_index = cursor
            status = self.update_status(
                line_id,
                current_step_index=step_index,
                current_content_index=content_index,
            )
            logger.debug(f"{line_id}: cursor at step {step_index}, content {content_index}")

            item = line.content_at(step_index, content_index)
            if item is None:
                break
            if isinstance(item, VisualizationContent) and self.focus is not None:
                self.focus.publish(item.config)
            if item.next_action == NextAction.CONTINUE_BUTTON:
                break

        return status

    def current_content(self, line_id: LearnLineId):
        """Content item under the cursor, or None."""
        line = self.catalog.graph.get(line_id)
        status = self.get_status(line_id)
        if line is None or status is None:
            return None
        return line.content_at(status.current_step_index, status.current_content_index)

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------

    def update_preferences(self, **updates) -> Preferences:
        """Merge preference fields; accessibility flags merge individually."""
        merged = self._profile.preferences.model_dump()
        for key, value in updates.items():
            if key == "accessibility":
                if hasattr(value, "model_dump"):
                    value = value.model_dump()
                merged["accessibility"].update(value)
            else:
                merged[key] = value
        self._profile.preferences = Preferences.model_validate(merged)
        self.save()
        return self._profile.preferences
