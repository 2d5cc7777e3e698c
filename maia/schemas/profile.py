"""
Profile schemas for Maia.

Defines Pydantic models for the learner profile including:
- Per learn line status (cursor, mastery metrics, lifecycle)
- Preferences
- The user profile persisted on the device
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from .content import LearnLineId


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LineStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    MASTERED = "mastered"
    NEEDS_REVIEW = "needs_review"


MAX_VELOCITY = 100
MAX_EFFICACY = 1000


class ProfileLearnLineStatus(BaseModel):
    """Progress of one learner through one learn line."""
    learn_line_id: LearnLineId
    velocity: float = 0         # short-term momentum, conventionally 0-100
    efficacy: float = 0         # long-term mastery, conventionally 0-1000+
    current_step_index: int = Field(default=0, ge=0)
    current_content_index: int = Field(default=0, ge=0)
    status: LineStatus = LineStatus.NOT_STARTED
    last_accessed: datetime = Field(default_factory=utcnow)


class Accessibility(BaseModel):
    high_contrast: bool = False
    large_text: bool = False
    reduce_motion: bool = False


class Preferences(BaseModel):
    language: str = "en"
    theme: Literal["light", "dark", "print"] = "light"
    accessibility: Accessibility = Field(default_factory=Accessibility)


class UserProfile(BaseModel):
    """
    Learner profile stored on the device.

    Missing fields are back-filled from the defaults below when a stored
    profile is loaded, so older saves keep working as the schema grows.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))  # client-generated
    name: Optional[str] = None
    email: Optional[str] = None
    created: datetime = Field(default_factory=utcnow)
    last_active: datetime = Field(default_factory=utcnow)
    preferences: Preferences = Field(default_factory=Preferences)
    learn_line_status: dict[LearnLineId, ProfileLearnLineStatus] = {}
    completed_learn_lines: list[LearnLineId] = []  # set semantics, insertion ordered

    @field_validator("completed_learn_lines")
    @classmethod
    def unique_completed(cls, v):
        return list(dict.fromkeys(v))

    @property
    def completed(self) -> set[LearnLineId]:
        return set(self.completed_learn_lines)
