"""
Maia Schemas - Pydantic models for the adaptive learning core.

This module exports all schema classes for:
- Content: learn lines, steps, content items, assessments
- Profile: learner profile, preferences, per-line status
- State: focused visualization and app navigation state
"""

# Content schemas
from .content import (
    LearnLineId,
    NextAction,
    CompletionTrigger,
    VisualizationConfig,
    ContentItemBase,
    TextContent,
    ImageContent,
    MathProblemContent,
    VisualizationContent,
    ContentItem,
    ProblemSetAssessment,
    Step,
    LearnLineTranslation,
    LearnLine,
)

# Profile schemas
from .profile import (
    LineStatus,
    ProfileLearnLineStatus,
    Accessibility,
    Preferences,
    UserProfile,
    MAX_VELOCITY,
    MAX_EFFICACY,
    utcnow,
)

# Session state schemas
from .state import (
    FocusedEquationBalance,
    AppState,
)

__all__ = [
    # Content
    'LearnLineId',
    'NextAction',
    'CompletionTrigger',
    'VisualizationConfig',
    'ContentItemBase',
    'TextContent',
    'ImageContent',
    'MathProblemContent',
    'VisualizationContent',
    'ContentItem',
    'ProblemSetAssessment',
    'Step',
    'LearnLineTranslation',
    'LearnLine',
    # Profile
    'LineStatus',
    'ProfileLearnLineStatus',
    'Accessibility',
    'Preferences',
    'UserProfile',
    'MAX_VELOCITY',
    'MAX_EFFICACY',
    'utcnow',
    # State
    'FocusedEquationBalance',
    'AppState',
]
