"""
Content schemas for Maia.

Defines Pydantic models for authored learning content including:
- Content items (text, image, math problem, visualization)
- Steps and learn lines
- Problem-set assessments
- Per-line translations

Content is immutable once loaded; every model here is frozen.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

LearnLineId = str


class NextAction(str, Enum):
    """How the learner moves on from a content item."""
    AUTO_PROCEED = "auto_proceed"        # no learner input, advance immediately
    CONTINUE_BUTTON = "continue_button"  # wait for an explicit learner action


class CompletionTrigger(str, Enum):
    CONTINUE_BUTTON = "continue_button"


class ContentModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# -----------------------------------------------------------------------------
# Visualization configuration
# -----------------------------------------------------------------------------

class VisualizationConfig(ContentModel):
    """
    Equation balance configuration carried by a visualization item.

    Every field is optional: a config only updates the fields it sets when
    it is published to the focused content surface.
    """
    active: Optional[bool] = None
    left_side: Optional[str] = None     # left hand expression, e.g. "x + 3"
    right_side: Optional[str] = None
    x_value: Optional[float] = None     # value of the unknown that balances the equation
    x_symbol: Optional[str] = None      # display symbol for the unknown
    show_evaluation: Optional[bool] = None


# -----------------------------------------------------------------------------
# Content item types
# -----------------------------------------------------------------------------

class ContentItemBase(ContentModel):
    id: str
    content_type: str
    next_action: Optional[NextAction] = None


class TextContent(ContentItemBase):
    content_type: Literal["text"] = "text"
    text: str


class ImageContent(ContentItemBase):
    content_type: Literal["image"] = "image"
    url: str


class MathProblemContent(ContentItemBase):
    content_type: Literal["math_problem"] = "math_problem"
    problem: str  # may contain LaTeX


class VisualizationContent(ContentItemBase):
    content_type: Literal["visualization"] = "visualization"
    config: VisualizationConfig
    text: Optional[str] = None  # caption


ContentItem = Annotated[
    Union[
        TextContent,
        ImageContent,
        MathProblemContent,
        VisualizationContent,
    ],
    Field(discriminator="content_type"),
]


# -----------------------------------------------------------------------------
# Assessments
# -----------------------------------------------------------------------------

class ProblemSetAssessment(ContentModel):
    id: str
    assessment_type: Literal["problem_set"] = "problem_set"
    problems: list[MathProblemContent] = []
    min_correct: Optional[int] = Field(default=None, ge=0)


# -----------------------------------------------------------------------------
# Steps and learn lines
# -----------------------------------------------------------------------------

class Step(ContentModel):
    """A contiguous run of content presented together."""
    id: str
    title: Optional[str] = None
    content: list[ContentItem] = []
    completion_trigger: Optional[CompletionTrigger] = None
    assessment: Optional[ProblemSetAssessment] = None


class LearnLineTranslation(ContentModel):
    title: str
    description: Optional[str] = None
    example: Optional[str] = None


class LearnLine(ContentModel):
    """
    A named unit of instructional content composed of ordered steps.

    `title`, `description` and `example` are the default (English) display
    strings; `translations` carries the same fields for other languages.
    """
    id: LearnLineId
    title: str
    description: Optional[str] = None
    example: Optional[str] = None
    prerequisites: list[LearnLineId] = []
    tags: list[str] = []
    steps: list[Step] = []
    final_assessment: Optional[ProblemSetAssessment] = None
    translations: dict[str, LearnLineTranslation] = {}

    @property
    def total_content(self) -> int:
        """Number of content items across all steps."""
        return sum(len(step.content) for step in self.steps)

    def content_at(self, step_index: int, content_index: int) -> Optional[ContentItemBase]:
        """Return the content item under a cursor, or None if out of range."""
        if not 0 <= step_index < len(self.steps):
            return None
        step = self.steps[step_index]
        if not 0 <= content_index < len(step.content):
            return None
        return step.content[content_index]
