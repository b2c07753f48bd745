import logging
import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class Axis(str, Enum):
    """The five ideological dimensions. Declaration order is the tie-break order."""
    POLITICAL = "political"
    SOCIAL = "social"
    ECONOMIC = "economic"
    ENVIRONMENTAL = "environmental"
    INTERNATIONAL = "international"


AXES: List[Axis] = list(Axis)

# |value| below this on every axis means the profile reads as balanced
BALANCED_THRESHOLD = 0.4


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def coerce_axis_value(value: Any) -> float:
    """Turns anything into a usable axis value: garbage becomes 0, numbers are clamped."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return clamp(number)


class BeliefVector(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    political: float = 0.0
    social: float = 0.0
    economic: float = 0.0
    environmental: float = 0.0
    international: float = 0.0

    @field_validator(*[axis.value for axis in AXES], mode="before")
    @classmethod
    def _clamp_axis(cls, value: Any) -> float:
        return coerce_axis_value(value)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[Any, Any]]) -> "BeliefVector":
        """Builds a vector from a partial mapping keyed by Axis or axis name."""
        if isinstance(data, BeliefVector):
            return data
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            logger.debug(f"Treating non-mapping profile of type {type(data).__name__} as neutral.")
            return cls()
        values = {}
        for key, value in data.items():
            name = key.value if isinstance(key, Axis) else str(key).strip().lower()
            if name in cls.model_fields:
                values[name] = value
        return cls(**values)

    @classmethod
    def neutral(cls) -> "BeliefVector":
        return cls()

    def __getitem__(self, axis: Union[Axis, str]) -> float:
        return getattr(self, Axis(axis).value)

    def as_dict(self) -> Dict[str, float]:
        return {axis.value: self[axis] for axis in AXES}

    def to_array(self) -> np.ndarray:
        return np.array([self[axis] for axis in AXES], dtype=float)

    def is_balanced(self) -> bool:
        return all(abs(self[axis]) < BALANCED_THRESHOLD for axis in AXES)


class SurveyAnswer(BaseModel):
    """A single questionnaire answer as submitted by the intake UI."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question_id: str = Field(..., alias="questionId", min_length=1)
    value: Union[float, bool, str]
    timestamp: Optional[datetime] = None
    subject_id: Optional[str] = Field(default=None, alias="subjectId")

    @field_validator("subject_id", mode="before")
    @classmethod
    def _subject_id_as_text(cls, value: Any) -> Any:
        # Numeric database ids arrive as ints
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("timestamp", "subject_id", mode="wrap")
    @classmethod
    def _drop_unusable_metadata(cls, value: Any, handler: Any) -> Any:
        # Metadata is never scored; unusable values read as None
        try:
            return handler(value)
        except ValidationError:
            return None


class CompatibilityResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    overall_score: float = Field(..., alias="overallScore", ge=0.0, le=1.0)
    axis_scores: Dict[Axis, float] = Field(..., alias="axisScores")


class MatchResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    vector: BeliefVector
    compatibility_score: float = Field(..., alias="compatibilityScore", ge=0.0, le=1.0)
    opposing_axes: List[Axis] = Field(default_factory=list, alias="opposingAxes")
    candidate_index: int = Field(..., alias="candidateIndex", ge=0)


class BeliefInsights(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dominant_axis: Axis = Field(..., alias="dominantAxis")
    strengths: List[str]
    growth_areas: List[str] = Field(..., alias="growthAreas")
    summary: str


# --- Survey definition (loaded from YAML) ---

class SurveyMeta(BaseModel):
    cronbach_alpha_threshold: float = 0.7


class ScoringOptions(BaseModel):
    scale_midpoint: float = 5.0
    scale_half_range: float = Field(5.0, gt=0)
    # "total" divides every contribution by the whole answer count,
    # "per_axis" by the number of answers routed to that axis
    weighting: Literal["total", "per_axis"] = "total"


class AxisDefinition(BaseModel):
    id: Axis
    name: Optional[str] = None
    positive_label: str = "conservative"
    negative_label: str = "liberal"


class SurveyQuestion(BaseModel):
    id: str = Field(..., min_length=1)
    axis: Axis
    text: Optional[str] = None
    reverse: bool = False


class SurveyDefinition(BaseModel):
    version: str
    meta: SurveyMeta = Field(default_factory=SurveyMeta)
    scoring: ScoringOptions = Field(default_factory=ScoringOptions)
    axes: List[AxisDefinition] = Field(default_factory=list)
    text_categories: Optional[Dict[str, float]] = None
    questions: List[SurveyQuestion]

    @field_validator("text_categories")
    @classmethod
    def _category_values_in_range(cls, categories: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        if categories is None:
            return None
        for label, value in categories.items():
            if not -1.0 <= value <= 1.0:
                raise ValueError(f"text category '{label}' must map into [-1, 1], got {value}")
        return categories

    def question_axes(self) -> Dict[str, Axis]:
        return {q.id: q.axis for q in self.questions}

    def reversed_questions(self) -> List[str]:
        return [q.id for q in self.questions if q.reverse]


# Custom Error Classes
class BeliefConfigurationError(ValueError):
    """Base class for survey configuration problems that must not be silently absorbed."""
    pass


class UnmappedQuestionError(BeliefConfigurationError):
    """Raised when an answer references a question id missing from the question -> axis table."""

    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__(f"Question '{question_id}' has no axis mapping in the survey definition")
