# services/belief_engine/normalizer.py
# Turns raw questionnaire answers into a five-axis belief vector.

import logging
import math
import numbers
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from .definitions import LEGACY_AXIS_KEYWORDS, TEXT_CATEGORY_VALUES
from .models import (
    AXES,
    Axis,
    BeliefVector,
    ScoringOptions,
    SurveyAnswer,
    UnmappedQuestionError,
    clamp,
)

logger = logging.getLogger(__name__)


def infer_axis_from_question_id(question_id: str) -> Axis:
    """Legacy routing: first axis keyword found in the question id, political otherwise."""
    lowered = question_id.lower()
    for keyword, axis in LEGACY_AXIS_KEYWORDS:
        if keyword in lowered:
            return axis
    return Axis.POLITICAL


def route_answer(question_id: str, question_axes: Optional[Mapping[str, Axis]]) -> Axis:
    if question_axes is None:
        return infer_axis_from_question_id(question_id)
    axis = question_axes.get(question_id)
    if axis is None:
        raise UnmappedQuestionError(question_id)
    return axis


def _normalize_label(text: str) -> str:
    return " ".join(text.split()).lower()


def convert_value(
    value: Any,
    scoring: Optional[ScoringOptions] = None,
    text_categories: Optional[Mapping[str, float]] = None,
) -> float:
    """
    Converts one answer value into a contribution in [-1, 1].

    Numbers are read on the survey scale (1-10 by default) and centred on its
    midpoint; known text categories map to fixed constants. Booleans,
    unrecognised text and non-finite numbers contribute nothing.
    """
    scoring = scoring or ScoringOptions()
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, numbers.Real):
        if not math.isfinite(value):
            return 0.0
        return clamp((value - scoring.scale_midpoint) / scoring.scale_half_range)
    if isinstance(value, str):
        categories = text_categories if text_categories is not None else TEXT_CATEGORY_VALUES
        lookup = {_normalize_label(label): score for label, score in categories.items()}
        return clamp(lookup.get(_normalize_label(value), 0.0))
    return 0.0


def coerce_answer(raw: Any) -> Optional[SurveyAnswer]:
    if isinstance(raw, SurveyAnswer):
        return raw
    if isinstance(raw, Mapping):
        try:
            return SurveyAnswer.model_validate(raw)
        except ValidationError:
            return None
    return None


def normalize(
    answers: Optional[Iterable[Any]],
    question_axes: Optional[Mapping[str, Axis]] = None,
    scoring: Optional[ScoringOptions] = None,
    text_categories: Optional[Mapping[str, float]] = None,
    reversed_questions: Optional[Iterable[str]] = None,
) -> BeliefVector:
    """
    Aggregates one subject's answers into a BeliefVector.

    Args:
        answers: SurveyAnswer objects or raw answer dicts. Malformed entries are
            skipped but still count toward the total answer count.
        question_axes: Explicit question id -> axis table. When omitted, axes are
            inferred from the question ids (legacy behaviour).
        scoring: Scale and weighting options; defaults to a 1-10 scale weighted
            by the total answer count.
        text_categories: Answer text -> contribution constants.
        reversed_questions: Question ids whose contribution is negated.

    Returns:
        The aggregated, clamped BeliefVector. Empty input gives the neutral vector.

    Raises:
        UnmappedQuestionError: If an explicit table is given and a well-formed
            answer references a question it does not contain.
    """
    scoring = scoring or ScoringOptions()
    answer_list = list(answers or [])
    total = len(answer_list)
    if total == 0:
        return BeliefVector.neutral()

    if question_axes is None:
        logger.info("No question -> axis table supplied; inferring axes from question ids.")
    reversed_ids = set(reversed_questions or [])

    routed: List[Tuple[Axis, float]] = []
    skipped = 0
    for raw in answer_list:
        answer = coerce_answer(raw)
        if answer is None:
            skipped += 1
            continue
        axis = route_answer(answer.question_id, question_axes)
        contribution = convert_value(answer.value, scoring, text_categories)
        if answer.question_id in reversed_ids:
            contribution = -contribution
        routed.append((axis, contribution))

    if skipped:
        logger.debug(f"Skipped {skipped} malformed answer(s) out of {total}.")

    if scoring.weighting == "per_axis":
        per_axis = Counter(axis for axis, _ in routed)
        divisors: Dict[Axis, int] = {axis: per_axis.get(axis, 0) for axis in AXES}
    else:
        divisors = {axis: total for axis in AXES}

    sums: Dict[Axis, float] = {axis: 0.0 for axis in AXES}
    for axis, contribution in routed:
        sums[axis] = clamp(sums[axis] + contribution / divisors[axis])

    return BeliefVector(**{axis.value: value for axis, value in sums.items()})


def completion_percentage(answers: Optional[Iterable[Any]], question_ids: Sequence[str]) -> float:
    """Share of the survey's questions that received a well-formed answer, in percent."""
    expected = set(question_ids)
    if not expected:
        return 0.0
    answered = set()
    for raw in answers or []:
        answer = coerce_answer(raw)
        if answer is not None and answer.question_id in expected:
            answered.add(answer.question_id)
    return round(100.0 * len(answered) / len(expected), 1)
