# services/belief_engine/insights.py
# Derives the qualitative profile description shown to students and teachers.

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .definitions import (
    BALANCED_SUMMARY,
    DEFAULT_DIRECTION_LABELS,
    GROWTH_AREA_FALLBACK,
    GROWTH_AREA_TEMPLATE,
    GROWTH_THRESHOLD,
    LEANING_SUMMARY_TEMPLATE,
    STRENGTH_FALLBACK,
    STRENGTH_LABELS,
    STRENGTH_THRESHOLD,
)
from .models import AXES, Axis, BeliefInsights, BeliefVector

logger = logging.getLogger(__name__)


def find_dominant_axis(vector: BeliefVector) -> Axis:
    """Axis with the largest magnitude; the earliest axis wins a tie."""
    dominant = AXES[0]
    for axis in AXES[1:]:
        if abs(vector[axis]) > abs(vector[dominant]):
            dominant = axis
    return dominant


def _strengths(vector: BeliefVector) -> List[str]:
    strengths = [STRENGTH_LABELS[axis] for axis in AXES if abs(vector[axis]) > STRENGTH_THRESHOLD]
    return strengths or [STRENGTH_FALLBACK]


def _growth_areas(vector: BeliefVector) -> List[str]:
    areas = [
        GROWTH_AREA_TEMPLATE.format(axis=axis.value)
        for axis in AXES
        if abs(vector[axis]) < GROWTH_THRESHOLD
    ]
    return areas or [GROWTH_AREA_FALLBACK]


def _summary(vector: BeliefVector, dominant: Axis, labels: Mapping[Axis, Tuple[str, str]]) -> str:
    if vector.is_balanced():
        return BALANCED_SUMMARY
    positive, negative = labels.get(dominant, DEFAULT_DIRECTION_LABELS[dominant])
    direction = positive if vector[dominant] > 0 else negative
    return LEANING_SUMMARY_TEMPLATE.format(axis=dominant.value, direction=direction)


def generate_insights(
    vector: Any,
    direction_labels: Optional[Mapping[Axis, Tuple[str, str]]] = None,
) -> BeliefInsights:
    """
    Builds dominant axis, strengths, growth areas and a summary for one profile.

    Args:
        vector: BeliefVector or an axis mapping (missing axes read as 0).
        direction_labels: Per-axis (positive, negative) wording for the summary.
            Axes left out fall back to conservative/liberal.
    """
    vector = vector if isinstance(vector, BeliefVector) else BeliefVector.from_mapping(vector)
    labels: Dict[Axis, Tuple[str, str]] = dict(DEFAULT_DIRECTION_LABELS)
    if direction_labels:
        labels.update(direction_labels)

    dominant = find_dominant_axis(vector)
    insights = BeliefInsights(
        dominant_axis=dominant,
        strengths=_strengths(vector),
        growth_areas=_growth_areas(vector),
        summary=_summary(vector, dominant, labels),
    )
    logger.debug(f"Generated insights with dominant axis '{dominant.value}'.")
    return insights
