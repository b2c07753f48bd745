# services/belief_engine/scorer.py
# Compatibility scoring between two belief vectors.

from typing import Any

import numpy as np

from .models import AXES, BeliefVector, CompatibilityResult

# Largest possible gap between two values in [-1, 1]
MAX_AXIS_DIFFERENCE = 2.0


def _as_vector(value: Any) -> BeliefVector:
    return value if isinstance(value, BeliefVector) else BeliefVector.from_mapping(value)


def axis_score(a: float, b: float) -> float:
    return max(0.0, 1.0 - abs(a - b) / MAX_AXIS_DIFFERENCE)


def score(a: Any, b: Any) -> CompatibilityResult:
    """
    Scores how closely two profiles agree.

    Each axis scores 1 - |a - b| / 2 (floored at 0); the overall score is the
    plain mean of the five axis scores, so identical vectors score 1 and the
    result is symmetric in its arguments.
    """
    a, b = _as_vector(a), _as_vector(b)
    axis_scores = {axis: axis_score(a[axis], b[axis]) for axis in AXES}
    overall = sum(axis_scores.values()) / len(AXES)
    return CompatibilityResult(overall_score=min(1.0, overall), axis_scores=axis_scores)


def cosine_similarity(a: Any, b: Any) -> float:
    """Directional agreement in [-1, 1]; 0.0 when either profile is all zeros."""
    va, vb = _as_vector(a).to_array(), _as_vector(b).to_array()
    norm_product = np.linalg.norm(va) * np.linalg.norm(vb)
    if norm_product == 0:
        return 0.0
    return float(np.clip(np.dot(va, vb) / norm_product, -1.0, 1.0))


def euclidean_distance(a: Any, b: Any) -> float:
    va, vb = _as_vector(a).to_array(), _as_vector(b).to_array()
    return float(np.linalg.norm(va - vb))
