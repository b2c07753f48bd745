# services/belief_engine/matcher.py
# Ranks a candidate pool to surface the most ideologically opposed debate partners.

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence

from config.engine import MATCH_MAX_WORKERS, MATCH_PARALLEL_THRESHOLD

from .models import AXES, BeliefVector, MatchResult
from .scorer import score

logger = logging.getLogger(__name__)

# An axis scoring below this is one the two profiles genuinely disagree on
OPPOSING_AXIS_THRESHOLD = 0.4


def _score_candidate(reference: BeliefVector, candidate: Any, index: int) -> MatchResult:
    vector = candidate if isinstance(candidate, BeliefVector) else BeliefVector.from_mapping(candidate)
    result = score(reference, vector)
    opposing = [axis for axis in AXES if result.axis_scores[axis] < OPPOSING_AXIS_THRESHOLD]
    return MatchResult(
        vector=vector,
        compatibility_score=result.overall_score,
        opposing_axes=opposing,
        candidate_index=index,
    )


def find_opposing(
    reference: Any,
    candidates: Optional[Sequence[Any]],
    limit: int,
    max_score: Optional[float] = None,
    parallel_threshold: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> List[MatchResult]:
    """
    Returns up to `limit` candidates ordered from most to least opposed.

    Ordering is ascending compatibility score; ties go to the candidate with
    more opposing axes, then to the earlier position in `candidates`.

    Args:
        reference: The profile looking for an opponent.
        candidates: Candidate profiles (BeliefVector or axis mappings).
        limit: Maximum number of results; zero or less returns nothing.
        max_score: Optional ceiling; candidates scoring above it are too
            similar to be offered at all.
        parallel_threshold: Pool size from which scoring runs on a thread pool.
        max_workers: Thread pool size.
    """
    if limit <= 0 or not candidates:
        return []

    reference = reference if isinstance(reference, BeliefVector) else BeliefVector.from_mapping(reference)
    threshold = MATCH_PARALLEL_THRESHOLD if parallel_threshold is None else parallel_threshold
    workers = MATCH_MAX_WORKERS if max_workers is None else max_workers

    if len(candidates) >= threshold and workers > 1:
        logger.info(f"Scoring {len(candidates)} candidates on {workers} worker threads.")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order
            scored = list(executor.map(
                lambda pair: _score_candidate(reference, pair[1], pair[0]),
                enumerate(candidates),
            ))
    else:
        scored = [_score_candidate(reference, candidate, index) for index, candidate in enumerate(candidates)]

    if max_score is not None:
        scored = [match for match in scored if match.compatibility_score <= max_score]

    ranked = sorted(scored, key=lambda match: (match.compatibility_score, -len(match.opposing_axes)))
    return ranked[:limit]
