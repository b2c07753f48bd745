from fastapi import APIRouter, HTTPException, Depends
from functools import lru_cache
from typing import Any, Dict, List
import logging

from src.schemas.belief import (
    CompatibilityReport,
    CompatibilityRequest,
    InsightsRequest,
    NormalizeRequest,
    NormalizeResponse,
    OpponentsRequest,
    OpponentsResponse,
)
from services.belief_engine.engine import BeliefEngine
from services.belief_engine.models import BeliefConfigurationError, BeliefInsights
from services.belief_engine.scorer import cosine_similarity, euclidean_distance

router = APIRouter()
logger = logging.getLogger(__name__)

@lru_cache(maxsize=1)
def get_belief_engine() -> BeliefEngine:
    # The survey definition is read once per process; location comes from config.engine
    return BeliefEngine()

# Scoring routes are plain functions; FastAPI runs them in its threadpool
@router.post("/beliefs/normalize", response_model=NormalizeResponse)
def normalize_survey(
    request: NormalizeRequest,
    engine: BeliefEngine = Depends(get_belief_engine),
):
    """
    Turns one subject's survey answers into a belief vector, the share of the
    survey completed and the derived insights.
    """
    try:
        vector = engine.normalize(request.answers)
        completion = engine.completion_percentage(request.answers)
        insights = engine.generate_insights(vector)
        logger.info(f"Normalized {len(request.answers)} answers ({completion}% complete), dominant axis {insights.dominant_axis.value}")
        return NormalizeResponse(vector=vector, completion_percentage=completion, insights=insights)
    except BeliefConfigurationError as e:
        logger.error(f"Survey configuration error: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error during survey normalization: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

@router.post("/beliefs/compatibility", response_model=CompatibilityReport)
def compare_profiles(
    request: CompatibilityRequest,
    engine: BeliefEngine = Depends(get_belief_engine),
):
    try:
        result = engine.score(request.a, request.b)
        return CompatibilityReport(
            overall_score=result.overall_score,
            axis_scores=result.axis_scores,
            cosine_similarity=cosine_similarity(request.a, request.b),
            euclidean_distance=euclidean_distance(request.a, request.b),
        )
    except Exception as e:
        logger.exception(f"Unexpected error during compatibility scoring: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

@router.post("/beliefs/opponents", response_model=OpponentsResponse)
def find_opponents(
    request: OpponentsRequest,
    engine: BeliefEngine = Depends(get_belief_engine),
):
    """Ranks the candidate pool, most opposed first."""
    try:
        matches = engine.find_opposing(
            request.reference,
            request.candidates,
            request.limit,
            max_score=request.max_score,
        )
        logger.info(f"Matched {len(matches)} of {len(request.candidates)} candidates (limit {request.limit})")
        return OpponentsResponse(matches=matches)
    except Exception as e:
        logger.exception(f"Unexpected error during opponent matching: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

@router.post("/beliefs/insights", response_model=BeliefInsights)
def profile_insights(
    request: InsightsRequest,
    engine: BeliefEngine = Depends(get_belief_engine),
):
    try:
        return engine.generate_insights(request.vector)
    except Exception as e:
        logger.exception(f"Unexpected error during insight generation: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

@router.get("/beliefs/questions")
async def list_questions(engine: BeliefEngine = Depends(get_belief_engine)) -> Dict[str, Any]:
    questions: List[Dict[str, Any]] = engine.get_questions()
    return {"version": engine.definition.version, "questions": questions}
