from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from services.belief_engine.models import Axis, BeliefInsights, BeliefVector, MatchResult

class NormalizeRequest(BaseModel):
    # Malformed answers are skipped by the engine, not rejected here
    answers: List[Any] = Field(default_factory=list)

class NormalizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    vector: BeliefVector
    completion_percentage: float = Field(..., alias="completionPercentage")
    insights: BeliefInsights

class CompatibilityRequest(BaseModel):
    a: BeliefVector
    b: BeliefVector

class CompatibilityReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overall_score: float = Field(..., alias="overallScore")
    axis_scores: Dict[Axis, float] = Field(..., alias="axisScores")
    cosine_similarity: float = Field(..., alias="cosineSimilarity")
    euclidean_distance: float = Field(..., alias="euclideanDistance")

class OpponentsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reference: BeliefVector
    candidates: List[BeliefVector] = Field(default_factory=list)
    limit: int = 5
    max_score: Optional[float] = Field(default=None, alias="maxScore")

class OpponentsResponse(BaseModel):
    matches: List[MatchResult]

class InsightsRequest(BaseModel):
    vector: BeliefVector
