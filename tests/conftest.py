import copy
from pathlib import Path

import pytest

from services.belief_engine.models import BeliefVector, SurveyDefinition

PROJECT_ROOT = Path(__file__).resolve().parents[1]
BUNDLED_DEFINITION_PATH = PROJECT_ROOT / "assets" / "survey_definition.yml"

# Minimal valid survey definition used across tests
MINIMAL_DEFINITION = {
    "version": "test-1",
    "meta": {"cronbach_alpha_threshold": 0.7},
    "scoring": {"scale_midpoint": 5, "scale_half_range": 5, "weighting": "total"},
    "axes": [
        {"id": "environmental", "positive_label": "growth-first", "negative_label": "conservation-first"},
    ],
    "questions": [
        {"id": "p1", "axis": "political", "text": "Political one"},
        {"id": "p2", "axis": "political", "text": "Political two", "reverse": True},
        {"id": "s1", "axis": "social"},
        {"id": "e1", "axis": "economic"},
        {"id": "env1", "axis": "environmental"},
        {"id": "i1", "axis": "international"},
    ],
}

# Profiles used by the compatibility and insight scenarios
CENTRE_RIGHT = {"political": 0.7, "social": -0.3, "economic": 0.8, "environmental": -0.5, "international": 0.2}
NEAR_CENTRE_RIGHT = {"political": 0.6, "social": -0.2, "economic": 0.7, "environmental": -0.4, "international": 0.1}
OPPOSED_TO_CENTRE_RIGHT = {"political": -0.6, "social": 0.4, "economic": -0.7, "environmental": 0.3, "international": -0.8}


@pytest.fixture
def minimal_definition_data() -> dict:
    # Deep copy so tests can mutate freely
    return copy.deepcopy(MINIMAL_DEFINITION)


@pytest.fixture
def minimal_definition() -> SurveyDefinition:
    return SurveyDefinition.model_validate(copy.deepcopy(MINIMAL_DEFINITION))


@pytest.fixture
def centre_right() -> BeliefVector:
    return BeliefVector(**CENTRE_RIGHT)


@pytest.fixture
def near_centre_right() -> BeliefVector:
    return BeliefVector(**NEAR_CENTRE_RIGHT)


@pytest.fixture
def opposed_to_centre_right() -> BeliefVector:
    return BeliefVector(**OPPOSED_TO_CENTRE_RIGHT)


@pytest.fixture
def bundled_definition_path() -> str:
    return str(BUNDLED_DEFINITION_PATH)
