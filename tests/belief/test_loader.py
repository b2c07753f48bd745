import pytest
import yaml
from pydantic import ValidationError

from services.belief_engine.loader import (
    SurveyDefinitionError,
    load_survey_definition_data,
    load_survey_definition_from_file,
)
from services.belief_engine.models import Axis, BeliefConfigurationError


def write_yaml(tmp_path, data, name="survey.yml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


def test_load_valid_definition(minimal_definition_data):
    definition = load_survey_definition_data(minimal_definition_data)
    assert definition.version == "test-1"
    assert definition.question_axes()["env1"] == Axis.ENVIRONMENTAL
    assert definition.reversed_questions() == ["p2"]
    assert definition.axes[0].negative_label == "conservation-first"


def test_defaults_are_filled_in():
    definition = load_survey_definition_data({"version": "x", "questions": [{"id": "q1", "axis": "social"}]})
    assert definition.meta.cronbach_alpha_threshold == 0.7
    assert definition.scoring.scale_midpoint == 5.0
    assert definition.scoring.weighting == "total"
    assert definition.text_categories is None
    assert definition.questions[0].reverse is False


def test_duplicate_question_id(minimal_definition_data):
    minimal_definition_data["questions"].append({"id": "p1", "axis": "social"})
    with pytest.raises(SurveyDefinitionError, match="Duplicate question ID found: p1"):
        load_survey_definition_data(minimal_definition_data)


def test_duplicate_axis_definition(minimal_definition_data):
    minimal_definition_data["axes"].append({"id": "environmental", "positive_label": "a", "negative_label": "b"})
    with pytest.raises(SurveyDefinitionError, match="Duplicate axis definition found: environmental"):
        load_survey_definition_data(minimal_definition_data)


@pytest.mark.parametrize("mutate", [
    lambda d: d["questions"].append({"id": "x1", "axis": "religious"}),
    lambda d: d["scoring"].update({"scale_half_range": 0}),
    lambda d: d["scoring"].update({"weighting": "median"}),
    lambda d: d.update({"text_categories": {"far right": 1.5}}),
    lambda d: d.pop("version"),
    lambda d: d["questions"].append({"axis": "social"}),
])
def test_schema_problems_raise_validation_error(minimal_definition_data, mutate):
    mutate(minimal_definition_data)
    with pytest.raises(ValidationError):
        load_survey_definition_data(minimal_definition_data)


def test_load_from_file(tmp_path, minimal_definition_data):
    definition = load_survey_definition_from_file(write_yaml(tmp_path, minimal_definition_data))
    assert len(definition.questions) == 6


def test_missing_file(tmp_path):
    with pytest.raises(SurveyDefinitionError, match="File not found"):
        load_survey_definition_from_file(str(tmp_path / "nope.yml"))


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SurveyDefinitionError, match="empty or invalid"):
        load_survey_definition_from_file(str(path))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("version: [unclosed\nquestions: {", encoding="utf-8")
    with pytest.raises(SurveyDefinitionError, match="Error parsing YAML"):
        load_survey_definition_from_file(str(path))


def test_definition_errors_are_configuration_errors():
    assert issubclass(SurveyDefinitionError, BeliefConfigurationError)
    assert issubclass(SurveyDefinitionError, ValueError)


def test_bundled_definition_loads(bundled_definition_path):
    definition = load_survey_definition_from_file(bundled_definition_path)
    axes = {q.axis for q in definition.questions}
    assert axes == set(Axis)
    assert len(definition.questions) == 15
    assert definition.text_categories["Very Conservative"] == 0.9
