import pytest
from pydantic import ValidationError

from services.belief_engine.models import AXES, Axis, BeliefVector, SurveyAnswer, UnmappedQuestionError


def test_axis_order_is_fixed():
    assert [axis.value for axis in AXES] == ["political", "social", "economic", "environmental", "international"]


def test_missing_axes_default_to_zero():
    vector = BeliefVector(economic=0.5)
    assert vector.as_dict() == {
        "political": 0.0, "social": 0.0, "economic": 0.5, "environmental": 0.0, "international": 0.0,
    }


def test_out_of_range_values_are_clamped():
    vector = BeliefVector(political=3.5, social=-7, economic=1.0)
    assert vector.political == 1.0
    assert vector.social == -1.0
    assert vector.economic == 1.0


@pytest.mark.parametrize("garbage", [None, "not a number", float("nan"), float("inf"), True, [1, 2]])
def test_garbage_values_degrade_to_zero(garbage):
    assert BeliefVector(political=garbage).political == 0.0


def test_numeric_strings_are_accepted():
    assert BeliefVector(social="0.25").social == 0.25


def test_from_mapping_accepts_axis_keys_and_ignores_unknown():
    vector = BeliefVector.from_mapping({Axis.SOCIAL: -0.4, " Economic ": 0.3, "tradition": 0.9})
    assert vector.social == -0.4
    assert vector.economic == 0.3
    assert vector.political == 0.0


def test_from_mapping_of_nothing_is_neutral():
    assert BeliefVector.from_mapping(None) == BeliefVector.neutral()
    assert BeliefVector.from_mapping({}) == BeliefVector()


def test_getitem_and_array_follow_axis_order():
    vector = BeliefVector(political=0.1, social=0.2, economic=0.3, environmental=0.4, international=0.5)
    assert vector[Axis.ECONOMIC] == 0.3
    assert vector["international"] == 0.5
    assert vector.to_array().tolist() == [0.1, 0.2, 0.3, 0.4, 0.5]


def test_balanced_threshold():
    assert BeliefVector(political=0.39, social=-0.39).is_balanced()
    assert not BeliefVector(political=0.4).is_balanced()
    assert not BeliefVector(international=-0.5).is_balanced()


def test_vector_is_immutable():
    vector = BeliefVector(political=0.2)
    with pytest.raises(ValidationError):
        vector.political = 0.9


def test_survey_answer_accepts_camel_and_snake_case():
    camel = SurveyAnswer.model_validate({"questionId": "q1", "value": 7, "subjectId": "s-1"})
    snake = SurveyAnswer(question_id="q1", value=7, subject_id="s-1")
    assert camel == snake
    assert camel.value == 7


def test_survey_answer_requires_question_id_and_value():
    with pytest.raises(ValidationError):
        SurveyAnswer.model_validate({"value": 3})
    with pytest.raises(ValidationError):
        SurveyAnswer.model_validate({"questionId": "q1"})
    with pytest.raises(ValidationError):
        SurveyAnswer.model_validate({"questionId": "", "value": 3})


def test_unmapped_question_error_carries_question_id():
    error = UnmappedQuestionError("mystery_q")
    assert error.question_id == "mystery_q"
    assert "mystery_q" in str(error)
    assert isinstance(error, ValueError)


@pytest.mark.parametrize("garbage", [["political", 1], "junk", 5])
def test_from_mapping_of_non_mapping_is_neutral(garbage):
    assert BeliefVector.from_mapping(garbage) == BeliefVector.neutral()
