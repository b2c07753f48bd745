import yaml
from pydantic import ValidationError
from typing import Dict, Any

from services.belief_engine.models import BeliefConfigurationError, SurveyDefinition

class SurveyDefinitionError(BeliefConfigurationError):
    """Custom exception for survey definition problems not covered by Pydantic."""
    pass

def load_survey_definition_data(data: Dict[str, Any]) -> SurveyDefinition:
    """
    Validates the raw dictionary data against the SurveyDefinition model
    and performs additional custom validations.
    """
    try:
        definition = SurveyDefinition.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    question_ids = set()
    for question in definition.questions:
        if question.id in question_ids:
            raise SurveyDefinitionError(f"Duplicate question ID found: {question.id}")
        question_ids.add(question.id)

    # Axis overrides are optional, but an axis may only be described once
    axis_ids = set()
    for axis in definition.axes:
        if axis.id in axis_ids:
            raise SurveyDefinitionError(f"Duplicate axis definition found: {axis.id.value}")
        axis_ids.add(axis.id)

    return definition

def load_survey_definition_from_file(file_path: str) -> SurveyDefinition:
    """
    Loads a survey definition from a YAML file, validates it,
    and returns a SurveyDefinition object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise SurveyDefinitionError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise SurveyDefinitionError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise SurveyDefinitionError(f"YAML file is empty or invalid: {file_path}")

    return load_survey_definition_data(data)
