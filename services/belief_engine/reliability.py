import json
import logging
import math
from typing import Any, Dict, Iterable, List, Union

import numpy as np
import pandas as pd

from .models import AXES, SurveyDefinition
from .normalizer import coerce_answer, convert_value

logger = logging.getLogger(__name__)


def calculate_cronbach_alpha(data: pd.DataFrame) -> float:
    """
    Calculates Cronbach's alpha for a set of items.
    Assumes data is a DataFrame where rows are subjects and columns are items.
    """
    if data.shape[1] < 2:  # Need at least 2 items
        return np.nan

    item_variances = data.var(axis=0, ddof=1).sum()
    total_variance = data.sum(axis=1).var(ddof=1)
    n_items = data.shape[1]

    if total_variance == 0:  # Every subject has the same total score
        return 1.0 if item_variances == 0 else 0.0

    return (n_items / (n_items - 1)) * (1 - (item_variances / total_variance))


def _item_value(value: Any, definition: SurveyDefinition, reverse: bool) -> float:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return np.nan
    item = convert_value(value, definition.scoring, definition.text_categories)
    return -item if reverse else item


def responses_to_frame(
    definition: SurveyDefinition,
    responses: Union[pd.DataFrame, Iterable[Iterable[Any]]],
) -> pd.DataFrame:
    """
    Builds a subjects x questions frame of item values on the [-1, 1] scale.

    `responses` is either a DataFrame whose columns are question ids holding raw
    answer values, or one list of answers per subject.
    """
    question_ids = [q.id for q in definition.questions]
    reversed_ids = set(definition.reversed_questions())

    if isinstance(responses, pd.DataFrame):
        frame = pd.DataFrame(index=responses.index)
        for qid in question_ids:
            if qid in responses.columns:
                reverse = qid in reversed_ids
                frame[qid] = responses[qid].map(lambda v, r=reverse: _item_value(v, definition, r)).astype(float)
        return frame.reindex(columns=question_ids)

    rows: List[Dict[str, float]] = []
    for subject_answers in responses:
        row: Dict[str, float] = {}
        for raw in subject_answers or []:
            answer = coerce_answer(raw)
            if answer is None or answer.question_id not in question_ids:
                continue
            row[answer.question_id] = _item_value(answer.value, definition, answer.question_id in reversed_ids)
        rows.append(row)
    return pd.DataFrame(rows, columns=question_ids, dtype=float)


def _convert_numpy_types(obj):
    """Convert numpy types to python native types for JSON serialization compatibility."""
    if isinstance(obj, dict):
        return {k: _convert_numpy_types(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_numpy_types(i) for i in obj]
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, (float, np.floating)):
        return None if math.isnan(obj) else float(obj)
    return obj


def generate_reliability_report(
    definition: SurveyDefinition,
    responses: Union[pd.DataFrame, Iterable[Iterable[Any]]],
) -> Dict[str, Any]:
    """
    Checks the internal consistency of each axis' questions over a batch of subjects.

    Args:
        definition: The survey definition whose question -> axis table is tested.
        responses: Raw answers, see responses_to_frame.

    Returns:
        A JSON-serialisable report with Cronbach's alpha per axis.
    """
    threshold = definition.meta.cronbach_alpha_threshold
    frame = responses_to_frame(definition, responses)
    report: Dict[str, Any] = {
        "cronbach_alpha_threshold": threshold,
        "respondent_count": int(frame.shape[0]),
        "axes": {},
        "overall_pass": True,
    }

    for axis in AXES:
        question_ids = [q.id for q in definition.questions if q.axis == axis]
        if not question_ids:
            continue

        axis_data = frame[question_ids].dropna()  # Complete cases only
        if axis_data.shape[0] < 2 or axis_data.shape[1] < 2:  # Need at least 2 subjects and 2 items
            alpha = np.nan
            is_pass = False
        else:
            alpha = calculate_cronbach_alpha(axis_data)
            is_pass = bool(alpha >= threshold) if not np.isnan(alpha) else False

        item_stats = {
            qid: {
                "mean": frame[qid].mean(),
                "variance": frame[qid].var(ddof=1),
                "stddev": frame[qid].std(ddof=1),
                "min": frame[qid].min(),
                "max": frame[qid].max(),
            } for qid in question_ids
        }

        report["axes"][axis.value] = {
            "cronbach_alpha": alpha,
            "pass": is_pass,
            "item_count": len(question_ids),
            "respondent_count_for_alpha": int(axis_data.shape[0]),
            "item_statistics": item_stats,
        }
        if not is_pass:
            logger.warning(f"Axis '{axis.value}' failed the reliability check (alpha={alpha}).")
            report["overall_pass"] = False

    return _convert_numpy_types(report)


def load_responses(path: str) -> Union[pd.DataFrame, List[List[Any]]]:
    """Reads a CSV with one column per question id, or a JSON list of per-subject answer lists."""
    if path.endswith('.csv'):
        return pd.read_csv(path)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


if __name__ == '__main__':
    import argparse

    from config.engine import LOG_LEVEL, SURVEY_DEFINITION_PATH
    from services.belief_engine.loader import load_survey_definition_from_file

    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    parser = argparse.ArgumentParser(description="Generate Survey Reliability Report")
    parser.add_argument(
        "--definition",
        type=str,
        default=SURVEY_DEFINITION_PATH,
        help="Path to the YAML survey definition."
    )
    parser.add_argument(
        "--responses",
        type=str,
        required=True,
        help="Path to the CSV/JSON file of collected survey responses."
    )
    parser.add_argument("--output", type=str, default=None, help="Write the report here instead of stdout.")
    args = parser.parse_args()

    report = generate_reliability_report(
        load_survey_definition_from_file(args.definition),
        load_responses(args.responses),
    )
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2)
        logger.info(f"Reliability report written to {args.output}")
    else:
        print(json.dumps(report, indent=2))
