import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from config.engine import SURVEY_DEFINITION_PATH

from .insights import generate_insights
from .loader import load_survey_definition_from_file
from .matcher import find_opposing
from .models import Axis, BeliefInsights, BeliefVector, CompatibilityResult, MatchResult, SurveyDefinition
from .normalizer import completion_percentage, normalize
from .scorer import score

logger = logging.getLogger(__name__)


class BeliefEngine:
    """
    Binds one survey definition to the profiling and matching functions.

    The engine keeps no state between calls beyond the parsed definition and
    the lookup tables built from it, so one instance can serve concurrent
    requests.
    """
    def __init__(self, definition_path: Optional[str] = None, definition: Optional[SurveyDefinition] = None):
        """
        Args:
            definition_path: Path to the survey definition YAML file. Defaults to
                the BELIEF_SURVEY_DEFINITION setting.
            definition: An already parsed definition; takes precedence over the path.
        """
        if definition is None:
            definition_path = definition_path or SURVEY_DEFINITION_PATH
            definition = load_survey_definition_from_file(definition_path)
            logger.info(f"Loaded survey definition {definition.version} from {definition_path}")
        self.definition = definition
        self._build_lookup_maps()

    def _build_lookup_maps(self):
        """Builds dictionaries for quick lookup of question routing and labels."""
        self.question_axes: Dict[str, Axis] = self.definition.question_axes()
        self.reversed_questions = set(self.definition.reversed_questions())
        self._direction_labels: Dict[Axis, Tuple[str, str]] = {
            axis_def.id: (axis_def.positive_label, axis_def.negative_label)
            for axis_def in self.definition.axes
        }

    def get_questions(self) -> List[Dict[str, Any]]:
        return [
            {"id": q.id, "axis": q.axis.value, "text": q.text, "reverse": q.reverse}
            for q in self.definition.questions
        ]

    def direction_labels(self) -> Dict[Axis, Tuple[str, str]]:
        return dict(self._direction_labels)

    def normalize(self, answers: Iterable[Any]) -> BeliefVector:
        return normalize(
            answers,
            question_axes=self.question_axes,
            scoring=self.definition.scoring,
            text_categories=self.definition.text_categories,
            reversed_questions=self.reversed_questions,
        )

    def completion_percentage(self, answers: Iterable[Any]) -> float:
        return completion_percentage(answers, list(self.question_axes))

    def score(self, a: Any, b: Any) -> CompatibilityResult:
        return score(a, b)

    def find_opposing(
        self,
        reference: Any,
        candidates: Sequence[Any],
        limit: int,
        max_score: Optional[float] = None,
    ) -> List[MatchResult]:
        return find_opposing(reference, candidates, limit, max_score=max_score)

    def generate_insights(self, vector: Any) -> BeliefInsights:
        return generate_insights(vector, direction_labels=self._direction_labels)
