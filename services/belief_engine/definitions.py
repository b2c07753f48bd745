# services/belief_engine/definitions.py
# Fixed vocabulary used by the normalizer and the insight generator.

from typing import Dict, Tuple

from .models import Axis

# Answer texts recognised on any question, matched case-insensitively.
# Positive values lean conservative, negative lean liberal.
TEXT_CATEGORY_VALUES: Dict[str, float] = {
    'very conservative': 0.9,
    'conservative': 0.7,
    'very liberal': -0.9,
    'liberal': -0.7,
}

# Keywords for the legacy question-id routing, checked in this order.
# Anything that matches none of them lands on the political axis.
LEGACY_AXIS_KEYWORDS: Tuple[Tuple[str, Axis], ...] = (
    ('social', Axis.SOCIAL),
    ('economic', Axis.ECONOMIC),
    ('environmental', Axis.ENVIRONMENTAL),
    ('international', Axis.INTERNATIONAL),
)

STRENGTH_LABELS: Dict[Axis, str] = {
    Axis.POLITICAL: 'Clear political convictions',
    Axis.SOCIAL: 'Well-defined social values',
    Axis.ECONOMIC: 'Strong economic perspectives',
    Axis.ENVIRONMENTAL: 'Strong environmental consciousness',
    Axis.INTERNATIONAL: 'Defined global outlook',
}

STRENGTH_FALLBACK = 'Balanced perspective'
GROWTH_AREA_TEMPLATE = 'Explore {axis} perspectives more deeply'
GROWTH_AREA_FALLBACK = 'Continue developing nuanced views'

STRENGTH_THRESHOLD = 0.6  # |value| above this counts as a strength
GROWTH_THRESHOLD = 0.3    # |value| below this counts as a growth area

# (positive, negative) direction labels. The same political framing is the
# default on every axis; survey definitions can override per axis.
DEFAULT_DIRECTION_LABELS: Dict[Axis, Tuple[str, str]] = {
    axis: ('conservative', 'liberal') for axis in Axis
}

BALANCED_SUMMARY = (
    "You hold a balanced perspective across all five dimensions, weighing "
    "multiple viewpoints before settling on a position. Debates will push you "
    "to articulate where you actually stand."
)

LEANING_SUMMARY_TEMPLATE = (
    "Your strongest views are on {axis} issues, where you lean {direction}. "
    "Debating someone who sees {axis} questions differently will sharpen how "
    "you defend that position."
)
