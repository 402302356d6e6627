from dataclasses import dataclass
from typing import Optional

from services.assessment_engine.models import InvalidConfidenceError

CONFIDENCE_MIN = 0
CONFIDENCE_MAX = 100
CONFIDENCE_STEP = 5
DEFAULT_CONFIDENCE = 50  # Shown by an untouched slider, never recorded

CONFIDENCE_LABELS = ['Wild guess', 'Uncertain', 'Somewhat sure', 'Confident', 'Certain']


def validate_confidence(value: int) -> int:
    """Checks a reported confidence is an integer in [0, 100] on the 5-point step."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfidenceError(f"Confidence must be an integer, got {value!r}")
    if not CONFIDENCE_MIN <= value <= CONFIDENCE_MAX:
        raise InvalidConfidenceError(
            f"Confidence {value} outside [{CONFIDENCE_MIN}, {CONFIDENCE_MAX}]"
        )
    if value % CONFIDENCE_STEP != 0:
        raise InvalidConfidenceError(f"Confidence {value} is not a multiple of {CONFIDENCE_STEP}")
    return value


def confidence_label(value: int) -> str:
    index = value * (len(CONFIDENCE_LABELS) - 1) // CONFIDENCE_MAX
    return CONFIDENCE_LABELS[min(index, len(CONFIDENCE_LABELS) - 1)]


@dataclass(frozen=True)
class ConfidenceInput:
    """
    What the confidence widget reports for the current question.

    The numeric value only counts once the respondent has interacted with the
    widget at least once; until then the effective value is None, whatever
    default the widget displays.
    """
    value: Optional[int] = None
    interacted: bool = False

    def report(self, value: int) -> "ConfidenceInput":
        return ConfidenceInput(value=validate_confidence(value), interacted=True)

    @property
    def effective_value(self) -> Optional[int]:
        return self.value if self.interacted else None

    @property
    def displayed_value(self) -> int:
        return self.effective_value if self.effective_value is not None else DEFAULT_CONFIDENCE

    @property
    def label(self) -> Optional[str]:
        if self.effective_value is None:
            return None
        return confidence_label(self.effective_value)
