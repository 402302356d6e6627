import pytest

from services.assessment_engine.confidence import (
    ConfidenceInput,
    DEFAULT_CONFIDENCE,
    confidence_label,
    validate_confidence,
)
from services.assessment_engine.models import InvalidConfidenceError


def test_untouched_input_has_no_effective_value():
    confidence = ConfidenceInput()
    assert confidence.interacted is False
    assert confidence.effective_value is None
    assert confidence.displayed_value == DEFAULT_CONFIDENCE
    assert confidence.label is None


def test_value_without_interaction_does_not_count():
    """A widget showing 50 by default is not the same as choosing 50."""
    confidence = ConfidenceInput(value=50, interacted=False)
    assert confidence.effective_value is None


def test_report_marks_interaction():
    confidence = ConfidenceInput().report(50)
    assert confidence.interacted is True
    assert confidence.effective_value == 50
    assert confidence.displayed_value == 50


def test_report_returns_new_input():
    original = ConfidenceInput()
    original.report(80)
    assert original.effective_value is None


@pytest.mark.parametrize("value", [0, 5, 50, 95, 100])
def test_valid_values(value):
    assert validate_confidence(value) == value


@pytest.mark.parametrize("value", [-5, 105, 42, 1, 99])
def test_invalid_values_raise(value):
    with pytest.raises(InvalidConfidenceError):
        ConfidenceInput().report(value)


@pytest.mark.parametrize("value", [True, 50.0, "50", None])
def test_non_integer_values_raise(value):
    with pytest.raises(InvalidConfidenceError, match="must be an integer"):
        validate_confidence(value)


@pytest.mark.parametrize("value, label", [
    (0, "Wild guess"),
    (20, "Wild guess"),
    (25, "Uncertain"),
    (45, "Uncertain"),
    (50, "Somewhat sure"),
    (70, "Somewhat sure"),
    (75, "Confident"),
    (95, "Confident"),
    (100, "Certain"),
])
def test_labels(value, label):
    assert confidence_label(value) == label
    assert ConfidenceInput().report(value).label == label
