# Per-question answer capture: decides which actions the current in-progress
# state permits. Every function returns the next state, or None when the
# action is rejected. Rejection is a gating decision, not an error.

import logging
from dataclasses import replace
from typing import Optional

from services.assessment_engine.models import Answer, Question
from services.assessment_engine.state import InProgressState

logger = logging.getLogger(__name__)


def can_advance(state: InProgressState) -> bool:
    """Both an option and a confidence interaction are required."""
    return state.selection is not None and state.confidence.effective_value is not None


def select_option(state: InProgressState, question: Question, option_id: str) -> Optional[InProgressState]:
    if state.revealed:
        logger.debug(f"Selection '{option_id}' ignored: explanation already revealed", extra={"question_id": question.id})
        return None
    if not question.has_option(option_id):
        logger.debug(f"Selection '{option_id}' ignored: not an option", extra={"question_id": question.id})
        return None
    return replace(state, selection=option_id)


def set_confidence(state: InProgressState, value: int) -> InProgressState:
    """Records a confidence interaction. Raises InvalidConfidenceError for bad values."""
    return replace(state, confidence=state.confidence.report(value))


def reveal_explanation(state: InProgressState) -> Optional[InProgressState]:
    if not can_advance(state):
        logger.debug(f"Reveal ignored at index {state.index}: selection and confidence required")
        return None
    return replace(state, revealed=True)


def build_answer(state: InProgressState, question: Question) -> Optional[Answer]:
    if not can_advance(state):
        return None
    return Answer.for_question(question, state.selection, state.confidence.effective_value)
