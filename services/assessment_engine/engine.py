import logging
from typing import Optional, Tuple

from . import capture
from .models import Answer, AssessmentResults, Question, QuestionBank
from .scorer import compute_results
from .state import InProgressState, IntroState, ResultsState, SessionState

logger = logging.getLogger(__name__)


class AssessmentSession:
    """
    Drives one respondent through the question bank: intro -> assessment -> results.

    Every action returns True when it was applied and False when the current
    state does not permit it. Rejected actions leave the state untouched.
    """
    def __init__(self, bank: QuestionBank):
        """
        Initializes the session on the intro screen with no answers.

        Args:
            bank: The validated question bank to present, in order.
        """
        self.bank = bank
        self._state: SessionState = IntroState()

    # --- Read accessors ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def screen(self) -> str:
        return self._state.screen

    @property
    def answers(self) -> Tuple[Answer, ...]:
        if isinstance(self._state, IntroState):
            return ()
        return self._state.answers

    @property
    def current_question(self) -> Optional[Question]:
        if not isinstance(self._state, InProgressState):
            return None
        return self.bank.get(self._state.index)

    @property
    def can_advance(self) -> bool:
        return isinstance(self._state, InProgressState) and capture.can_advance(self._state)

    @property
    def is_last_question(self) -> bool:
        return isinstance(self._state, InProgressState) and self._state.index == self.bank.count() - 1

    @property
    def progress_percent(self) -> float:
        """Counts the question on screen, so question 1 already shows progress."""
        if isinstance(self._state, ResultsState):
            return 100.0
        if not isinstance(self._state, InProgressState):
            return 0.0
        return min((self._state.index + 1) / self.bank.count() * 100, 100.0)

    def results(self) -> Optional[AssessmentResults]:
        if not isinstance(self._state, ResultsState):
            return None
        return compute_results(self._state.answers)

    # --- Actions ---

    def start(self) -> bool:
        if not isinstance(self._state, IntroState):
            logger.debug("Start ignored", extra={"screen": self.screen})
            return False
        self._state = InProgressState()
        logger.info(f"Assessment started with {self.bank.count()} questions")
        return True

    def select_option(self, option_id: str) -> bool:
        if not isinstance(self._state, InProgressState):
            logger.debug("Selection ignored", extra={"screen": self.screen})
            return False
        return self._apply(capture.select_option(self._state, self.current_question, option_id))

    def set_confidence(self, value: int) -> bool:
        """Records a confidence interaction. Invalid values raise InvalidConfidenceError."""
        if not isinstance(self._state, InProgressState):
            logger.debug("Confidence ignored", extra={"screen": self.screen})
            return False
        return self._apply(capture.set_confidence(self._state, value))

    def reveal_explanation(self) -> bool:
        if not isinstance(self._state, InProgressState):
            logger.debug("Reveal ignored", extra={"screen": self.screen})
            return False
        return self._apply(capture.reveal_explanation(self._state))

    def record_and_advance(self) -> bool:
        state = self._state
        if not isinstance(state, InProgressState):
            logger.debug("Advance ignored", extra={"screen": self.screen})
            return False

        question = self.current_question
        answer = capture.build_answer(state, question)
        if answer is None:
            logger.debug(f"Advance ignored at index {state.index}: selection and confidence required")
            return False

        answers = state.answers + (answer,)
        logger.info(
            f"Recorded answer: selected '{answer.selected_id}', confidence {answer.confidence}, correct={answer.correct}",
            extra={"question_id": question.id},
        )
        if self.is_last_question:
            self._state = ResultsState(answers=answers)
            logger.info(f"Assessment complete after {len(answers)} answers")
        else:
            # Fresh selection, confidence and reveal flag for the next question
            self._state = InProgressState(index=state.index + 1, answers=answers)
        return True

    def reset(self) -> bool:
        if not isinstance(self._state, ResultsState):
            logger.debug("Reset ignored", extra={"screen": self.screen})
            return False
        self._state = IntroState()
        logger.info("Assessment reset to intro")
        return True

    def _apply(self, next_state: Optional[InProgressState]) -> bool:
        if next_state is None:
            return False
        self._state = next_state
        return True
