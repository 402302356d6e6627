from services.assessment_engine.engine import AssessmentSession
from services.assessment_engine.models import Question, QuestionBank
from services.assessment_engine.scorer import accuracy_percent, answer_breakdown, brier_display
from services.assessment_engine.state import InProgressState, IntroState
from quiz_api.schemas.assessment import (
    AssessmentView,
    ConfidenceView,
    IntroView,
    OptionView,
    QuestionView,
    ResultsView,
    SessionView,
)


def question_view(question: Question) -> QuestionView:
    return QuestionView(
        id=question.id,
        bias=question.bias,
        stem=question.stem,
        options=[OptionView(id=o.id, text=o.text) for o in question.options],
    )


def build_session_view(session: AssessmentSession, estimated_minutes: int = 5) -> SessionView:
    """Renders the session's current screen into the payload a client draws from."""
    state = session.state
    bank: QuestionBank = session.bank

    if isinstance(state, IntroState):
        return IntroView(
            title=bank.title,
            question_count=bank.count(),
            estimated_minutes=estimated_minutes,
        )

    if isinstance(state, InProgressState):
        question = session.current_question
        view = AssessmentView(
            index=state.index,
            question_count=bank.count(),
            progress_percent=session.progress_percent,
            question=question_view(question),
            selection=state.selection,
            confidence=ConfidenceView(
                value=state.confidence.effective_value,
                displayed=state.confidence.displayed_value,
                label=state.confidence.label,
                interacted=state.confidence.interacted,
            ),
            revealed=state.revealed,
            can_advance=session.can_advance,
            is_last_question=session.is_last_question,
        )
        # The answer key only leaves the server once the explanation is revealed
        if state.revealed:
            view.correct_id = question.correct_id
            view.explanation = question.explanation
        return view

    results = session.results()
    return ResultsView(
        round_label=bank.round_label,
        total=results.total,
        correct=results.correct,
        accuracy_percent=accuracy_percent(results),
        avg_confidence=results.avg_confidence,
        brier_score=results.brier_score,
        brier_display=brier_display(session.answers),
        breakdown=answer_breakdown(bank, session.answers),
    )
