import pytest
from pathlib import Path

from services.assessment_engine.engine import AssessmentSession
from services.assessment_engine.loader import load_question_bank_from_file
from services.assessment_engine.models import Option, Question, QuestionBank

ROUND1_BANK_PATH = Path(__file__).resolve().parents[1] / "assets" / "round1_questions.yml"


def make_question(question_id: str, correct_id: str, option_ids=("a", "b", "c"), bias: str = "Anchoring") -> Question:
    return Question(
        id=question_id,
        bias=bias,
        stem=f"Stem for {question_id}?",
        options=tuple(Option(id=o, text=f"Option {o}") for o in option_ids),
        correct_id=correct_id,
        explanation=f"Explanation for {question_id}.",
    )


@pytest.fixture
def two_question_bank() -> QuestionBank:
    """Q1 expects 'a', Q2 expects 'b'."""
    return QuestionBank(
        [
            make_question("q1", "a", bias="Anchoring"),
            make_question("q2", "b", bias="Base Rate Neglect"),
        ],
        title="Test Bank",
        round_label="Round 1",
    )


@pytest.fixture
def single_question_bank() -> QuestionBank:
    return QuestionBank([make_question("only", "a")], title="Single", round_label="Round 1")


@pytest.fixture
def round1_bank() -> QuestionBank:
    return load_question_bank_from_file(str(ROUND1_BANK_PATH))


@pytest.fixture
def session(two_question_bank) -> AssessmentSession:
    return AssessmentSession(two_question_bank)


@pytest.fixture
def started_session(session) -> AssessmentSession:
    assert session.start()
    return session
