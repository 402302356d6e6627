from pydantic import BaseModel, ConfigDict, Field
from typing import Iterator, List, Optional, Sequence, Tuple


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    text: str


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    bias: str  # Category label shown above the stem
    stem: str
    options: Tuple[Option, ...] = Field(..., min_length=2)
    correct_id: str
    explanation: str

    def option_ids(self) -> List[str]:
        return [option.id for option in self.options]

    def has_option(self, option_id: str) -> bool:
        return any(option.id == option_id for option in self.options)


class QuestionBankConfig(BaseModel):
    version: str
    title: str
    round_label: str
    questions: List[Question]


class Answer(BaseModel):
    """One committed answer. Created once per question when the user advances."""
    model_config = ConfigDict(frozen=True)

    question_id: str
    selected_id: str
    confidence: int = Field(..., ge=0, le=100, multiple_of=5)
    correct: bool

    @classmethod
    def for_question(cls, question: Question, selected_id: str, confidence: int) -> "Answer":
        return cls(
            question_id=question.id,
            selected_id=selected_id,
            confidence=confidence,
            correct=selected_id == question.correct_id,
        )


class AssessmentResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    correct: int
    avg_confidence: int
    brier_score: float


class AnswerBreakdown(BaseModel):
    question_id: str
    bias: str
    correct: bool
    confidence: int


class QuestionBank:
    """
    Fixed, ordered, read-only sequence of questions.

    Integrity is checked on construction, so a bank that exists is a valid bank.
    """

    def __init__(self, questions: Sequence[Question], title: str = "", round_label: str = ""):
        self._questions: Tuple[Question, ...] = tuple(questions)
        self.title = title
        self.round_label = round_label
        self._validate_integrity()
        self._index_by_id = {q.id: i for i, q in enumerate(self._questions)}

    def _validate_integrity(self):
        """Checks for an empty bank, duplicate IDs and dangling correct answers."""
        if not self._questions:
            raise QuestionBankValidationError("Question bank must contain at least one question.")

        question_ids = set()
        for question in self._questions:
            if question.id in question_ids:
                raise QuestionBankValidationError(f"Duplicate question ID found: {question.id}")
            question_ids.add(question.id)

            option_ids = set()
            for option in question.options:
                if option.id in option_ids:
                    raise QuestionBankValidationError(
                        f"Duplicate option ID '{option.id}' in question '{question.id}'"
                    )
                option_ids.add(option.id)

            if question.correct_id not in option_ids:
                raise QuestionBankValidationError(
                    f"Correct option '{question.correct_id}' of question '{question.id}' "
                    f"is not one of its options {sorted(option_ids)}"
                )

    def get(self, index: int) -> Question:
        if not 0 <= index < len(self._questions):
            raise IndexError(f"Question index {index} out of range [0, {len(self._questions)})")
        return self._questions[index]

    def count(self) -> int:
        return len(self._questions)

    def find(self, question_id: str) -> Optional[Question]:
        index = self._index_by_id.get(question_id)
        return None if index is None else self._questions[index]

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)


# Custom Error Classes
class QuestionBankValidationError(ValueError):
    """Raised when question data fails an integrity check pydantic cannot express."""
    pass


class EmptyAnswerSetError(ValueError):
    """Raised when scoring is requested for an empty answer set."""
    pass


class InvalidConfidenceError(ValueError):
    """Raised when a confidence report is outside [0, 100] or off the 5-point step."""
    pass
