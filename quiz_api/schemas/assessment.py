import uuid
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from services.assessment_engine.models import AnswerBreakdown


# --- Request Schemas ---

class SelectOptionRequest(BaseModel):
    option_id: str = Field(..., description="Identifier of the chosen option.")


class ConfidenceRequest(BaseModel):
    value: int = Field(..., strict=True, ge=0, le=100, multiple_of=5,
                       description="Confidence in the selected option, 0-100 in steps of 5.")


# --- View Schemas ---

class OptionView(BaseModel):
    id: str
    text: str


class QuestionView(BaseModel):
    """A question as shown before the answer is revealed: no correct option, no explanation."""
    id: str
    bias: str
    stem: str
    options: List[OptionView]


class ConfidenceView(BaseModel):
    value: Optional[int]
    displayed: int
    label: Optional[str]
    interacted: bool


class IntroView(BaseModel):
    screen: Literal["intro"] = "intro"
    title: str
    question_count: int
    estimated_minutes: int


class AssessmentView(BaseModel):
    screen: Literal["assessment"] = "assessment"
    index: int
    question_count: int
    progress_percent: float
    question: QuestionView
    selection: Optional[str]
    confidence: ConfidenceView
    revealed: bool
    can_advance: bool
    is_last_question: bool
    correct_id: Optional[str] = None
    explanation: Optional[str] = None


class ResultsView(BaseModel):
    screen: Literal["results"] = "results"
    round_label: str
    total: int
    correct: int
    accuracy_percent: int
    avg_confidence: int
    brier_score: float
    brier_display: str
    breakdown: List[AnswerBreakdown]


SessionView = Annotated[Union[IntroView, AssessmentView, ResultsView], Field(discriminator="screen")]


# --- Response Schemas ---

class SessionCreatedResponse(BaseModel):
    session_id: uuid.UUID
    view: SessionView


class ActionResponse(BaseModel):
    accepted: bool = Field(..., description="False when the current state does not permit the action.")
    view: SessionView


class QuestionBankResponse(BaseModel):
    title: str
    round_label: str
    questions: List[QuestionView]
