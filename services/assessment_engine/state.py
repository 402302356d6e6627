"""
Session state variants for one run through the question bank.

Each screen has its own immutable record, so a selection can only exist while
a question is on screen and answers can only grow while in progress.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from services.assessment_engine.confidence import ConfidenceInput
from services.assessment_engine.models import Answer

SCREEN_INTRO = "intro"
SCREEN_ASSESSMENT = "assessment"
SCREEN_RESULTS = "results"


@dataclass(frozen=True)
class IntroState:
    screen: str = field(default=SCREEN_INTRO, init=False)


@dataclass(frozen=True)
class InProgressState:
    index: int = 0
    selection: Optional[str] = None
    confidence: ConfidenceInput = field(default_factory=ConfidenceInput)
    revealed: bool = False
    answers: Tuple[Answer, ...] = ()
    screen: str = field(default=SCREEN_ASSESSMENT, init=False)

    def __post_init__(self):
        # Answers are appended only on advancement
        if len(self.answers) != self.index:
            raise ValueError(
                f"In-progress state at index {self.index} must hold exactly {self.index} answers, "
                f"got {len(self.answers)}"
            )


@dataclass(frozen=True)
class ResultsState:
    answers: Tuple[Answer, ...]
    screen: str = field(default=SCREEN_RESULTS, init=False)


SessionState = Union[IntroState, InProgressState, ResultsState]
