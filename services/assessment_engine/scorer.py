# services/assessment_engine/scorer.py
# Scoring for the calibration quiz: accuracy, average confidence and Brier score.

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence

from .models import AnswerBreakdown, Answer, AssessmentResults, EmptyAnswerSetError, QuestionBank

logger = logging.getLogger(__name__)


def round_half_up(numerator: int, denominator: int) -> int:
    """
    Rounds numerator / denominator to the nearest integer, halves away from zero.

    Works on the exact rational value, so 62.5 always becomes 63 and binary
    floating point never nudges a .5 either way.
    """
    if denominator == 0:
        raise ZeroDivisionError("round_half_up denominator must be non-zero")
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _squared_error_sum(answers: Sequence[Answer]) -> int:
    return sum((answer.confidence - (100 if answer.correct else 0)) ** 2 for answer in answers)


def brier_score(answers: Sequence[Answer]) -> float:
    """
    Mean of (p - outcome)^2 where p = confidence / 100 and outcome = 1 if correct.

    0.0 is perfect, 0.25 is what you'd score guessing 50% on everything,
    1.0 is certain and always wrong. Summed in integer hundredths so the
    only rounding is the final division.
    """
    if not answers:
        raise EmptyAnswerSetError("Cannot compute a Brier score for an empty answer set.")
    return _squared_error_sum(answers) / (10000 * len(answers))


def brier_display(answers: Sequence[Answer]) -> str:
    """Brier score to two decimals, ties rounded up (0.125 -> "0.13")."""
    if not answers:
        raise EmptyAnswerSetError("Cannot display a Brier score for an empty answer set.")
    quotient = Decimal(_squared_error_sum(answers)) / Decimal(10000 * len(answers))
    return str(quotient.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_results(answers: Sequence[Answer]) -> AssessmentResults:
    """Aggregates a completed (non-empty) answer set."""
    if not answers:
        raise EmptyAnswerSetError("Cannot compute results for an empty answer set.")

    total = len(answers)
    correct = sum(1 for answer in answers if answer.correct)
    avg_confidence = round_half_up(sum(answer.confidence for answer in answers), total)
    brier = brier_score(answers)

    logger.info(f"Computed results: {correct}/{total} correct, avg confidence {avg_confidence}, brier {brier:.4f}")
    return AssessmentResults(
        total=total,
        correct=correct,
        avg_confidence=avg_confidence,
        brier_score=brier,
    )


def accuracy_percent(results: AssessmentResults) -> int:
    return round_half_up(100 * results.correct, results.total)


def answer_breakdown(bank: QuestionBank, answers: Sequence[Answer]) -> List[AnswerBreakdown]:
    """Pairs each answer with the bias label of its question, in answer order."""
    rows = []
    for answer in answers:
        question = bank.find(answer.question_id)
        rows.append(AnswerBreakdown(
            question_id=answer.question_id,
            bias=question.bias if question is not None else answer.question_id,
            correct=answer.correct,
            confidence=answer.confidence,
        ))
    return rows
