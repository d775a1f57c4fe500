"""
Exam grading.

Grading is a pure function of the submission and a snapshot of the question
store; persisting the outcome is the caller's job.
"""
import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional

from examdesk.schemas import AnswerEntry, ExamResult, Marks, Question, QuestionOutcome

logger = logging.getLogger(__name__)

# Reported when no submitted answer resolves to a question.
DEGENERATE_PERCENTAGE = "0.00"

TWO_PLACES = Decimal("0.01")


def to_fixed(value: float) -> str:
    """
    Two-decimal string of ``value``, ties rounded away from zero.

    Rounds the exact binary value of the float, so 3.125 gives "3.13"
    where ``f"{3.125:.2f}"`` would give "3.12".
    """
    return str(Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def format_percentage(score: Marks, total_marks: Marks) -> str:
    if not total_marks:
        return DEGENERATE_PERCENTAGE
    return to_fixed(score / total_marks * 100)


def resolve_question_id(value: Any) -> Optional[int]:
    """Return the id ``value`` can match, or None when it can match nothing."""
    # Booleans are ints in Python but never equal an id on the wire.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def grade_submission(
    student_name: Optional[str],
    answers: Iterable[AnswerEntry],
    questions: Mapping[int, Question],
    now: Optional[datetime] = None,
) -> ExamResult:
    """
    Score ``answers`` against ``questions``.

    Answers are compared to the stored correct answer with exact string
    equality. Only answers that resolve to a question count towards the
    total, and outcomes are listed in submission order.
    """
    score: Marks = 0
    total_marks: Marks = 0
    outcomes = []

    for answer in answers:
        question_id = resolve_question_id(answer.question_id)
        question = questions.get(question_id) if question_id is not None else None
        if question is None:
            # Unknown, missing or non-numeric ids are dropped on purpose:
            # they add nothing to the score, the total or the outcome list.
            logger.debug("Skipping answer for unknown question %s", answer.question_id)
            continue

        total_marks += question.marks
        # An empty correct answer means the key is unknown, so nothing matches it.
        is_correct = (
            question.correct_answer != ""
            and question.correct_answer == answer.selected_option
        )
        if is_correct:
            score += question.marks

        outcomes.append(
            QuestionOutcome(
                question_id=question.id,
                question=question.question,
                selected_option=answer.selected_option,
                correct_answer=question.correct_answer,
                is_correct=is_correct,
                marks=question.marks,
            )
        )

    return ExamResult(
        student_name=student_name,
        score=score,
        total_marks=total_marks,
        percentage=format_percentage(score, total_marks),
        results=outcomes,
        submitted_at=now or datetime.now(timezone.utc),
    )
