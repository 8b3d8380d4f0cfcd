from __future__ import annotations

"""Pure grading helpers: build answer records and classify them."""

from enum import Enum
from typing import Optional

from .schema import AnswerRecord, Question


class Outcome(str, Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    SKIPPED = "skipped"


def grade(question: Question, selected: Optional[str]) -> AnswerRecord:
    """Grade a selection by exact, case-sensitive match against the answer.

    Never raises; a None or unknown selection is simply incorrect.
    """
    return AnswerRecord(
        question=question,
        selected=selected,
        is_correct=(selected is not None and selected == question.correct_answer),
        skipped=False,
    )


def skip(question: Question) -> AnswerRecord:
    return AnswerRecord(question=question, selected=None, is_correct=False, skipped=True)


def classify(record: AnswerRecord) -> Outcome:
    if record.skipped:
        return Outcome.SKIPPED
    if record.is_correct:
        return Outcome.CORRECT
    return Outcome.WRONG
