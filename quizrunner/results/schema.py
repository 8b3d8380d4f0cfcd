from __future__ import annotations

"""Question and answer record dataclasses."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Question:
    qid: int
    subject: str
    year: int
    week: int
    question: str
    options: Tuple[str, ...]
    correct_answer: str

    @property
    def week_key(self) -> int:
        return self.year * 100 + self.week

    def to_json(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "year": self.year,
            "week": self.week,
            "question": self.question,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any], qid: int = 0) -> "Question":
        return cls(
            qid=int(qid),
            subject=str(data["subject"]),
            year=int(data["year"]),
            week=int(data["week"]),
            question=str(data["question"]),
            options=tuple(str(o) for o in data["options"]),
            correct_answer=str(data["correct_answer"]),
        )


@dataclass(frozen=True)
class AnswerRecord:
    """One graded or skipped question, in presentation order."""

    question: Question
    selected: Optional[str]
    is_correct: bool
    skipped: bool = False

    def to_json(self) -> Dict[str, Any]:
        data = self.question.to_json()
        data.update({"selected": self.selected, "isCorrect": self.is_correct, "skipped": self.skipped})
        return data
