from __future__ import annotations

"""Read-only question bank loaded once from JSON or YAML."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import yaml

from ..results.schema import Question

REQUIRED_FIELDS = ("subject", "year", "week", "question", "options", "correct_answer")
MAX_WEEK = 99


class BankError(ValueError):
    """The question bank file is missing fields or inconsistent."""


def week_key(year: int, week: int) -> int:
    """Pack (year, week) into one int; collision-free while week < 100."""
    return int(year) * 100 + int(week)


def split_week_key(key: int) -> Tuple[int, int]:
    return divmod(int(key), 100)


def _validate_record(pos: int, raw: Any) -> Question:
    if not isinstance(raw, dict):
        raise BankError(f"question #{pos}: expected an object, got {type(raw).__name__}")
    missing = [k for k in REQUIRED_FIELDS if k not in raw]
    if missing:
        raise BankError(f"question #{pos}: missing field(s) {', '.join(missing)}")
    if not isinstance(raw["options"], list) or not raw["options"]:
        raise BankError(f"question #{pos}: options must be a non-empty list")
    try:
        q = Question.from_json(raw, qid=pos)
    except (TypeError, ValueError) as exc:
        raise BankError(f"question #{pos}: {exc}") from exc
    if not (0 <= q.week <= MAX_WEEK):
        raise BankError(f"question #{pos}: week {q.week} outside 0..{MAX_WEEK}")
    if len(set(q.options)) != len(q.options):
        raise BankError(f"question #{pos}: duplicate options")
    if q.correct_answer not in q.options:
        raise BankError(f"question #{pos}: correct_answer is not one of the options")
    return q


def _read_records(path: Path) -> List[Any]:
    with path.open("r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(f) or []
        else:
            data = json.load(f)
    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise BankError(f"{path}: expected a list of questions")
    return data


class QuestionBank:
    """Immutable catalog of questions with subject/week queries."""

    def __init__(self, questions: Iterable[Question]) -> None:
        self._questions: Tuple[Question, ...] = tuple(questions)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "QuestionBank":
        return cls(_validate_record(i, r) for i, r in enumerate(records))

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    def __len__(self) -> int:
        return len(self._questions)

    def subjects(self) -> Set[str]:
        return {q.subject for q in self._questions}

    def weeks_for(self, subject: str) -> Set[Tuple[int, int]]:
        return {(q.year, q.week) for q in self._questions if q.subject == subject}

    def years_for(self, subject: str) -> Set[int]:
        return {year for year, _ in self.weeks_for(subject)}

    def filter(self, subject: Optional[str], week_keys: Iterable[int]) -> List[Question]:
        """Questions of subject whose week key is selected, in bank order."""
        keys = set(week_keys)
        return [q for q in self._questions if q.subject == subject and q.week_key in keys]

    def count(self, subject: Optional[str], week_keys: Iterable[int]) -> int:
        return len(self.filter(subject, week_keys))


def load_bank(path: str | Path) -> QuestionBank:
    """Load and validate a bank file (.json, .yml or .yaml)."""
    p = Path(path)
    try:
        records = _read_records(p)
    except BankError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise BankError(f"could not read question bank {p}: {exc}") from exc
    return QuestionBank.from_records(records)
