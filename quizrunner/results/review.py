from __future__ import annotations

"""Derived review views: answer buckets and the plot-ready history series.

Everything here is recomputed from authoritative state on each call.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..storage.schema import HistoryEntry
from .grader import Outcome, classify
from .schema import AnswerRecord


@dataclass(frozen=True)
class ReviewBuckets:
    correct: Tuple[AnswerRecord, ...]
    wrong: Tuple[AnswerRecord, ...]
    skipped: Tuple[AnswerRecord, ...]

    def sizes(self) -> dict:
        return {"correct": len(self.correct), "wrong": len(self.wrong), "skipped": len(self.skipped)}


@dataclass(frozen=True)
class HistoryPoint:
    index: int
    accuracy: float
    duration: int


def partition(records: Iterable[AnswerRecord]) -> ReviewBuckets:
    """Split records into disjoint correct/wrong/skipped buckets, keeping order."""
    buckets: dict = {o: [] for o in Outcome}
    for rec in records:
        buckets[classify(rec)].append(rec)
    return ReviewBuckets(
        correct=tuple(buckets[Outcome.CORRECT]),
        wrong=tuple(buckets[Outcome.WRONG]),
        skipped=tuple(buckets[Outcome.SKIPPED]),
    )


def history_series(entries: Iterable[HistoryEntry]) -> List[HistoryPoint]:
    """Map ledger entries (oldest first) to 1-based (index, accuracy, duration) points."""
    return [
        HistoryPoint(index=i, accuracy=e.accuracy_value, duration=int(e.duration or 0))
        for i, e in enumerate(entries, start=1)
    ]
