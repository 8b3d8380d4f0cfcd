from __future__ import annotations

"""Plain-text formatting of session results and score history."""

from typing import Iterable, List

from ..results.review import ReviewBuckets
from ..results.schema import AnswerRecord
from ..storage.schema import HistoryEntry


def format_summary(score: int, attempted: int, buckets: ReviewBuckets) -> str:
    """Return a human-readable summary of a finished session."""
    sizes = buckets.sizes()
    lines = [f"Quiz complete! Score: {score}/{attempted}"]
    lines.append(
        f"Correct: {sizes['correct']}  Wrong: {sizes['wrong']}  Skipped: {sizes['skipped']}"
    )
    return "\n".join(lines)


def _record_line(rec: AnswerRecord) -> str:
    q = rec.question
    head = f"[{q.year} wk {q.week}] {q.question}"
    if rec.skipped:
        return f"{head}\n    answer: {q.correct_answer}"
    if rec.is_correct:
        return f"{head}\n    you: {rec.selected}"
    return f"{head}\n    you: {rec.selected}\n    answer: {q.correct_answer}"


def format_review(buckets: ReviewBuckets) -> str:
    sections: List[str] = []
    for title, recs in (("Correct", buckets.correct), ("Wrong", buckets.wrong), ("Skipped", buckets.skipped)):
        if not recs:
            continue
        sections.append(f"{title} ({len(recs)}):")
        sections.extend(_record_line(r) for r in recs)
    return "\n".join(sections)


def format_history(entries: Iterable[HistoryEntry]) -> str:
    """One line per entry, most recent first."""
    rows = list(entries)
    if not rows:
        return "No score history yet."
    return "\n".join(
        f"{e.date}  {e.score}/{e.total} ({e.accuracy}%)  {e.duration}s" for e in reversed(rows)
    )
