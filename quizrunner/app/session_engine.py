from __future__ import annotations

"""Quiz session state machine.

NOT_STARTED -> IN_PROGRESS -> COMPLETED. Nothing leaves COMPLETED except
reset(), which wipes all per-session state back to NOT_STARTED. The
history ledger is injected; the session appends exactly one entry when
it completes.
"""

import time
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from ..results.grader import grade, skip as skip_record
from ..results.review import ReviewBuckets, partition
from ..results.schema import AnswerRecord, Question
from ..storage.schema import HistoryEntry
from ..storage.store import HistoryLedger, StorageError
from .explain import trace as xtrace, warn


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class InvalidTransitionError(RuntimeError):
    """A mutator was called in a state that forbids it."""


class EmptySelectionError(ValueError):
    """A session cannot start on an empty pool."""


class QuizSession:
    def __init__(
        self,
        ledger: HistoryLedger,
        *,
        strict: bool = True,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.ledger = ledger
        self.strict = strict
        self._clock = clock
        self._now = now
        self._clear()

    def _clear(self) -> None:
        self.state = SessionState.NOT_STARTED
        self._pool: Tuple[Question, ...] = ()
        self._records: List[AnswerRecord] = []
        self.index = 0
        self.score = 0
        self.attempted = 0
        self._started: Optional[float] = None
        self._duration: Optional[int] = None
        self.entry: Optional[HistoryEntry] = None
        self.persist_error: Optional[StorageError] = None

    def _allowed(self, op: str, state: SessionState) -> bool:
        if self.state == state:
            return True
        msg = f"{op}() is not allowed while the session is {self.state.value}"
        if self.strict:
            raise InvalidTransitionError(msg)
        warn(msg)
        return False

    # --- read side ---

    @property
    def pool(self) -> Tuple[Question, ...]:
        return self._pool

    @property
    def records(self) -> Tuple[AnswerRecord, ...]:
        return tuple(self._records)

    @property
    def total(self) -> int:
        return len(self._pool)

    @property
    def is_complete(self) -> bool:
        return self.state == SessionState.COMPLETED

    @property
    def current_question(self) -> Optional[Question]:
        if self.state != SessionState.IN_PROGRESS:
            return None
        return self._pool[self.index]

    def elapsed_seconds(self) -> int:
        """Seconds since start; frozen at the final value once completed."""
        if self._duration is not None:
            return self._duration
        if self._started is None:
            return 0
        return max(0, int(self._clock() - self._started))

    def review(self) -> ReviewBuckets:
        return partition(self._records)

    # --- transitions ---

    def start(self, pool: Sequence[Question]) -> bool:
        if not self._allowed("start", SessionState.NOT_STARTED):
            return False
        if not pool:
            raise EmptySelectionError("no questions match the current selection")
        self._pool = tuple(pool)
        self._records = []
        self.index = 0
        self.score = 0
        self.attempted = 0
        self._started = self._clock()
        self.state = SessionState.IN_PROGRESS
        xtrace("session_started", {"questions": len(self._pool)})
        return True

    def answer(self, selected: Optional[str]) -> Optional[AnswerRecord]:
        if not self._allowed("answer", SessionState.IN_PROGRESS):
            return None
        rec = grade(self._pool[self.index], selected)
        self._records.append(rec)
        self.attempted += 1
        if rec.is_correct:
            self.score += 1
        xtrace("answer_recorded", {"index": self.index, "correct": rec.is_correct})
        self._advance()
        return rec

    def skip(self) -> Optional[AnswerRecord]:
        if not self._allowed("skip", SessionState.IN_PROGRESS):
            return None
        rec = skip_record(self._pool[self.index])
        self._records.append(rec)
        xtrace("question_skipped", {"index": self.index})
        self._advance()
        return rec

    def submit(self) -> Optional[HistoryEntry]:
        """End the session now; questions not yet reached are discarded."""
        if not self._allowed("submit", SessionState.IN_PROGRESS):
            return None
        return self._complete()

    def reset(self) -> None:
        self._clear()

    def _advance(self) -> None:
        if self.index + 1 >= len(self._pool):
            self._complete()
        else:
            self.index += 1

    def _complete(self) -> HistoryEntry:
        # tallies are final here: the last record has already been counted
        self._duration = self.elapsed_seconds()
        entry = HistoryEntry.from_tallies(
            score=self.score,
            total=self.attempted,
            duration=self._duration,
            when=self._now(),
        )
        self.entry = entry
        try:
            self.ledger.append(entry)
        except StorageError as exc:
            self.persist_error = exc
            warn(f"session result was not saved: {exc}")
            xtrace("history_append_failed", {"error": str(exc)})
        self.state = SessionState.COMPLETED
        xtrace("session_completed", entry.model_dump())
        return entry
