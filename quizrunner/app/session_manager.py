from __future__ import annotations

"""Session Manager: the presentation-facing controller.

Owns the week selection, builds pools from the bank, drives one
QuizSession at a time and exposes the read-only views a UI renders.
It is front-end agnostic; the CLI is one consumer.
"""

import random
from typing import Any, Dict, List, Optional, Tuple

from ..bank.bank import QuestionBank
from ..bank.pool import build_pool
from ..config.config import option_shuffle_policy
from ..bank.selection import WeekSelection
from ..results.review import HistoryPoint, ReviewBuckets, history_series
from ..results.schema import AnswerRecord, Question
from ..storage.schema import HistoryEntry
from ..storage.store import HistoryLedger
from .events import EventBus
from .explain import trace as xtrace
from .session_engine import EmptySelectionError, QuizSession


class SessionManager:
    def __init__(
        self,
        bank: QuestionBank,
        ledger: HistoryLedger,
        *,
        shuffle_options: bool = True,
        subject_policy: Optional[Dict[str, bool]] = None,
        strict: bool = True,
        rng: Optional[random.Random] = None,
        events: Optional[EventBus] = None,
    ) -> None:
        self.bank = bank
        self.ledger = ledger
        self.shuffle_options = shuffle_options
        self.subject_policy = dict(subject_policy or {})
        self.strict = strict
        self.rng = rng
        self.events = events or EventBus()
        self.selection = WeekSelection(bank)
        self.session = self._new_session()
        self.last_error: Optional[str] = None
        self._notified = False

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], bank: QuestionBank, **kwargs: Any) -> "SessionManager":
        return cls(
            bank,
            HistoryLedger(cfg["history"]["path"]),
            shuffle_options=bool(cfg["pool"]["shuffle_options"]),
            subject_policy=option_shuffle_policy(cfg),
            strict=bool(cfg["engine"]["strict_transitions"]),
            **kwargs,
        )

    def _new_session(self) -> QuizSession:
        return QuizSession(self.ledger, strict=self.strict)

    # --- selection intents ---

    def select_subject(self, subject: str) -> None:
        self.selection.select_subject(subject)

    def toggle_week(self, year: int, week: int) -> bool:
        return self.selection.toggle_week(year, week)

    def toggle_year(self, year: int) -> bool:
        return self.selection.toggle_year(year)

    def select_all_weeks(self) -> None:
        self.selection.select_all()

    def deselect_all_weeks(self) -> None:
        self.selection.deselect_all()

    def selected_count(self) -> int:
        return self.bank.count(self.selection.subject, self.selection.keys)

    # --- session intents ---

    def start_session(self) -> bool:
        """Build a pool from the selection and start; False when it is empty.

        On an empty selection nothing changes: no pool, no session, and
        last_error explains why.
        """
        filtered = self.bank.filter(self.selection.subject, self.selection.keys)
        if not filtered:
            self.last_error = "No questions match the selected subject and weeks."
            xtrace("start_rejected", {"subject": self.selection.subject, "weeks": sorted(self.selection.keys)})
            return False
        pool = build_pool(
            filtered,
            self.rng,
            shuffle_options=self.shuffle_options,
            subject_policy=self.subject_policy,
        )
        try:
            started = self.session.start(pool)
        except EmptySelectionError as exc:
            self.last_error = str(exc)
            return False
        self.last_error = None
        return started

    def submit_answer(self, option: Optional[str]) -> Optional[AnswerRecord]:
        rec = self.session.answer(option)
        self._notify_if_complete()
        return rec

    def skip_question(self) -> Optional[AnswerRecord]:
        rec = self.session.skip()
        self._notify_if_complete()
        return rec

    def submit_quiz(self) -> Optional[HistoryEntry]:
        entry = self.session.submit()
        self._notify_if_complete()
        return entry

    def reset_to_menu(self) -> None:
        """Drop the current session; selection and history are kept."""
        self.session.reset()
        self._notified = False

    def clear_history(self) -> None:
        self.ledger.clear()
        xtrace("history_cleared")
        self.events.emit("history_cleared")

    def _notify_if_complete(self) -> None:
        if self.session.is_complete and not self._notified:
            self._notified = True
            self.events.emit("session_completed", self.session.entry)

    # --- reads ---

    @property
    def current_question(self) -> Optional[Question]:
        return self.session.current_question

    @property
    def progress(self) -> Tuple[int, int]:
        return self.session.index, self.session.total

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def attempted(self) -> int:
        return self.session.attempted

    @property
    def is_complete(self) -> bool:
        return self.session.is_complete

    def review(self) -> ReviewBuckets:
        return self.session.review()

    def history(self) -> List[HistoryEntry]:
        return self.ledger.read_all()

    def history_recent_first(self) -> List[HistoryEntry]:
        return list(reversed(self.ledger.read_all()))

    def history_series(self) -> List[HistoryPoint]:
        return history_series(self.ledger.read_all())
