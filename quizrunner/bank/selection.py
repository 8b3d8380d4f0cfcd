from __future__ import annotations

"""Filter selection: one subject plus a set of packed (year, week) keys."""

from typing import FrozenSet, Iterable, Optional, Set, Tuple

from .bank import QuestionBank, week_key


class WeekSelection:
    """Mutable subject/week choice driven by user toggles.

    Week keys are only meaningful for the current subject, so switching
    subject clears them.
    """

    def __init__(self, bank: QuestionBank, subject: Optional[str] = None) -> None:
        self._bank = bank
        self.subject: Optional[str] = None
        self._keys: Set[int] = set()
        if subject is not None:
            self.select_subject(subject)

    @property
    def keys(self) -> FrozenSet[int]:
        return frozenset(self._keys)

    def available(self) -> Set[Tuple[int, int]]:
        if self.subject is None:
            return set()
        return self._bank.weeks_for(self.subject)

    def _available_keys(self, year: Optional[int] = None) -> Set[int]:
        return {week_key(y, w) for y, w in self.available() if year is None or y == year}

    def select_subject(self, subject: str) -> None:
        if subject not in self._bank.subjects():
            raise KeyError(f"Unknown subject: {subject}")
        if subject != self.subject:
            self.subject = subject
            self._keys.clear()

    def is_selected(self, year: int, week: int) -> bool:
        return week_key(year, week) in self._keys

    def toggle_week(self, year: int, week: int) -> bool:
        """Flip one week; returns whether it is selected afterwards."""
        key = week_key(year, week)
        if key not in self._available_keys():
            raise KeyError(f"{self.subject} has no questions for year {year} week {week}")
        if key in self._keys:
            self._keys.discard(key)
            return False
        self._keys.add(key)
        return True

    def select_weeks(self, pairs: Iterable[Tuple[int, int]]) -> None:
        for year, week in pairs:
            if not self.is_selected(year, week):
                self.toggle_week(year, week)

    def select_all(self) -> None:
        self._keys = self._available_keys()

    def deselect_all(self) -> None:
        self._keys.clear()

    def select_year(self, year: int) -> None:
        self._keys |= self._available_keys(year)

    def deselect_year(self, year: int) -> None:
        self._keys -= self._available_keys(year)

    def toggle_year(self, year: int) -> bool:
        """Select every week of year, or clear them if all were already selected."""
        year_keys = self._available_keys(year)
        if not year_keys:
            raise KeyError(f"{self.subject} has no questions for year {year}")
        if year_keys <= self._keys:
            self._keys -= year_keys
            return False
        self._keys |= year_keys
        return True
