from __future__ import annotations

"""Pydantic model for persisted score-history entries."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def accuracy_percent(score: int, total: int) -> float:
    """score/total as a percentage rounded to 2 decimals; 0 when nothing was attempted."""
    if total <= 0:
        return 0.0
    return round(score / total * 100, 2)


class HistoryEntry(BaseModel):
    """Summary of one completed session.

    Serialized exactly as the ledger stores it:
    ``{"date", "score", "total", "accuracy", "duration"}`` with accuracy
    kept as a two-decimal string (``"50.00"``).
    """

    model_config = ConfigDict(frozen=True)

    date: str
    score: int = Field(ge=0)
    total: int = Field(ge=0)
    accuracy: str
    duration: int = Field(default=0, ge=0)

    @field_validator("accuracy", mode="before")
    @classmethod
    def _format_accuracy(cls, v: Any) -> str:
        if v is None or isinstance(v, bool):
            raise ValueError("accuracy is required")
        try:
            value = float(v)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"accuracy must be a number, got {v!r}") from exc
        if not (0.0 <= value <= 100.0):
            raise ValueError("accuracy must be within 0..100")
        return f"{value:.2f}"

    @field_validator("duration", mode="before")
    @classmethod
    def _default_duration(cls, v: Any) -> int:
        # entries written before durations were tracked carry null or nothing
        if v is None:
            return 0
        try:
            return int(v)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"duration must be whole seconds, got {v!r}") from exc

    @model_validator(mode="after")
    def _score_le_total(self) -> "HistoryEntry":
        if self.score > self.total:
            raise ValueError("score must be <= total")
        return self

    @property
    def accuracy_value(self) -> float:
        return float(self.accuracy)

    @classmethod
    def from_tallies(
        cls,
        score: int,
        total: int,
        duration: int = 0,
        when: Optional[datetime] = None,
    ) -> "HistoryEntry":
        when = when or datetime.now()
        return cls(
            date=when.strftime(DATE_FORMAT),
            score=score,
            total=total,
            accuracy=accuracy_percent(score, total),
            duration=duration,
        )
