from __future__ import annotations

"""Analytics configuration (hyperparameters) using Pydantic."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Hyperparameters for history analytics and smoothing.

    - smoothing_span: EWMA span in sessions (>1)
    - target_accuracy: accuracy (percent) a session must reach to count as on target
    """

    smoothing_span: int = Field(5, gt=1)
    target_accuracy: float = Field(70.0, ge=0, le=100)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "AnalyticsConfig":
        return cls.model_validate(cfg.get("analytics", {}))
