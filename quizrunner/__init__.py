"""quizrunner package initialization.

A self-contained quiz session engine: question bank, pool building,
session state machine, grading and a persisted score history.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
