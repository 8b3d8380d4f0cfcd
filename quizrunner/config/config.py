from __future__ import annotations

"""Configuration loading and validation for quizrunner.

This module loads YAML configuration, applies defaults, and validates
that flags, lists and paths are sane before a session is built.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml


DEFAULT_BANK_PATH = Path(__file__).resolve().parents[1] / "resources" / "questions.json"
DEFAULT_HISTORY_PATH = "./score_history.json"
DEFAULT_SMOOTHING_SPAN = 5
DEFAULT_TARGET_ACCURACY = 70


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"WARNING: Config file {path} is not a mapping, using defaults.")
        return {}
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def _as_bool(section: Dict[str, Any], key: str, default: bool) -> None:
    value = section.get(key, default)
    if not isinstance(value, bool):
        print(f"WARNING: '{key}' must be true/false, got {value!r}; using {default}.")
        section[key] = default


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown or mistyped values are replaced by their defaults with a
    warning rather than aborting, so a stale config never blocks a quiz.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for section in ("bank", "history", "pool", "engine", "analytics"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    bank = cfg["bank"]
    history = cfg["history"]
    pool = cfg["pool"]
    engine = cfg["engine"]
    analytics = cfg["analytics"]

    if not bank.get("path"):
        bank["path"] = str(DEFAULT_BANK_PATH)
    history.setdefault("path", DEFAULT_HISTORY_PATH)
    if not history.get("path"):
        history["path"] = DEFAULT_HISTORY_PATH

    pool.setdefault("shuffle_options", True)
    pool.setdefault("fixed_option_subjects", [])
    engine.setdefault("strict_transitions", True)
    analytics.setdefault("smoothing_span", DEFAULT_SMOOTHING_SPAN)
    analytics.setdefault("target_accuracy", DEFAULT_TARGET_ACCURACY)

    _as_bool(pool, "shuffle_options", True)
    _as_bool(engine, "strict_transitions", True)

    fixed = pool.get("fixed_option_subjects")
    if fixed is None:
        fixed = []
    if not isinstance(fixed, (list, tuple)):
        print(f"WARNING: 'fixed_option_subjects' must be a list, got {fixed!r}; ignoring.")
        fixed = []
    pool["fixed_option_subjects"] = [str(s) for s in fixed]

    span = analytics.get("smoothing_span")
    if not isinstance(span, int) or isinstance(span, bool) or span <= 1:
        print(f"WARNING: Unsupported smoothing_span '{span}', using {DEFAULT_SMOOTHING_SPAN}.")
        analytics["smoothing_span"] = DEFAULT_SMOOTHING_SPAN

    target = analytics.get("target_accuracy")
    if not isinstance(target, (int, float)) or isinstance(target, bool) or not (0 <= target <= 100):
        print(f"WARNING: Unsupported target_accuracy '{target}', using {DEFAULT_TARGET_ACCURACY}.")
        analytics["target_accuracy"] = DEFAULT_TARGET_ACCURACY

    return cfg


def require_bank(cfg: Dict[str, Any]) -> Path:
    """Exit with an error unless the configured question bank exists."""
    bank_path = Path(cfg["bank"]["path"])
    if not bank_path.exists():
        print(f"ERROR: Question bank not found at '{bank_path}'.", file=sys.stderr)
        sys.exit(1)
    return bank_path


def option_shuffle_policy(cfg: Dict[str, Any]) -> Dict[str, bool]:
    """Map subject -> whether its option order is randomized.

    Subjects missing from the mapping fall back to pool.shuffle_options.
    """
    pool = cfg.get("pool", {})
    return {str(s): False for s in pool.get("fixed_option_subjects", [])}
