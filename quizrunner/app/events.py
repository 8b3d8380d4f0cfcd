from __future__ import annotations

"""Tiny pub/sub event bus used to notify the presentation layer."""

from typing import Any, Callable, Dict, List

from .explain import warn


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        for h in self._subs.get(event, []):
            try:
                h(payload)
            except Exception as exc:
                # a broken view must not block the rest of the handlers
                warn(f"handler for '{event}' failed: {exc!r}")
