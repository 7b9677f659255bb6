"""Synchronous event bus connecting the engine to its host UI."""

from __future__ import annotations

from typing import Callable, Dict

EventCallback = Callable[[object], None]

SELECTION_CHANGED = "selection.changed"
SELECTION_RESOLVED = "selection.resolved"
PAGE_LOADING = "page.loading"
PAGE_LOADED = "page.loaded"
PAGE_FAILED = "page.failed"
PAGE_STALE = "page.stale"


class SelectionBus:
    """Minimal pub/sub; callbacks run in subscription order on ``emit``."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[EventCallback]] = {}

    def subscribe(self, event: str, callback: EventCallback) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: EventCallback) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = [
    "EventCallback",
    "SelectionBus",
    "SELECTION_CHANGED",
    "SELECTION_RESOLVED",
    "PAGE_LOADING",
    "PAGE_LOADED",
    "PAGE_FAILED",
    "PAGE_STALE",
]
