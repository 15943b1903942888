"""Synchronous event bus the engine uses to notify its host adapter."""

from __future__ import annotations

from typing import Callable, Dict, List

Callback = Callable[[object], None]

CANDIDATES_UPDATE = "candidates.update"
CANDIDATES_CLEAR = "candidates.clear"
COMPOSING_PENDING = "composing.pending"
COMPOSING_RESOLVED = "composing.resolved"
WORD_FINISHED = "word.finished"


class EngineBus:
    """Minimal publish/subscribe channel; delivery happens inline."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callback]] = {}

    def subscribe(self, event: str, callback: Callback) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = [
    "EngineBus",
    "CANDIDATES_UPDATE",
    "CANDIDATES_CLEAR",
    "COMPOSING_PENDING",
    "COMPOSING_RESOLVED",
    "WORD_FINISHED",
]
