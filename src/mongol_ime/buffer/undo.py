"""Undo history for the reference editor: one entry per outermost edit."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from .state import Span


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Text and selection on both sides of one committed edit batch."""

    label: str
    before_text: str
    after_text: str
    selection_before: Span
    selection_after: Span


class UndoTimeline:
    """Applied edits on one stack, edits undone since the last push on another.

    ``limit`` caps how many applied edits are remembered; the oldest fall off.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        self._applied: Deque[UndoEntry] = deque(maxlen=limit)
        self._undone: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._applied) + len(self._undone)

    def push(self, entry: UndoEntry) -> None:
        self._applied.append(entry)
        self._undone.clear()

    def can_undo(self) -> bool:
        return bool(self._applied)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._applied:
            return None
        entry = self._applied.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._applied.append(entry)
        return entry


__all__ = ["UndoEntry", "UndoTimeline"]
