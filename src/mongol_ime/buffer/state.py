"""Selection and composing-region state for the reference editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Span = Tuple[int, int]  # (start, end) offsets, start <= end


@dataclass(slots=True)
class BufferState:
    """Mutable selection + composing info tied to one EditBuffer."""

    selection_start: int = 0
    selection_end: int = 0
    composing: Optional[Span] = None

    @property
    def cursor(self) -> int:
        return self.selection_end

    @property
    def selection(self) -> Span:
        return (self.selection_start, self.selection_end)

    @property
    def has_selection(self) -> bool:
        return self.selection_start != self.selection_end

    def set_cursor(self, offset: int) -> None:
        self.selection_start = self.selection_end = offset

    def set_selection(self, start: int, end: int) -> None:
        self.selection_start, self.selection_end = sorted((start, end))

    def clear_composing(self) -> None:
        self.composing = None
