"""Snapshot type pushed to host widgets, and buffer validation errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .state import Span


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    selection_start: int
    selection_end: int
    composing: Optional[Span] = None
    version: int = 0

    @property
    def cursor(self) -> int:
        return self.selection_end

    @property
    def composing_text(self) -> str:
        if self.composing is None:
            return ""
        start, end = self.composing
        return self.text[start:end]


class BufferValidationError(ValueError):
    """Raised when a caller hands the buffer a nonsensical argument."""

    def __init__(self, message: str, *, value: object | None = None) -> None:
        super().__init__(message)
        self.value = value
