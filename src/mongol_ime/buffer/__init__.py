"""Reference host editor: text, selection, composing region and undo."""

from .buffer import EditBuffer, Transaction
from .state import BufferState, Span
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_offset, ensure_count

__all__ = [
    "EditBuffer",
    "Transaction",
    "BufferState",
    "Span",
    "BufferMirror",
    "BufferValidationError",
    "UndoEntry",
    "UndoTimeline",
    "clamp_offset",
    "ensure_count",
]
