"""In-memory editor implementing the ContextOracle contract.

``EditBuffer`` behaves like a single-field host text editor: one flat text,
a selection, an optional composing region, and batch edits that listeners
observe as one change. It backs the Textual demo host and the test suite.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, List, Optional

from mongol_ime.host import ExtractedText, HostConnectionError
from mongol_ime.runtime import telemetry

from .state import BufferState, Span
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_offset, ensure_count

Listener = Callable[[BufferMirror], None]


@dataclass(slots=True)
class _EditOrigin:
    label: str
    text: str
    selection: Span
    composing: Optional[Span]


class EditBuffer:
    def __init__(
        self,
        text: str = "",
        *,
        cursor: Optional[int] = None,
        name: str = "default",
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self._text = text
        self.state = BufferState()
        self.state.set_cursor(len(text) if cursor is None else clamp_offset(cursor, len(text)))
        self.undo_timeline = undo if undo is not None else UndoTimeline()
        self.version = 0
        self.connected = True
        self._depth = 0
        self._origin: Optional[_EditOrigin] = None
        self._listeners: List[Listener] = []

    @classmethod
    def from_text(cls, text: str, *, cursor: Optional[int] = None) -> "EditBuffer":
        return cls(text, cursor=cursor)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def in_batch(self) -> bool:
        return self._depth > 0

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            text=self._text,
            selection_start=self.state.selection_start,
            selection_end=self.state.selection_end,
            composing=self.state.composing,
            version=self.version,
        )

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` once after every completed outermost edit."""

        self._listeners.append(listener)

    def disconnect(self) -> None:
        """Simulate the editor going away; every oracle call then fails."""

        self.connected = False

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    # -- ContextOracle: lookups -----------------------------------------

    def text_before_cursor(self, count: int) -> str:
        self._require_connection()
        ensure_count(count)
        start = self.state.selection_start
        return self._text[max(0, start - count) : start]

    def text_after_cursor(self, count: int) -> str:
        self._require_connection()
        ensure_count(count)
        end = self.state.selection_end
        return self._text[end : end + count]

    def selected_text(self) -> str:
        self._require_connection()
        start, end = self.state.selection
        return self._text[start:end]

    def extracted_text(self) -> ExtractedText:
        self._require_connection()
        return ExtractedText(
            text=self._text,
            selection_start=self.state.selection_start,
            selection_end=self.state.selection_end,
        )

    # -- ContextOracle: batch scope -------------------------------------

    def begin_edit(self, label: str = "edit") -> None:
        self._require_connection()
        if self._depth == 0:
            self._origin = _EditOrigin(
                label=label,
                text=self._text,
                selection=self.state.selection,
                composing=self.state.composing,
            )
        self._depth += 1

    def end_edit(self) -> None:
        self._require_connection()
        if self._depth == 0:
            return
        self._depth -= 1
        if self._depth == 0 and self._origin is not None:
            origin, self._origin = self._origin, None
            self._finish(origin)

    # -- ContextOracle: edits -------------------------------------------

    def commit_text(self, text: str) -> None:
        with self.transaction("commit_text"):
            start, end = self._replacement_span()
            self._splice(start, end, text)
            self.state.set_cursor(start + len(text))
            self.state.clear_composing()

    def set_composing_text(self, text: str) -> None:
        with self.transaction("set_composing_text"):
            start, end = self._replacement_span()
            self._splice(start, end, text)
            self.state.set_cursor(start + len(text))
            self.state.composing = (start, start + len(text)) if text else None

    def finish_composing_text(self) -> None:
        with self.transaction("finish_composing_text"):
            self.state.clear_composing()

    def delete_chars_before_cursor(self, count: int) -> None:
        ensure_count(count)
        with self.transaction("delete_before"):
            start, end = self.state.selection
            cut = max(0, start - count)
            self._splice(cut, start, "")
            self.state.set_selection(cut, end - (start - cut))

    def set_selection(self, start: int, end: int) -> None:
        with self.transaction("set_selection"):
            length = len(self._text)
            self.state.set_selection(
                clamp_offset(start, length), clamp_offset(end, length)
            )

    def send_low_level_delete(self) -> None:
        with self.transaction("key_delete"):
            start, end = self.state.selection
            if start == end:
                if start == 0:
                    return
                start -= 1
            self._splice(start, end, "")
            self.state.set_cursor(start)

    # -- undo -------------------------------------------------------------

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.selection_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.selection_after)
        return True

    # -- internals ----------------------------------------------------------

    def _require_connection(self) -> None:
        if not self.connected:
            raise HostConnectionError(f"buffer '{self.name}' is disconnected")

    def _replacement_span(self) -> Span:
        if self.state.composing is not None:
            return self.state.composing
        return self.state.selection

    def _splice(self, start: int, end: int, text: str) -> None:
        self._text = self._text[:start] + text + self._text[end:]
        composing = self.state.composing
        if composing is None:
            return
        c_start, c_end = composing
        delta = len(text) - (end - start)
        if end <= c_start:
            self.state.composing = (c_start + delta, c_end + delta)
        elif start >= c_end:
            return
        elif start >= c_start and end <= c_end and (c_end + delta) > c_start:
            self.state.composing = (c_start, c_end + delta)
        else:
            self.state.clear_composing()

    def _restore(self, text: str, selection: Span) -> None:
        self._text = text
        self.state.set_selection(*selection)
        self.state.clear_composing()
        self.version += 1
        self._notify()

    def _finish(self, origin: _EditOrigin) -> None:
        changed_text = origin.text != self._text
        changed = (
            changed_text
            or origin.selection != self.state.selection
            or origin.composing != self.state.composing
        )
        if not changed:
            return
        self.version += 1
        if changed_text:
            self.undo_timeline.push(
                UndoEntry(
                    label=origin.label,
                    before_text=origin.text,
                    after_text=self._text,
                    selection_before=origin.selection,
                    selection_after=self.state.selection,
                )
            )
        self._notify()

    def _notify(self) -> None:
        snapshot = self.mirror()
        for listener in list(self._listeners):
            listener(snapshot)


class Transaction(AbstractContextManager["Transaction"]):
    """Nested edit scope; only the outermost one becomes an undo step."""

    def __init__(self, buffer: EditBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self.buffer.begin_edit(self.label)
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            logger_name="mongol_ime.buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        self.buffer.end_edit()
        return False


__all__ = ["EditBuffer", "Transaction"]
