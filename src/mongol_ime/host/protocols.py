"""Collaborator contracts between the engine and its host application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True, slots=True)
class ExtractedText:
    """Snapshot of the host editor's text and selection.

    ``selection_start``/``selection_end`` are relative to ``text``; add
    ``start_offset`` to get absolute editor offsets.
    """

    text: str
    selection_start: int
    selection_end: int
    start_offset: int = 0

    @property
    def absolute_selection(self) -> tuple[int, int]:
        return (
            self.start_offset + self.selection_start,
            self.start_offset + self.selection_end,
        )


class ContextOracle(Protocol):
    """Text-editing surface implemented by the host editor.

    All calls are synchronous. Lookups may return fewer characters than
    requested. ``begin_edit``/``end_edit`` bracket a batch that listeners
    must observe as a single change.
    """

    def text_before_cursor(self, count: int) -> Optional[str]:
        ...

    def text_after_cursor(self, count: int) -> Optional[str]:
        ...

    def selected_text(self) -> Optional[str]:
        ...

    def begin_edit(self) -> None:
        ...

    def end_edit(self) -> None:
        ...

    def commit_text(self, text: str) -> None:
        """Insert ``text`` at the cursor, replacing any composing region."""
        ...

    def set_composing_text(self, text: str) -> None:
        """Show ``text`` as provisional text at the cursor."""
        ...

    def finish_composing_text(self) -> None:
        """Keep the displayed composing text and drop its provisional mark."""
        ...

    def delete_chars_before_cursor(self, count: int) -> None:
        ...

    def set_selection(self, start: int, end: int) -> None:
        ...

    def send_low_level_delete(self) -> None:
        """Behave exactly like one press of the physical delete key."""
        ...

    def extracted_text(self) -> Optional[ExtractedText]:
        ...


class DataSource(Protocol):
    """Word-suggestion provider owned by the surrounding application."""

    def on_request_words_starting_with(self, prefix: str) -> None:
        ...

    def on_word_finished(self, word: str, previous_word: str) -> None:
        ...

    def on_candidate_click(self, position: int, word: str, previous_word: str) -> None:
        ...

    def on_candidate_long_click(
        self, position: int, word: str, previous_word: str
    ) -> None:
        ...


__all__ = ["ContextOracle", "DataSource", "ExtractedText"]
