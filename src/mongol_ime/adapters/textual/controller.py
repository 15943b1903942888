"""Minimal Textual adapter that wires ImeController events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from mongol_ime.buffer import BufferMirror, EditBuffer
from mongol_ime.engine import ImeController, PopupChoice
from mongol_ime.engine.bus import (
    CANDIDATES_CLEAR,
    CANDIDATES_UPDATE,
    COMPOSING_PENDING,
    COMPOSING_RESOLVED,
    WORD_FINISHED,
)

from .layout import DEFAULT_LAYOUT, KeyOutput, translate


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


CANDIDATE_KEYS = tuple(f"f{index}" for index in range(1, 10))


@dataclass(slots=True)
class TextualImeHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_candidates: Callable[[Sequence[str]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualImeAdapter:
    """Bridges an EditBuffer host and ImeController to a Textual surface.

    The buffer plays the host editor: its edits flow back to the UI through
    ``update_buffer`` once per completed batch. Cursor moves that the engine
    did not make (arrows, undo) are reported to the controller as selection
    updates, the way a platform editor would.
    """

    def __init__(
        self,
        controller: ImeController,
        buffer: EditBuffer,
        hooks: TextualImeHooks,
        *,
        layout: Optional[Mapping[str, KeyOutput]] = None,
    ) -> None:
        self.controller = controller
        self.buffer = buffer
        self.hooks = hooks
        self.layout = layout if layout is not None else DEFAULT_LAYOUT
        self.controller.set_input_connection(buffer)
        self.buffer.subscribe(self.hooks.update_buffer)
        self._subscribe_events()
        self.hooks.update_buffer(self.buffer.mirror())

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Dispatch one Textual key; returns False when the key was ignored."""

        normalized = key.lower()
        mods = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=mods)

        if normalized == "backspace":
            plan = self.controller.on_backspace()
            self._log_state("backspace <-", steps=plan.steps)
            return True
        if normalized in CANDIDATE_KEYS:
            return self._choose_candidate(CANDIDATE_KEYS.index(normalized), mods)
        if normalized in {"left", "right", "home", "end", "ctrl+a", "ctrl+left", "ctrl+right"}:
            self._move(normalized)
            return True
        if normalized == "ctrl+z":
            self._external_change(self.buffer.undo)
            return True
        if normalized == "ctrl+y":
            self._external_change(self.buffer.redo)
            return True
        if normalized in {"enter", "return"}:
            self.controller.on_keyboard_input("\n")
            return True
        if normalized == "space":
            text = " "
        if not text or len(text) != 1 or not text.isprintable():
            return False

        output = translate(text, self.layout)
        if isinstance(output, PopupChoice):
            self.controller.on_key_popup_chosen(output)
        else:
            self.controller.on_keyboard_input(output)
        return True

    def _choose_candidate(self, index: int, modifiers: Sequence[str]) -> bool:
        words = self.controller.candidate_words
        if index >= len(words):
            return False
        if "SHIFT" in modifiers:
            self.controller.on_candidate_long_click(index, words[index])
        else:
            self.controller.on_candidate_click(index, words[index])
        return True

    def _move(self, key: str) -> None:
        moves: Dict[str, Callable[[], None]] = {
            "left": self.controller.move_cursor_left,
            "right": self.controller.move_cursor_right,
            "home": self.controller.move_cursor_start,
            "end": self.controller.move_cursor_end,
            "ctrl+a": self.controller.select_all,
            "ctrl+left": self.controller.select_word_back,
            "ctrl+right": self.controller.select_word_forward,
        }
        self._external_change(moves[key])

    def _external_change(self, change: Callable[[], object]) -> None:
        old_start, old_end = self.buffer.state.selection
        change()
        new_start, new_end = self.buffer.state.selection
        if (old_start, old_end) != (new_start, new_end):
            self.controller.on_update_selection(old_start, old_end, new_start, new_end)

    def _subscribe_events(self) -> None:
        bus = self.controller.bus
        for event in (
            CANDIDATES_UPDATE,
            CANDIDATES_CLEAR,
            COMPOSING_PENDING,
            COMPOSING_RESOLVED,
            WORD_FINISHED,
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == CANDIDATES_UPDATE and isinstance(payload, tuple):
            self.hooks.show_candidates(payload)
        elif name == CANDIDATES_CLEAR:
            self.hooks.show_candidates(())
        elif name == COMPOSING_PENDING:
            self.hooks.update_status("composing")
        elif name == COMPOSING_RESOLVED:
            self.hooks.update_status(f"composing:{payload}")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "cursor": self.buffer.cursor,
            "selection": self.buffer.state.selection,
            "composing": self.buffer.state.composing,
            "pending": self.controller.composing.is_pending(),
            "version": self.buffer.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        parts.extend(f"{key}={value!r}" for key, value in snapshot.items())
        self.hooks.log(" ".join(parts))


__all__ = ["TextualImeAdapter", "TextualImeHooks", "CANDIDATE_KEYS"]
