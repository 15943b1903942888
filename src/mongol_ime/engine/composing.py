"""The single pending preview string from a long-press glyph choice.

State is explicit: :data:`EMPTY` or a :class:`Pending` holding both the
final text and the preview form the host is showing. Every transition goes
through :class:`ComposingStateTracker`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from mongol_ime.host import HostConnection
from mongol_ime.runtime import telemetry
from mongol_ime.script.classifier import is_mongolian

from .bus import COMPOSING_PENDING, COMPOSING_RESOLVED, EngineBus
from .composition import CompositionEngine
from .edits import EditAction

LOGGER_NAME = "mongol_ime.engine.composing"

UNKNOWN_ANCHOR = -1


@dataclass(frozen=True, slots=True)
class Empty:
    pass


@dataclass(frozen=True, slots=True)
class Pending:
    text: str
    preview: str
    anchor: int = UNKNOWN_ANCHOR


ComposingState = Union[Empty, Pending]
EMPTY = Empty()


@dataclass(frozen=True, slots=True)
class PopupChoice:
    """A long-press candidate: final ``unicode`` plus optional preview form."""

    unicode: str
    composing: str = ""

    @property
    def has_preview(self) -> bool:
        return bool(self.composing) and self.composing != self.unicode


class ComposingStateTracker:
    def __init__(
        self, composer: CompositionEngine, *, bus: Optional[EngineBus] = None
    ) -> None:
        self._composer = composer
        self._bus = bus
        self._state: ComposingState = EMPTY

    @property
    def state(self) -> ComposingState:
        return self._state

    @property
    def pending(self) -> Optional[Pending]:
        return self._state if isinstance(self._state, Pending) else None

    def is_pending(self) -> bool:
        return isinstance(self._state, Pending)

    def reset(self) -> None:
        """Forget any preview without touching the host (new connection)."""

        self._state = EMPTY

    def on_input(self, is_mongolian_input: bool, connection: HostConnection) -> None:
        """Resolve a pending preview before new input is handled.

        Mongolian input continues the word, so the final text replaces the
        preview. Anything else ends the word and the host keeps the preview
        as shown.
        """

        pending = self.pending
        if pending is None:
            return
        if is_mongolian_input:
            self._composer.commit_verbatim(pending.text, connection)
            resolution = "committed"
        else:
            connection.finish_composing_text()
            resolution = "finished"
        self._transition(EMPTY, resolution)

    def on_popup_choice(
        self, choice: Optional[PopupChoice], connection: HostConnection
    ) -> Optional[EditAction]:
        if choice is None or not choice.unicode:
            return None
        self.on_input(is_mongolian(choice.unicode[0]), connection)
        if not choice.has_preview:
            return self._composer.commit(choice.unicode, connection)
        if not connection.connected:
            return None
        connection.set_composing_text(choice.composing)
        self._transition(
            Pending(
                text=choice.unicode,
                preview=choice.composing,
                anchor=_cursor_offset(connection),
            ),
            "pending",
        )
        return None

    def on_selection_changed(
        self, new_start: int, new_end: int, connection: HostConnection
    ) -> bool:
        """Drop the preview if the cursor moved away from it.

        Returns True when a pending preview was finalized.
        """

        pending = self.pending
        if pending is None:
            return False
        if new_start == pending.anchor and new_end == pending.anchor:
            return False
        connection.finish_composing_text()
        self._transition(EMPTY, "moved")
        return True

    def commit_pending(self, connection: HostConnection) -> bool:
        """Write the final text of a pending preview into the buffer."""

        pending = self.pending
        if pending is None:
            return False
        self._composer.commit_verbatim(pending.text, connection)
        self._transition(EMPTY, "committed")
        return True

    def _transition(self, state: ComposingState, reason: str) -> None:
        self._state = state
        telemetry.record_event(
            "composing.transition",
            data={"state": type(state).__name__, "reason": reason},
            logger_name=LOGGER_NAME,
        )
        if self._bus is None:
            return
        if isinstance(state, Pending):
            self._bus.emit(COMPOSING_PENDING, state)
        else:
            self._bus.emit(COMPOSING_RESOLVED, reason)


def _cursor_offset(connection: HostConnection) -> int:
    extracted = connection.extracted_text()
    if extracted is None:
        return UNKNOWN_ANCHOR
    return extracted.absolute_selection[1]


__all__ = [
    "ComposingState",
    "ComposingStateTracker",
    "EMPTY",
    "Empty",
    "Pending",
    "PopupChoice",
    "UNKNOWN_ANCHOR",
]
