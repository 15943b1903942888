"""ImeController: the façade a host keyboard talks to.

It owns the composition, backspace, word-scanning and composing components,
the candidate list, and the fail-safe host connection. Hosts forward four
kinds of events (keyboard input, popup choice, backspace, selection change)
plus candidate clicks; everything is handled synchronously to completion.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from mongol_ime.host import ContextOracle, DataSource, HostConnection
from mongol_ime.runtime import telemetry
from mongol_ime.runtime.config import EngineConfig
from mongol_ime.script.classifier import is_mongolian, is_space

from . import navigation
from .backspace import BackspaceEngine, BackspacePlan
from .bus import WORD_FINISHED, EngineBus
from .candidates import CandidateList
from .composing import ComposingStateTracker, PopupChoice
from .composition import CompositionEngine
from .edits import EditAction
from .rules import RuleSet
from .words import WordBoundaryScanner

LOGGER_NAME = "mongol_ime.engine.controller"


def _word_at(words: Sequence[str], index: int) -> str:
    return words[index] if 0 <= index < len(words) else ""


class ImeController:
    def __init__(
        self,
        oracle: Optional[ContextOracle] = None,
        *,
        data_source: Optional[DataSource] = None,
        config: Optional[EngineConfig] = None,
        composition_rules: Optional[RuleSet] = None,
        bus: Optional[EngineBus] = None,
    ) -> None:
        self.config = config or EngineConfig.from_env()
        self.bus = bus or EngineBus()
        self.connection = HostConnection(oracle)
        self.data_source = data_source
        self.composer = CompositionEngine(composition_rules)
        self.candidates = CandidateList(self.bus)
        self.composing = ComposingStateTracker(self.composer, bus=self.bus)
        self.words = WordBoundaryScanner(lookback_chars=self.config.lookback_chars)
        self.backspacer = BackspaceEngine(
            self.composing,
            self.candidates,
            window=self.config.backspace_window,
        )
        self.logger = telemetry.get_logger(LOGGER_NAME)

    # -- wiring -----------------------------------------------------------

    def set_input_connection(self, oracle: Optional[ContextOracle]) -> None:
        self.connection.attach(oracle)
        self.composing.reset()

    def set_data_source(self, data_source: Optional[DataSource]) -> None:
        self.data_source = data_source

    # -- keyboard events ----------------------------------------------------

    def on_keyboard_input(self, text: str) -> Optional[EditAction]:
        if not text:
            return None
        with telemetry.span(
            "ime::input",
            logger_name=LOGGER_NAME,
            component="ime",
            metadata={"text": text},
        ):
            self._check_for_finished_word(text)
            self.composing.on_input(is_mongolian(text[0]), self.connection)
            edit = self.composer.commit(text, self.connection)
            self._update_candidates()
            return edit

    def on_key_popup_chosen(self, choice: Optional[PopupChoice]) -> Optional[EditAction]:
        if choice is None or not choice.unicode or not self.connection.connected:
            return None
        if not choice.has_preview:
            return self.on_keyboard_input(choice.unicode)
        with telemetry.span(
            "ime::popup",
            logger_name=LOGGER_NAME,
            component="ime",
            metadata={"unicode": choice.unicode, "preview": choice.composing},
        ):
            self._check_for_finished_word(choice.unicode)
            return self.composing.on_popup_choice(choice, self.connection)

    def on_backspace(self) -> BackspacePlan:
        return self.backspacer.backspace(self.connection)

    def on_update_selection(
        self, old_start: int, old_end: int, new_start: int, new_end: int
    ) -> None:
        """Host notification that the selection moved (by any means)."""

        with telemetry.span(
            "ime::selection",
            logger_name=LOGGER_NAME,
            metadata={"old": (old_start, old_end), "new": (new_start, new_end)},
        ):
            self.composing.on_selection_changed(new_start, new_end, self.connection)
            self.candidates.clear()

    # -- context queries ------------------------------------------------------

    def text_before_cursor(self, count: int) -> str:
        return self.connection.text_before_cursor(count)

    def text_after_cursor(self, count: int) -> str:
        return self.connection.text_after_cursor(count)

    def previous_mongol_words(
        self, count: int, allow_single_space_before_cursor: bool
    ) -> List[str]:
        return self.words.previous_words(
            count, allow_single_space_before_cursor, self.connection
        )

    def previous_mongol_word(self, allow_single_space_before_cursor: bool) -> str:
        return self.words.previous_word(
            allow_single_space_before_cursor, self.connection
        )

    # -- candidates -----------------------------------------------------------

    @property
    def candidate_words(self) -> tuple[str, ...]:
        return self.candidates.words

    def set_candidates(self, words: Sequence[str]) -> None:
        self.candidates.set(words)

    def clear_candidates(self) -> None:
        self.candidates.clear()

    def remove_candidate(self, index: int) -> Optional[str]:
        return self.candidates.remove(index)

    def on_candidate_click(self, position: int, word: str) -> None:
        if not word:
            return
        with telemetry.span(
            "ime::candidate_click",
            logger_name=LOGGER_NAME,
            component="ime",
            metadata={"position": position, "word": word},
        ):
            current = self.previous_mongol_word(False)
            if current and word.startswith(current):
                self._replace_word_before_cursor(word)
            else:
                self._insert_following_word(word)
            if self.data_source is None:
                return
            words = self.previous_mongol_words(2, False)
            self.data_source.on_candidate_click(position, word, _word_at(words, 1))

    def on_candidate_long_click(self, position: int, word: str) -> None:
        if self.data_source is None or not word:
            return
        words = self.previous_mongol_words(2, False)
        self.data_source.on_candidate_long_click(position, word, _word_at(words, 1))

    # -- navigation -------------------------------------------------------------

    def move_cursor_left(self) -> None:
        navigation.move_cursor_left(self.connection)

    def move_cursor_right(self) -> None:
        navigation.move_cursor_right(self.connection)

    def move_cursor_start(self) -> None:
        navigation.move_cursor_start(self.connection)

    def move_cursor_end(self) -> None:
        navigation.move_cursor_end(self.connection)

    def select_all(self) -> None:
        navigation.select_all(self.connection)

    def select_word_back(self) -> None:
        navigation.select_word_back(self.connection)

    def select_word_forward(self) -> None:
        navigation.select_word_forward(self.connection)

    # -- internals ----------------------------------------------------------------

    def _check_for_finished_word(self, text: str) -> None:
        if self.data_source is None:
            return
        if is_mongolian(text[0]) or not is_mongolian(self.connection.previous_char()):
            return
        words = self.previous_mongol_words(2, False)
        word, previous = _word_at(words, 0), _word_at(words, 1)
        telemetry.record_event(
            "word.finished",
            data={"word": word, "previous": previous},
            logger_name=LOGGER_NAME,
        )
        self.bus.emit(WORD_FINISHED, (word, previous))
        self.data_source.on_word_finished(word, previous)

    def _update_candidates(self) -> None:
        if self.data_source is None:
            return
        word = self.previous_mongol_word(False)
        if not word:
            self.candidates.clear()
            return
        self.data_source.on_request_words_starting_with(word)

    def _replace_word_before_cursor(self, word: str) -> None:
        length = self.words.current_word_length(self.connection)
        EditAction(insert=word, delete_before=length, rule="candidate").apply(
            self.connection
        )

    def _insert_following_word(self, word: str) -> None:
        previous = self.connection.previous_char()
        if not previous or is_space(previous):
            self.composer.commit(word, self.connection)
        else:
            self.composer.commit(" " + word, self.connection)


__all__ = ["ImeController"]
