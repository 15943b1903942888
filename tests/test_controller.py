from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from mongol_ime.buffer import EditBuffer
from mongol_ime.engine import ImeController, PopupChoice
from mongol_ime.engine.bus import WORD_FINISHED
from mongol_ime.runtime import EngineConfig
from mongol_ime.script import codes

WORD = codes.BA + codes.A
OTHER = codes.NA + codes.O + codes.MA


class RecordingDataSource:
    """Remembers every callback and answers prefix requests from a list."""

    def __init__(
        self, controller: Optional[ImeController] = None, words: Sequence[str] = ()
    ) -> None:
        self.controller = controller
        self.words = list(words)
        self.calls: List[Tuple[object, ...]] = []

    def on_request_words_starting_with(self, prefix: str) -> None:
        self.calls.append(("request", prefix))
        if self.controller is not None:
            self.controller.set_candidates(
                [word for word in self.words if word.startswith(prefix)]
            )

    def on_word_finished(self, word: str, previous_word: str) -> None:
        self.calls.append(("finished", word, previous_word))

    def on_candidate_click(self, position: int, word: str, previous_word: str) -> None:
        self.calls.append(("click", position, word, previous_word))

    def on_candidate_long_click(
        self, position: int, word: str, previous_word: str
    ) -> None:
        self.calls.append(("long_click", position, word, previous_word))


def make_controller(
    text: str = "", *, words: Sequence[str] = ()
) -> Tuple[ImeController, EditBuffer, RecordingDataSource]:
    buffer = EditBuffer(text)
    controller = ImeController(buffer, config=EngineConfig())
    source = RecordingDataSource(controller, words)
    controller.set_data_source(source)
    return controller, buffer, source


def type_text(controller: ImeController, *tokens: str) -> None:
    for token in tokens:
        controller.on_keyboard_input(token)


def test_keyboard_input_applies_composition_rules() -> None:
    controller, buffer, _ = make_controller()
    type_text(controller, codes.NA, codes.A, codes.A)
    assert buffer.text == codes.NA + codes.MVS + codes.A


def test_keyboard_input_requests_candidates_for_current_word() -> None:
    controller, _, source = make_controller(words=[WORD + codes.NA])
    type_text(controller, codes.BA, codes.A)

    assert source.calls == [("request", codes.BA), ("request", WORD)]
    assert controller.candidate_words == (WORD + codes.NA,)


def test_input_after_space_clears_candidates() -> None:
    controller, _, _ = make_controller(words=[WORD + codes.NA])
    type_text(controller, codes.BA, codes.A)
    type_text(controller, " ")
    assert controller.candidate_words == ()


def test_word_finished_fires_when_leaving_mongolian() -> None:
    controller, _, source = make_controller(OTHER + " " + WORD)
    finished: List[object] = []
    controller.bus.subscribe(WORD_FINISHED, finished.append)

    type_text(controller, " ")

    assert ("finished", WORD, OTHER) in source.calls
    assert finished == [(WORD, OTHER)]


def test_word_finished_does_not_fire_inside_a_word() -> None:
    controller, _, source = make_controller(WORD)
    type_text(controller, codes.NA)
    assert not [call for call in source.calls if call[0] == "finished"]


def test_popup_choice_with_preview_goes_pending() -> None:
    controller, buffer, _ = make_controller(WORD)
    preview = codes.GA + codes.ZWJ
    controller.on_key_popup_chosen(PopupChoice(unicode=codes.GA + codes.FVS1, composing=preview))

    assert controller.composing.is_pending()
    assert buffer.text == WORD + preview

    type_text(controller, codes.A)

    assert not controller.composing.is_pending()
    assert buffer.text == WORD + codes.GA + codes.FVS1 + codes.A


def test_popup_choice_without_preview_is_keyboard_input() -> None:
    controller, buffer, source = make_controller(codes.NA + codes.A)
    controller.on_key_popup_chosen(PopupChoice(unicode=codes.A))

    assert buffer.text == codes.NA + codes.MVS + codes.A
    assert source.calls[-1][0] == "request"


def test_popup_choice_is_ignored_without_connection() -> None:
    controller = ImeController(config=EngineConfig())
    assert controller.on_key_popup_chosen(PopupChoice(unicode=codes.A)) is None
    assert controller.on_key_popup_chosen(None) is None


def test_backspace_delegates_to_backspace_engine() -> None:
    controller, buffer, _ = make_controller(codes.NA + codes.MVS + codes.A)
    plan = controller.on_backspace()

    assert plan.steps == ("grapheme", "trailing_mvs")
    assert buffer.text == codes.NA


def test_selection_update_clears_candidates_and_drops_stale_preview() -> None:
    controller, buffer, _ = make_controller(words=[WORD + codes.NA])
    type_text(controller, codes.BA, codes.A)
    controller.on_key_popup_chosen(PopupChoice(unicode=codes.A + codes.FVS1, composing=codes.A + codes.ZWJ))
    buffer.set_selection(0, 0)

    controller.on_update_selection(4, 4, 0, 0)

    assert controller.candidate_words == ()
    assert not controller.composing.is_pending()
    assert buffer.state.composing is None


def test_candidate_click_replaces_the_prefix_word() -> None:
    controller, buffer, source = make_controller(OTHER + " " + codes.BA)
    controller.on_candidate_click(0, WORD + codes.NA)

    assert buffer.text == OTHER + " " + WORD + codes.NA
    assert source.calls[-1] == ("click", 0, WORD + codes.NA, OTHER)


def test_candidate_click_replacement_is_one_undo_step() -> None:
    controller, buffer, _ = make_controller(codes.BA)
    controller.on_candidate_click(0, WORD)

    assert buffer.text == WORD
    assert buffer.undo()
    assert buffer.text == codes.BA


def test_candidate_click_inserts_following_word_after_space() -> None:
    controller, buffer, source = make_controller(WORD + " ")
    controller.on_candidate_click(1, OTHER)

    assert buffer.text == WORD + " " + OTHER
    assert source.calls[-1] == ("click", 1, OTHER, WORD)


def test_candidate_click_adds_separating_space() -> None:
    controller, buffer, _ = make_controller(WORD + codes.MONGOLIAN_FULL_STOP)
    controller.on_candidate_click(0, OTHER)
    assert buffer.text == WORD + codes.MONGOLIAN_FULL_STOP + " " + OTHER


def test_candidate_click_into_empty_buffer() -> None:
    controller, buffer, _ = make_controller()
    controller.on_candidate_click(0, OTHER)
    assert buffer.text == OTHER


def test_candidate_long_click_only_notifies() -> None:
    controller, buffer, source = make_controller(OTHER + " " + WORD)
    controller.on_candidate_long_click(2, WORD)

    assert buffer.text == OTHER + " " + WORD
    assert source.calls == [("long_click", 2, WORD, OTHER)]


def test_empty_candidate_word_is_a_noop() -> None:
    controller, buffer, source = make_controller(WORD)
    controller.on_candidate_click(0, "")
    controller.on_candidate_long_click(0, "")

    assert buffer.text == WORD
    assert source.calls == []


def test_candidate_list_management() -> None:
    controller, _, _ = make_controller()
    controller.set_candidates([WORD, OTHER])

    assert controller.remove_candidate(0) == WORD
    assert controller.remove_candidate(5) is None
    assert controller.candidate_words == (OTHER,)
    controller.clear_candidates()
    assert controller.candidate_words == ()


def test_previous_words_and_context_queries() -> None:
    controller, _, _ = make_controller(OTHER + " " + WORD + " ")

    assert controller.previous_mongol_word(False) == ""
    assert controller.previous_mongol_word(True) == WORD
    assert controller.previous_mongol_words(2, True) == [WORD, OTHER]
    assert controller.text_before_cursor(2) == codes.A + " "
    assert controller.text_after_cursor(5) == ""


def test_switching_connection_resets_composing() -> None:
    controller, _, _ = make_controller(WORD)
    controller.on_key_popup_chosen(PopupChoice(unicode=codes.GA + codes.FVS1, composing=codes.GA + codes.ZWJ))
    other = EditBuffer(OTHER)

    controller.set_input_connection(other)
    type_text(controller, codes.A)

    assert not controller.composing.is_pending()
    assert other.text == OTHER + codes.A


def test_controller_without_host_is_silent() -> None:
    controller = ImeController(config=EngineConfig())

    assert controller.on_keyboard_input(codes.A) is None
    assert controller.on_backspace().deletions == 0
    assert controller.previous_mongol_words(2, False) == []
    assert controller.text_before_cursor(3) == ""
    controller.move_cursor_left()
    controller.on_update_selection(0, 0, 1, 1)


def test_disconnected_host_degrades_silently() -> None:
    controller, buffer, _ = make_controller(WORD)
    buffer.disconnect()

    controller.on_keyboard_input(codes.A)
    controller.on_candidate_click(0, OTHER)

    assert buffer.text == WORD


def test_navigation_delegates() -> None:
    controller, buffer, _ = make_controller(WORD + " " + OTHER)
    controller.move_cursor_start()
    assert buffer.cursor == 0
    controller.move_cursor_right()
    assert buffer.cursor == 1
    controller.select_word_forward()
    assert buffer.state.selection == (1, 2)
    controller.move_cursor_end()
    assert buffer.cursor == len(buffer.text)
    controller.select_word_back()
    assert buffer.state.selection == (3, 6)
    controller.select_all()
    assert buffer.state.selection == (0, 6)
    controller.move_cursor_left()
    assert buffer.cursor == 0
