from __future__ import annotations

from typing import List, Sequence

from mongol_ime.adapters.textual import (
    DEFAULT_LAYOUT,
    TextualImeAdapter,
    TextualImeHooks,
    WordListDataSource,
    translate,
)
from mongol_ime.buffer import EditBuffer
from mongol_ime.engine import ImeController, PopupChoice
from mongol_ime.runtime import EngineConfig
from mongol_ime.script import codes


def make_adapter(
    text: str = "", words: Sequence[str] = ()
) -> tuple[TextualImeAdapter, EditBuffer, dict[str, list]]:
    captured: dict[str, list] = {
        "buffer": [],
        "status": [],
        "candidates": [],
        "events": [],
        "log": [],
    }
    hooks = TextualImeHooks(
        update_buffer=lambda mirror: captured["buffer"].append(mirror.text),
        update_status=captured["status"].append,
        show_candidates=lambda words: captured["candidates"].append(tuple(words)),
        handle_event=lambda name, payload: captured["events"].append((name, payload)),
        log=captured["log"].append,
    )
    controller = ImeController(config=EngineConfig())
    WordListDataSource(words).bind(controller)
    buffer = EditBuffer(text)
    adapter = TextualImeAdapter(controller, buffer, hooks)
    return adapter, buffer, captured


def press(adapter: TextualImeAdapter, *chars: str) -> None:
    for char in chars:
        adapter.handle_textual_key(char, text=char)


def test_adapter_pushes_initial_snapshot_and_edits() -> None:
    adapter, buffer, captured = make_adapter()
    press(adapter, "n", "a", "a")

    assert buffer.text == codes.NA + codes.MVS + codes.A
    assert captured["buffer"][0] == ""
    assert captured["buffer"][-1] == buffer.text
    assert captured["log"]


def test_unmapped_characters_pass_through() -> None:
    adapter, buffer, _ = make_adapter()
    press(adapter, "5", "A")
    assert buffer.text.startswith("5")
    assert translate("5") == "5"
    assert isinstance(DEFAULT_LAYOUT["A"], PopupChoice)


def test_popup_key_shows_pending_status() -> None:
    adapter, buffer, captured = make_adapter(codes.BA)
    press(adapter, "G")

    assert "composing" in captured["status"]
    assert buffer.state.composing is not None

    press(adapter, "a")
    assert buffer.text == codes.BA + codes.GA + codes.FVS1 + codes.A
    assert "composing:committed" in captured["status"]


def test_candidates_are_shown_and_chosen_with_function_keys() -> None:
    word = codes.BA + codes.A + codes.YA + codes.A + codes.RA + codes.LA + codes.A
    adapter, buffer, captured = make_adapter(words=[word])
    press(adapter, "b", "a")

    assert captured["candidates"][-1] == (word,)
    assert adapter.handle_textual_key("f1")
    assert buffer.text == word
    assert captured["candidates"][-1] == ()
    assert not adapter.handle_textual_key("f2")


def test_shift_function_key_long_clicks_and_forgets_word() -> None:
    word = codes.BA + codes.A + codes.NA
    adapter, buffer, captured = make_adapter(words=[word])
    press(adapter, "b")
    adapter.handle_textual_key("f1", modifiers=("shift",))

    assert buffer.text == codes.BA
    assert captured["candidates"][-1] == ()
    assert word not in adapter.controller.data_source.words


def test_space_reports_finished_word() -> None:
    adapter, _, captured = make_adapter()
    press(adapter, "b", "a")
    adapter.handle_textual_key("space", text=" ")

    finished = [payload for name, payload in captured["events"] if name == "word.finished"]
    assert finished == [(codes.BA + codes.A, "")]
    assert codes.BA + codes.A in adapter.controller.data_source.words


def test_backspace_and_navigation_keys() -> None:
    adapter, buffer, _ = make_adapter(codes.BA + codes.A + codes.NA)
    adapter.handle_textual_key("backspace")
    assert buffer.text == codes.BA + codes.A

    adapter.handle_textual_key("home")
    assert buffer.cursor == 0
    adapter.handle_textual_key("right")
    assert buffer.cursor == 1
    adapter.handle_textual_key("ctrl+a")
    assert buffer.state.selection == (0, 2)


def test_cursor_move_drops_pending_preview() -> None:
    adapter, buffer, _ = make_adapter(codes.BA)
    press(adapter, "G")
    adapter.handle_textual_key("home")

    assert not adapter.controller.composing.is_pending()
    assert buffer.state.composing is None


def test_undo_key_restores_buffer() -> None:
    adapter, buffer, _ = make_adapter()
    press(adapter, "b", "a")
    adapter.handle_textual_key("ctrl+z")
    assert buffer.text == codes.BA
    adapter.handle_textual_key("ctrl+y")
    assert buffer.text == codes.BA + codes.A


def test_unhandled_keys_are_reported() -> None:
    adapter, buffer, _ = make_adapter()
    assert not adapter.handle_textual_key("f12")
    assert not adapter.handle_textual_key("tab", text="\t")
    assert buffer.text == ""


def test_enter_inserts_newline() -> None:
    adapter, buffer, _ = make_adapter(codes.BA)
    adapter.handle_textual_key("enter")
    assert buffer.text == codes.BA + "\n"


def test_word_list_data_source(tmp_path) -> None:
    path = tmp_path / "words.txt"
    path.write_text(codes.BA + codes.A + "\n\n" + codes.BA + codes.I + "\n", encoding="utf-8")
    source = WordListDataSource.from_file(path)

    assert source.words == [codes.BA + codes.A, codes.BA + codes.I]
    assert source.matches(codes.BA) == source.words
    assert source.matches(codes.BA + codes.A) == []
    assert not source.learn(codes.BA + codes.A)
    source.on_request_words_starting_with(codes.BA)
