from __future__ import annotations

from typing import Optional

import pytest

from mongol_ime.buffer import EditBuffer
from mongol_ime.engine import CompositionEngine, EditAction, Rule, RuleContext
from mongol_ime.engine.composition import default_composition_rules
from mongol_ime.host import HostConnection
from mongol_ime.script import codes


def make_connection(
    text: str = "", cursor: Optional[int] = None
) -> tuple[EditBuffer, HostConnection]:
    buffer = EditBuffer(text, cursor=cursor)
    return buffer, HostConnection(buffer)


def commit_all(*tokens: str, text: str = "") -> EditBuffer:
    buffer, connection = make_connection(text)
    engine = CompositionEngine()
    for token in tokens:
        engine.commit(token, connection)
    return buffer


def test_default_rule_inserts_token_unchanged() -> None:
    buffer, connection = make_connection(codes.BA, cursor=1)
    edit = CompositionEngine().commit(codes.A, connection)

    assert edit == EditAction(insert=codes.A)
    assert buffer.text == codes.BA + codes.A
    assert buffer.cursor == 2


def test_default_rule_inserts_in_the_middle_of_text() -> None:
    buffer, connection = make_connection(codes.BA + codes.NA, cursor=1)
    CompositionEngine().commit(codes.O, connection)

    assert buffer.text == codes.BA + codes.O + codes.NA
    assert buffer.cursor == 2


def test_nnbs_token_swallows_preceding_space() -> None:
    buffer = commit_all(codes.NNBS + codes.U + codes.NA, text=codes.BA + " ")
    assert buffer.text == codes.BA + codes.NNBS + codes.U + codes.NA


def test_nnbs_token_swallows_preceding_nnbs() -> None:
    buffer = commit_all(codes.NNBS, text=codes.BA + codes.NNBS)
    assert buffer.text == codes.BA + codes.NNBS


def test_nnbs_token_after_letter_is_inserted_plainly() -> None:
    buffer = commit_all(codes.NNBS, text=codes.BA)
    assert buffer.text == codes.BA + codes.NNBS


@pytest.mark.parametrize("consonant", sorted(codes.MVS_PRECEDING_CONSONANTS))
@pytest.mark.parametrize("vowel", [codes.A, codes.E])
def test_doubled_vowel_after_trigger_consonant_inserts_mvs(
    consonant: str, vowel: str
) -> None:
    buffer = commit_all(consonant, vowel, vowel)
    assert buffer.text == consonant + codes.MVS + vowel


def test_doubled_vowel_after_other_consonant_is_literal() -> None:
    buffer = commit_all(codes.BA, codes.A, codes.A)
    assert buffer.text == codes.BA + codes.A + codes.A


def test_mvs_shortcut_needs_the_same_vowel() -> None:
    buffer = commit_all(codes.NA, codes.A, codes.E)
    assert buffer.text == codes.NA + codes.A + codes.E


def test_mvs_shortcut_ignores_other_vowels() -> None:
    buffer = commit_all(codes.NA, codes.I, codes.I)
    assert buffer.text == codes.NA + codes.I + codes.I


def test_comma_after_comma_becomes_full_stop() -> None:
    buffer = commit_all(codes.MONGOLIAN_COMMA, text=codes.BA + codes.MONGOLIAN_COMMA)
    assert buffer.text == codes.BA + codes.MONGOLIAN_FULL_STOP + " "


def test_comma_after_comma_and_space_becomes_full_stop() -> None:
    buffer = commit_all(codes.MONGOLIAN_COMMA, codes.MONGOLIAN_COMMA, text=codes.BA)
    assert buffer.text == codes.BA + " " + codes.MONGOLIAN_FULL_STOP + " "


def test_comma_after_space_gets_trailing_space_only() -> None:
    buffer = commit_all(codes.MONGOLIAN_COMMA, text=codes.BA + " ")
    assert buffer.text == codes.BA + " " + codes.MONGOLIAN_COMMA + " "


def test_comma_after_letter_is_padded() -> None:
    buffer = commit_all(codes.MONGOLIAN_COMMA, text=codes.BA)
    assert buffer.text == codes.BA + " " + codes.MONGOLIAN_COMMA + " "


def test_comma_at_buffer_start_gets_trailing_space_only() -> None:
    buffer = commit_all(codes.MONGOLIAN_COMMA)
    assert buffer.text == codes.MONGOLIAN_COMMA + " "


def test_punctuation_is_padded_unless_preceded_by_space() -> None:
    padded = commit_all(codes.MONGOLIAN_FULL_STOP, text=codes.BA)
    after_space = commit_all(codes.MONGOLIAN_COLON, text=codes.BA + codes.NNBS)

    assert padded.text == codes.BA + " " + codes.MONGOLIAN_FULL_STOP + " "
    assert after_space.text == codes.BA + codes.NNBS + codes.MONGOLIAN_COLON + " "


def test_vertical_punctuation_is_padded() -> None:
    mark = chr(0xFE15)
    buffer = commit_all(mark, text=codes.BA)
    assert buffer.text == codes.BA + " " + mark + " "


def test_zwj_between_letters_forces_a_visible_break() -> None:
    buffer, connection = make_connection(codes.BA + codes.NA, cursor=1)
    CompositionEngine().commit(codes.ZWJ, connection)

    assert buffer.text == codes.BA + codes.ZWJ + " " + codes.ZWJ + codes.NA
    assert buffer.cursor == 4


def test_zwj_next_to_existing_zwj_is_inserted_bare() -> None:
    buffer, connection = make_connection(codes.BA + codes.ZWJ + codes.NA, cursor=2)
    CompositionEngine().commit(codes.ZWJ, connection)
    assert buffer.text == codes.BA + codes.ZWJ + codes.ZWJ + codes.NA


def test_zwj_at_end_of_word_is_inserted_bare() -> None:
    buffer = commit_all(codes.ZWJ, text=codes.BA)
    assert buffer.text == codes.BA + codes.ZWJ


def test_i_after_vowel_and_ya_uses_hooked_form() -> None:
    buffer = commit_all(codes.I, text=codes.BA + codes.A + codes.YA)
    assert buffer.text == codes.BA + codes.A + codes.YA + codes.FVS1 + codes.I


def test_i_after_other_pair_is_unmodified() -> None:
    buffer = commit_all(codes.I, text=codes.BA + codes.YA)
    assert buffer.text == codes.BA + codes.YA + codes.I


def test_each_commit_is_one_undo_step() -> None:
    buffer = commit_all(codes.NA, codes.A)
    before = buffer.text

    CompositionEngine().commit(codes.A, HostConnection(buffer))
    assert buffer.text == codes.NA + codes.MVS + codes.A

    assert buffer.undo()
    assert buffer.text == before


def test_empty_token_is_a_noop() -> None:
    buffer, connection = make_connection(codes.BA)
    assert CompositionEngine().commit("", connection) is None
    assert buffer.text == codes.BA
    assert buffer.version == 0


def test_commit_without_host_returns_none() -> None:
    assert CompositionEngine().commit(codes.A, HostConnection()) is None


def test_plan_does_not_touch_the_buffer() -> None:
    buffer, connection = make_connection(codes.NA + codes.A)
    edit = CompositionEngine().plan(codes.A, connection)

    assert edit == EditAction(insert=codes.MVS + codes.A, delete_before=1, rule="mvs_shortcut")
    assert buffer.text == codes.NA + codes.A


def test_rules_can_be_replaced_by_the_caller() -> None:
    rules = default_composition_rules()
    rules.unregister("hooked_ya")
    rules.register(
        Rule(
            "shout",
            lambda context: context.token == "!",
            lambda context: EditAction(insert="!!", rule="shout"),
        ),
        before="nnbs",
    )
    buffer, connection = make_connection(codes.A + codes.YA)
    engine = CompositionEngine(rules)

    engine.commit(codes.I, connection)
    edit = engine.commit("!", connection)

    assert buffer.text == codes.A + codes.YA + codes.I + "!!"
    assert edit is not None and edit.rule == "shout"


def test_rule_context_exposes_neighbours() -> None:
    context = RuleContext(token=codes.A, before=codes.BA + codes.NA, after=codes.O)
    assert context.previous_char == codes.NA
    assert context.next_char == codes.O
    assert context.first_char == codes.A
