"""Commit-time composition rules for Mongolian input.

Each keystroke or popup choice becomes exactly one :class:`EditAction`,
chosen by the first rule whose guard matches the characters around the
cursor:

1. ``nnbs``            -- a token starting with NNBS swallows one space/NNBS before it
2. ``mvs_shortcut``    -- typing A/E again after consonant + A/E inserts MVS instead
3. ``comma``           -- comma after comma (or comma + space) becomes a full stop
4. ``spaced_punct``    -- Mongolian punctuation is padded with spaces
5. ``zwj_split``       -- a lone ZWJ between two letters becomes ZWJ SPACE ZWJ
6. ``hooked_ya``       -- I after vowel + YA gets FVS1 for the hooked form
7. default             -- insert the token unchanged
"""

from __future__ import annotations

from typing import Optional

from mongol_ime.host import HostConnection
from mongol_ime.runtime import telemetry
from mongol_ime.script import codes
from mongol_ime.script.classifier import (
    JoiningPosition,
    classify_joining_position,
    is_mvs_preceding_consonant,
    is_space,
    is_vowel,
    needs_surrounding_space,
)

from .edits import EditAction
from .rules import Rule, RuleContext, RuleSet

LOGGER_NAME = "mongol_ime.engine.composition"

CONTEXT_BEFORE = 2
CONTEXT_AFTER = 1

FULL_STOP_AND_SPACE = codes.MONGOLIAN_FULL_STOP + codes.SPACE


def _starts_with_nnbs(context: RuleContext) -> bool:
    return context.first_char == codes.NNBS


def _join_with_nnbs(context: RuleContext) -> EditAction:
    delete = 1 if is_space(context.previous_char) else 0
    return EditAction(insert=context.token, delete_before=delete, rule="nnbs")


def _repeats_vowel_after_mvs_consonant(context: RuleContext) -> bool:
    if context.token not in (codes.A, codes.E):
        return False
    before = context.before
    return (
        len(before) >= 2
        and is_mvs_preceding_consonant(before[-2])
        and before[-1] == context.token
    )


def _separate_vowel(context: RuleContext) -> EditAction:
    return EditAction(
        insert=codes.MVS + context.token, delete_before=1, rule="mvs_shortcut"
    )


def _is_comma(context: RuleContext) -> bool:
    return context.token == codes.MONGOLIAN_COMMA


def _substitute_comma(context: RuleContext) -> EditAction:
    previous = context.previous_char
    if previous == codes.MONGOLIAN_COMMA:
        return EditAction(insert=FULL_STOP_AND_SPACE, delete_before=1, rule="comma")
    if previous == codes.SPACE:
        if context.before[-2:] == codes.MONGOLIAN_COMMA + codes.SPACE:
            return EditAction(insert=FULL_STOP_AND_SPACE, delete_before=2, rule="comma")
        return EditAction(insert=context.token + codes.SPACE, rule="comma")
    return _spaced_edit(context, rule="comma")


def _needs_surrounding_space(context: RuleContext) -> bool:
    return needs_surrounding_space(context.first_char)


def _pad_punctuation(context: RuleContext) -> EditAction:
    return _spaced_edit(context, rule="spaced_punct")


def _spaced_edit(context: RuleContext, *, rule: str) -> EditAction:
    previous = context.previous_char
    if not previous or is_space(previous):
        return EditAction(insert=context.token + codes.SPACE, rule=rule)
    return EditAction(insert=codes.SPACE + context.token + codes.SPACE, rule=rule)


def _is_word_splitting_zwj(context: RuleContext) -> bool:
    if context.token != codes.ZWJ:
        return False
    position = classify_joining_position(context.before, context.after)
    return (
        position is JoiningPosition.MEDIAL
        and context.previous_char != codes.ZWJ
        and context.next_char != codes.ZWJ
    )


def _split_word(context: RuleContext) -> EditAction:
    return EditAction(insert=codes.ZWJ + codes.SPACE + codes.ZWJ, rule="zwj_split")


def _needs_hooked_ya(context: RuleContext) -> bool:
    # Makes the double-tooth spelling of vowel + YA + I unreachable by typing;
    # hosts that need it can unregister this rule.
    if context.token != codes.I or len(context.before) != 2:
        return False
    return is_vowel(context.before[0]) and context.before[1] == codes.YA


def _hook_ya(context: RuleContext) -> EditAction:
    return EditAction(insert=codes.FVS1 + context.token, rule="hooked_ya")


def default_composition_rules(*, logger_name: str | None = LOGGER_NAME) -> RuleSet:
    return RuleSet(
        (
            Rule(
                "nnbs",
                _starts_with_nnbs,
                _join_with_nnbs,
                "Collapse a space before an explicit NNBS join",
            ),
            Rule(
                "mvs_shortcut",
                _repeats_vowel_after_mvs_consonant,
                _separate_vowel,
                "Repeated final A/E after a trigger consonant inserts MVS",
            ),
            Rule(
                "comma",
                _is_comma,
                _substitute_comma,
                "Double comma becomes a full stop",
            ),
            Rule(
                "spaced_punct",
                _needs_surrounding_space,
                _pad_punctuation,
                "Pad Mongolian punctuation with spaces",
            ),
            Rule(
                "zwj_split",
                _is_word_splitting_zwj,
                _split_word,
                "Lone ZWJ inside a word forces a visible break",
            ),
            Rule(
                "hooked_ya",
                _needs_hooked_ya,
                _hook_ya,
                "Vowel + YA + I uses the hooked YA form",
            ),
        ),
        logger_name=logger_name,
    )


class CompositionEngine:
    """Decides and applies the edit for one committed token."""

    def __init__(self, rules: Optional[RuleSet] = None) -> None:
        self.rules = rules if rules is not None else default_composition_rules()
        self.logger = telemetry.get_logger(LOGGER_NAME)

    def plan(self, token: str, connection: HostConnection) -> Optional[EditAction]:
        """Return the edit ``commit`` would apply, without applying it."""

        if not token:
            return None
        context = RuleContext(
            token=token,
            before=connection.text_before_cursor(CONTEXT_BEFORE),
            after=connection.text_after_cursor(CONTEXT_AFTER),
        )
        match = self.rules.evaluate(context)
        if match is None:
            return EditAction(insert=token)
        return match.edit

    def commit(self, token: str, connection: HostConnection) -> Optional[EditAction]:
        with telemetry.span(
            "composition::commit",
            logger_name=LOGGER_NAME,
            component="composition",
            metadata={"token": token},
        ):
            if not connection.connected:
                return None
            with connection.batch_edit():
                edit = self.plan(token, connection)
                if edit is None:
                    return None
                edit.apply(connection)
            telemetry.record_event(
                "composition.rule",
                data={"rule": edit.rule, "insert": edit.insert, "delete": edit.delete_before},
                logger_name=LOGGER_NAME,
            )
            return edit

    def commit_verbatim(
        self, text: str, connection: HostConnection
    ) -> Optional[EditAction]:
        """Insert ``text`` exactly as given, bypassing every rule."""

        if not text or not connection.connected:
            return None
        edit = EditAction(insert=text, rule="verbatim")
        edit.apply(connection)
        return edit


__all__ = ["CompositionEngine", "default_composition_rules"]
