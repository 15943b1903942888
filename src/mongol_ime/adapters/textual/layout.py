"""Latin keyboard layout used by the Textual demo host.

Lowercase keys type letters, punctuation keys type Mongolian punctuation,
and a handful of symbol keys type the invisible controls. A few uppercase
keys stand in for a long-press popup and offer a glyph variant together
with its preview form.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Union

from mongol_ime.engine import PopupChoice
from mongol_ime.script import codes

KeyOutput = Union[str, PopupChoice]

LETTERS: Dict[str, str] = {
    "a": codes.A,
    "e": codes.E,
    "i": codes.I,
    "o": codes.O,
    "u": codes.U,
    "q": codes.OE,
    "v": codes.UE,
    "n": codes.NA,
    "b": codes.BA,
    "p": codes.PA,
    "h": codes.QA,
    "g": codes.GA,
    "m": codes.MA,
    "l": codes.LA,
    "s": codes.SA,
    "x": codes.SHA,
    "t": codes.TA,
    "d": codes.DA,
    "c": codes.CHA,
    "j": codes.JA,
    "y": codes.YA,
    "r": codes.RA,
    "w": codes.WA,
    "f": codes.FA,
    "k": codes.KA,
    "z": codes.ZA,
}

PUNCTUATION: Dict[str, str] = {
    ",": codes.MONGOLIAN_COMMA,
    ".": codes.MONGOLIAN_FULL_STOP,
    ":": codes.MONGOLIAN_COLON,
    ";": codes.MONGOLIAN_ELLIPSIS,
    "?": codes.QUESTION_EXCLAMATION_MARK,
    "*": codes.REFERENCE_MARK,
}

CONTROLS: Dict[str, str] = {
    "_": codes.NNBS,
    "`": codes.MVS,
    "!": codes.FVS1,
    "@": codes.FVS2,
    "#": codes.FVS3,
    "^": codes.ZWJ,
    "~": codes.MONGOLIAN_NIRUGU,
}

POPUPS: Dict[str, PopupChoice] = {
    "A": PopupChoice(unicode=codes.A + codes.FVS1, composing=codes.A + codes.FVS1 + codes.ZWJ),
    "G": PopupChoice(unicode=codes.GA + codes.FVS1, composing=codes.GA + codes.FVS1 + codes.ZWJ),
    "Y": PopupChoice(unicode=codes.YA + codes.FVS1, composing=codes.YA + codes.FVS1),
    "I": PopupChoice(unicode=codes.I),
}


def default_layout() -> Dict[str, KeyOutput]:
    layout: Dict[str, KeyOutput] = {}
    layout.update(LETTERS)
    layout.update(PUNCTUATION)
    layout.update(CONTROLS)
    layout.update(POPUPS)
    return layout


def translate(
    character: str, layout: Optional[Mapping[str, KeyOutput]] = None
) -> KeyOutput:
    """Map one typed character; unmapped characters pass through unchanged."""

    table = layout if layout is not None else DEFAULT_LAYOUT
    return table.get(character, character)


DEFAULT_LAYOUT: Mapping[str, KeyOutput] = default_layout()

__all__ = ["KeyOutput", "DEFAULT_LAYOUT", "default_layout", "translate"]
