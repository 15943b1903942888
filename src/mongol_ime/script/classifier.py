"""Pure classification helpers for Mongolian codepoints.

Every predicate accepts a one-character string, an integer codepoint, or
``None``/``""`` (no character, e.g. the cursor is at the start of the
buffer). Anything that is not a recognised character simply classifies as
"not Mongolian, not a control"; nothing here raises.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from . import codes

CharLike = Union[str, int, None]

# Letters proper: traditional script, Todo, Sibe, Manchu, Ali Gali.
_LETTER_RANGES: tuple[tuple[int, int], ...] = (
    (0x1820, 0x1878),
    (0x1880, 0x18AA),
)
# Nirugu, the three free variation selectors and the vowel separator.
_FORMAT_RANGE = (0x180A, 0x180E)


def _as_char(value: CharLike) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, int):
        if 0 <= value <= 0x10FFFF:
            return chr(value)
        return None
    if len(value) != 1:
        return None
    return value


def _codepoint(value: CharLike) -> int:
    char = _as_char(value)
    return -1 if char is None else ord(char)


def is_mongolian_letter(value: CharLike) -> bool:
    cp = _codepoint(value)
    return any(low <= cp <= high for low, high in _LETTER_RANGES)


def is_mongolian(value: CharLike) -> bool:
    """True for letters plus the in-word controls (nirugu, FVS, MVS, ZWJ).

    NNBS is not: it separates a suffix from its stem.
    """

    cp = _codepoint(value)
    if is_mongolian_letter(cp):
        return True
    low, high = _FORMAT_RANGE
    return low <= cp <= high or cp == ord(codes.ZWJ)


def is_vowel(value: CharLike) -> bool:
    return _as_char(value) in codes.VOWELS


def is_free_variation_selector(value: CharLike) -> bool:
    return _as_char(value) in codes.FREE_VARIATION_SELECTORS


def is_mvs_preceding_consonant(value: CharLike) -> bool:
    return _as_char(value) in codes.MVS_PRECEDING_CONSONANTS


def is_joiner(value: CharLike) -> bool:
    return _as_char(value) in codes.JOINERS


def is_invisible_control(value: CharLike) -> bool:
    """MVS, any FVS, ZWJ or ZWNJ: characters with no glyph of their own."""

    return _as_char(value) in codes.INVISIBLE_CONTROLS


def is_space(value: CharLike) -> bool:
    return _as_char(value) in codes.SPACES


def needs_surrounding_space(value: CharLike) -> bool:
    char = _as_char(value)
    if char is None:
        return False
    if char in codes.SPACED_PUNCTUATION:
        return True
    return codes.VERTICAL_COMMA <= char <= codes.VERTICAL_RIGHT_SQUARE_BRACKET


class JoiningPosition(str, Enum):
    """Cursive position of a letter inside a run of Mongolian text."""

    ISOLATE = "isolate"
    INITIAL = "initial"
    MEDIAL = "medial"
    FINAL = "final"


def classify_joining_position(before: str, after: str) -> JoiningPosition:
    """Position of a character sitting between ``before`` and ``after``.

    Only the character touching each side matters: the last one of
    ``before`` and the first one of ``after``.
    """

    joins_before = bool(before) and is_mongolian(before[-1])
    joins_after = bool(after) and is_mongolian(after[0])
    if joins_before and joins_after:
        return JoiningPosition.MEDIAL
    if joins_before:
        return JoiningPosition.FINAL
    if joins_after:
        return JoiningPosition.INITIAL
    return JoiningPosition.ISOLATE


__all__ = [
    "JoiningPosition",
    "classify_joining_position",
    "is_free_variation_selector",
    "is_invisible_control",
    "is_joiner",
    "is_mongolian",
    "is_mongolian_letter",
    "is_mvs_preceding_consonant",
    "is_space",
    "is_vowel",
    "needs_surrounding_space",
]
