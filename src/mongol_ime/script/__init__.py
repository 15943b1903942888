"""Mongolian script codepoints and classification."""

from . import codes
from .classifier import (
    JoiningPosition,
    classify_joining_position,
    is_free_variation_selector,
    is_invisible_control,
    is_joiner,
    is_mongolian,
    is_mongolian_letter,
    is_mvs_preceding_consonant,
    is_space,
    is_vowel,
    needs_surrounding_space,
)

__all__ = [
    "codes",
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
