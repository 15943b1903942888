"""Textual demo host for the composition engine."""

from .controller import CANDIDATE_KEYS, TextualImeAdapter, TextualImeHooks
from .layout import DEFAULT_LAYOUT, default_layout, translate
from .vocabulary import DEMO_WORDS, WordListDataSource

__all__ = [
    "CANDIDATE_KEYS",
    "TextualImeAdapter",
    "TextualImeHooks",
    "DEFAULT_LAYOUT",
    "default_layout",
    "translate",
    "DEMO_WORDS",
    "WordListDataSource",
]
