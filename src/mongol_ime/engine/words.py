"""Find the Mongolian words that precede the cursor."""

from __future__ import annotations

from typing import List

from mongol_ime.host import HostConnection
from mongol_ime.runtime import telemetry
from mongol_ime.runtime.config import DEFAULT_LOOKBACK_CHARS
from mongol_ime.script import codes
from mongol_ime.script.classifier import is_mongolian

LOGGER_NAME = "mongol_ime.engine.words"


def word_start(text: str, end: int) -> int:
    """Walk back from ``end`` over Mongolian characters.

    An NNBS is taken into the word and ends the walk, since it marks where
    the lexical word really starts. Anything else ends the walk without
    being taken.
    """

    start = end
    for index in range(end - 1, -1, -1):
        char = text[index]
        if is_mongolian(char):
            start = index
        elif char == codes.NNBS:
            start = index
            break
        else:
            break
    return start


def is_separator_at(text: str, index: int) -> bool:
    """True for a space/NNBS at ``index`` that has a Mongolian char before it."""

    if index <= 0 or index >= len(text):
        return False
    return text[index] in codes.SPACES and is_mongolian(text[index - 1])


def scan_previous_words(
    text: str, count: int, allow_single_space_before_cursor: bool
) -> List[str]:
    """Split the tail of ``text`` into ``count`` words, nearest first.

    The result always has ``count`` entries when ``text`` is non-empty; a
    position with no word yields ``""`` so callers can index it safely.
    """

    words: List[str] = []
    if not text or count <= 0:
        return words

    end = len(text)
    if allow_single_space_before_cursor and is_separator_at(text, end - 1):
        end -= 1

    for _ in range(count):
        start = word_start(text, end)
        words.append(text[start:end])
        end = start
        if is_separator_at(text, end - 1):
            end -= 1
    return words


class WordBoundaryScanner:
    """Queries the live host buffer on every call; nothing is cached."""

    def __init__(self, *, lookback_chars: int = DEFAULT_LOOKBACK_CHARS) -> None:
        self.lookback_chars = lookback_chars

    def previous_words(
        self,
        count: int,
        allow_single_space_before_cursor: bool,
        connection: HostConnection,
    ) -> List[str]:
        with telemetry.span(
            "words::previous",
            logger_name=LOGGER_NAME,
            metadata={"count": count, "allow_space": allow_single_space_before_cursor},
        ):
            text = connection.text_before_cursor(self.lookback_chars)
            return scan_previous_words(text, count, allow_single_space_before_cursor)

    def previous_word(
        self, allow_single_space_before_cursor: bool, connection: HostConnection
    ) -> str:
        words = self.previous_words(1, allow_single_space_before_cursor, connection)
        return words[0] if words else ""

    def current_word_length(self, connection: HostConnection) -> int:
        """Length of the word touching the cursor (no space skipped)."""

        text = connection.text_before_cursor(self.lookback_chars)
        return len(text) - word_start(text, len(text))


__all__ = [
    "WordBoundaryScanner",
    "is_separator_at",
    "scan_previous_words",
    "word_start",
]
