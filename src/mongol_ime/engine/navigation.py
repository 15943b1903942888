"""Cursor and selection moves issued through the host connection.

Segmentation comes from ``regex``: ``\\X`` for grapheme clusters and the
UAX #29 word boundaries of ``(?wV1)\\b``. Letters keep their variation
selectors and joiners, and NNBS binds a suffix to its stem.
"""

from __future__ import annotations

from typing import List, Optional

import regex  # type: ignore[import]

from mongol_ime.host import ExtractedText, HostConnection
from mongol_ime.script.classifier import is_invisible_control

_GRAPHEME = regex.compile(r"\X")
_WORD_BOUNDARY = regex.compile(r"(?wV1)\b")


def grapheme_boundaries(text: str) -> List[int]:
    """Offsets the cursor may stop at.

    MVS is a format character, so ``\\X`` gives it a cluster of its own;
    the cursor still never stops in front of it or any other invisible
    control.
    """

    offsets = {0, *(match.end() for match in _GRAPHEME.finditer(text))}
    return [
        offset
        for offset in sorted(offsets)
        if offset in (0, len(text)) or not is_invisible_control(text[offset])
    ]


def word_boundaries(text: str) -> List[int]:
    if not text:
        return [0]
    offsets = {0, len(text)}
    offsets.update(match.start() for match in _WORD_BOUNDARY.finditer(text))
    return sorted(offsets)


def _before(boundaries: List[int], offset: int) -> int:
    candidates = [b for b in boundaries if b < offset]
    return candidates[-1] if candidates else offset


def _after(boundaries: List[int], offset: int) -> int:
    candidates = [b for b in boundaries if b > offset]
    return candidates[0] if candidates else offset


def preceding_boundary(text: str, offset: int) -> int:
    return _before(word_boundaries(text), offset)


def following_boundary(text: str, offset: int) -> int:
    return _after(word_boundaries(text), offset)


def preceding_grapheme(text: str, offset: int) -> int:
    return _before(grapheme_boundaries(text), offset)


def following_grapheme(text: str, offset: int) -> int:
    return _after(grapheme_boundaries(text), offset)


def _extracted(connection: HostConnection) -> Optional[ExtractedText]:
    return connection.extracted_text()


def move_cursor_left(connection: HostConnection) -> None:
    extracted = _extracted(connection)
    if extracted is None:
        return
    start, end = extracted.selection_start, extracted.selection_end
    target = start if start != end else preceding_grapheme(extracted.text, start)
    absolute = extracted.start_offset + target
    connection.set_selection(absolute, absolute)


def move_cursor_right(connection: HostConnection) -> None:
    extracted = _extracted(connection)
    if extracted is None:
        return
    start, end = extracted.selection_start, extracted.selection_end
    target = end if start != end else following_grapheme(extracted.text, end)
    absolute = extracted.start_offset + target
    connection.set_selection(absolute, absolute)


def move_cursor_start(connection: HostConnection) -> None:
    connection.set_selection(0, 0)


def move_cursor_end(connection: HostConnection) -> None:
    extracted = _extracted(connection)
    if extracted is None:
        return
    end = extracted.start_offset + len(extracted.text)
    connection.set_selection(end, end)


def select_all(connection: HostConnection) -> None:
    extracted = _extracted(connection)
    if extracted is None:
        return
    start = extracted.start_offset
    connection.set_selection(start, start + len(extracted.text))


def select_word_back(connection: HostConnection) -> None:
    extracted = _extracted(connection)
    if extracted is None:
        return
    boundary = preceding_boundary(extracted.text, extracted.selection_start)
    connection.set_selection(
        extracted.start_offset + boundary,
        extracted.start_offset + extracted.selection_end,
    )


def select_word_forward(connection: HostConnection) -> None:
    extracted = _extracted(connection)
    if extracted is None:
        return
    boundary = following_boundary(extracted.text, extracted.selection_end)
    connection.set_selection(
        extracted.start_offset + extracted.selection_start,
        extracted.start_offset + boundary,
    )


__all__ = [
    "following_boundary",
    "following_grapheme",
    "grapheme_boundaries",
    "move_cursor_end",
    "move_cursor_left",
    "move_cursor_right",
    "move_cursor_start",
    "preceding_boundary",
    "preceding_grapheme",
    "select_all",
    "select_word_back",
    "select_word_forward",
    "word_boundaries",
]
