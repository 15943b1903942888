"""Word-candidate list state shown by the host next to the keyboard."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .bus import CANDIDATES_CLEAR, CANDIDATES_UPDATE, EngineBus


class CandidateList:
    def __init__(self, bus: Optional[EngineBus] = None) -> None:
        self._bus = bus
        self._words: List[str] = []

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, index: int) -> str:
        return self._words[index]

    @property
    def words(self) -> tuple[str, ...]:
        return tuple(self._words)

    def has_candidates(self) -> bool:
        return bool(self._words)

    def set(self, words: Iterable[str]) -> None:
        """Replace the list; an empty iterable clears it."""

        updated = [word for word in words if word]
        if not updated:
            self.clear()
            return
        self._words = updated
        self._emit(CANDIDATES_UPDATE, self.words)

    def clear(self) -> None:
        if not self._words:
            return
        self._words = []
        self._emit(CANDIDATES_CLEAR, None)

    def remove(self, index: int) -> Optional[str]:
        if not 0 <= index < len(self._words):
            return None
        removed = self._words.pop(index)
        if self._words:
            self._emit(CANDIDATES_UPDATE, self.words)
        else:
            self._emit(CANDIDATES_CLEAR, None)
        return removed

    def _emit(self, event: str, payload: object | None) -> None:
        if self._bus is not None:
            self._bus.emit(event, payload)


__all__ = ["CandidateList"]
