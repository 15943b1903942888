"""Prefix-matching word list that feeds candidates back to the controller."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from mongol_ime.engine import ImeController
from mongol_ime.runtime import telemetry
from mongol_ime.script import codes

LOGGER_NAME = "mongol_ime.adapters.vocabulary"

MAX_CANDIDATES = 9

DEMO_WORDS = (
    codes.MA + codes.O + codes.NA + codes.GA + codes.O + codes.LA,
    codes.BA + codes.I + codes.CHA + codes.I + codes.GA,
    codes.SA + codes.A + codes.I + codes.NA,
    codes.BA + codes.A + codes.I + codes.NA + codes.A,
    codes.BA + codes.A + codes.YA + codes.A + codes.RA + codes.LA + codes.A,
    codes.NA + codes.A + codes.MA + codes.A + codes.RA,
)


class WordListDataSource:
    """Answers prefix requests from an in-memory list and learns finished words."""

    def __init__(
        self,
        words: Iterable[str] = DEMO_WORDS,
        *,
        controller: Optional[ImeController] = None,
    ) -> None:
        self.words: List[str] = []
        for word in words:
            self.learn(word)
        self.controller = controller

    @classmethod
    def from_file(cls, path: str | Path) -> "WordListDataSource":
        lines = Path(path).read_text(encoding="utf-8").splitlines()
        return cls(line.strip() for line in lines)

    def bind(self, controller: ImeController) -> None:
        self.controller = controller
        controller.set_data_source(self)

    def learn(self, word: str) -> bool:
        if not word or word in self.words:
            return False
        self.words.append(word)
        return True

    def matches(self, prefix: str) -> List[str]:
        found = [word for word in self.words if word.startswith(prefix) and word != prefix]
        return found[:MAX_CANDIDATES]

    def on_request_words_starting_with(self, prefix: str) -> None:
        if self.controller is not None:
            self.controller.set_candidates(self.matches(prefix))

    def on_word_finished(self, word: str, previous_word: str) -> None:
        if self.learn(word):
            telemetry.record_event(
                "vocabulary.learned",
                data={"word": word, "previous": previous_word},
                logger_name=LOGGER_NAME,
            )

    def on_candidate_click(self, position: int, word: str, previous_word: str) -> None:
        if self.controller is not None:
            self.controller.clear_candidates()

    def on_candidate_long_click(
        self, position: int, word: str, previous_word: str
    ) -> None:
        # Long press forgets the word.
        if word in self.words:
            self.words.remove(word)
        if self.controller is not None:
            self.controller.remove_candidate(position)


__all__ = ["WordListDataSource", "DEMO_WORDS", "MAX_CANDIDATES"]
