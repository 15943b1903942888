"""Fail-safe wrapper around the host's ContextOracle."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from mongol_ime.runtime import telemetry

from .errors import HostConnectionError
from .protocols import ContextOracle, ExtractedText

T = TypeVar("T")

LOGGER_NAME = "mongol_ime.host"


class HostConnection:
    """Routes every host call through one guard.

    With no oracle attached, or when the oracle raises
    :class:`HostConnectionError`, lookups return empty values and edits do
    nothing.
    """

    def __init__(self, oracle: Optional[ContextOracle] = None) -> None:
        self._oracle = oracle

    @property
    def oracle(self) -> Optional[ContextOracle]:
        return self._oracle

    def attach(self, oracle: Optional[ContextOracle]) -> None:
        self._oracle = oracle

    @property
    def connected(self) -> bool:
        return self._oracle is not None

    def _call(self, name: str, fallback: T, *args: Any) -> T:
        oracle = self._oracle
        if oracle is None:
            return fallback
        method: Callable[..., Any] = getattr(oracle, name)
        try:
            result = method(*args)
        except HostConnectionError as exc:
            _log_unavailable(name, exc)
            return fallback
        return fallback if result is None else result

    # -- lookups ---------------------------------------------------------

    def text_before_cursor(self, count: int) -> str:
        if count <= 0:
            return ""
        return str(self._call("text_before_cursor", "", count))

    def text_after_cursor(self, count: int) -> str:
        if count <= 0:
            return ""
        return str(self._call("text_after_cursor", "", count))

    def previous_char(self) -> str:
        """The single character before the cursor, or ``""``."""

        return self.text_before_cursor(1)[-1:]

    def next_char(self) -> str:
        return self.text_after_cursor(1)[:1]

    def selected_text(self) -> str:
        return str(self._call("selected_text", ""))

    def has_selection(self) -> bool:
        return bool(self.selected_text())

    def extracted_text(self) -> Optional[ExtractedText]:
        return self._call("extracted_text", None)

    # -- edits -----------------------------------------------------------

    @contextmanager
    def batch_edit(self) -> Iterator[None]:
        """Group every edit issued inside the block into one host change."""

        started = False
        if self._oracle is not None:
            try:
                self._oracle.begin_edit()
                started = True
            except HostConnectionError as exc:
                _log_unavailable("begin_edit", exc)
        try:
            yield
        finally:
            if started:
                self._call("end_edit", None)

    def commit_text(self, text: str) -> None:
        if text:
            self._call("commit_text", None, text)

    def set_composing_text(self, text: str) -> None:
        self._call("set_composing_text", None, text)

    def finish_composing_text(self) -> None:
        self._call("finish_composing_text", None)

    def delete_chars_before_cursor(self, count: int) -> None:
        if count > 0:
            self._call("delete_chars_before_cursor", None, count)

    def set_selection(self, start: int, end: int) -> None:
        self._call("set_selection", None, start, end)

    def send_low_level_delete(self) -> None:
        self._call("send_low_level_delete", None)


def _log_unavailable(call: str, exc: HostConnectionError) -> None:
    telemetry.record_event(
        "host.unavailable",
        level="warning",
        data={"call": call, "reason": str(exc)},
        logger_name=LOGGER_NAME,
    )


__all__ = ["HostConnection"]
