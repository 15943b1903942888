"""Errors raised across the host boundary."""

from __future__ import annotations


class HostConnectionError(RuntimeError):
    """Raised by a host oracle whose editor connection has gone away.

    The engine never lets this escape: lookups degrade to empty results and
    edits become no-ops.
    """

    def __init__(self, message: str = "host editor is not connected") -> None:
        super().__init__(message)
