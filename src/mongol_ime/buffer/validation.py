"""Argument checks shared by the reference editor."""

from __future__ import annotations

from .sync import BufferValidationError


def ensure_count(count: int) -> int:
    if count < 0:
        raise BufferValidationError("Character count cannot be negative", value=count)
    return count


def clamp_offset(offset: int, length: int) -> int:
    return max(0, min(offset, length))
