"""Engine configuration and its environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_LOOKBACK_CHARS = 128
DEFAULT_BACKSPACE_WINDOW = 4

MIN_LOOKBACK_CHARS = 1
MIN_BACKSPACE_WINDOW = 2


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Context-window bounds used by the composition engine.

    ``lookback_chars`` caps how much text before the cursor the word scanner
    requests from the host. ``backspace_window`` is how many characters a
    single logical backspace may inspect.
    """

    lookback_chars: int = DEFAULT_LOOKBACK_CHARS
    backspace_window: int = DEFAULT_BACKSPACE_WINDOW

    def __post_init__(self) -> None:
        if self.lookback_chars < MIN_LOOKBACK_CHARS:
            raise ValueError(
                f"lookback_chars must be >= {MIN_LOOKBACK_CHARS}, got {self.lookback_chars}"
            )
        if self.backspace_window < MIN_BACKSPACE_WINDOW:
            raise ValueError(
                f"backspace_window must be >= {MIN_BACKSPACE_WINDOW}, "
                f"got {self.backspace_window}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        lookback = _env_int(env, "LOOKBACK_CHARS", DEFAULT_LOOKBACK_CHARS)
        window = _env_int(env, "BACKSPACE_WINDOW", DEFAULT_BACKSPACE_WINDOW)
        return cls(
            lookback_chars=max(lookback, MIN_LOOKBACK_CHARS),
            backspace_window=max(window, MIN_BACKSPACE_WINDOW),
        )


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


__all__ = ["EngineConfig", "DEFAULT_LOOKBACK_CHARS", "DEFAULT_BACKSPACE_WINDOW"]
