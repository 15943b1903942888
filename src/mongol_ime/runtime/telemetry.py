"""Structured logging for the IME engine, on top of telelog.

Components log through loggers named ``mongol_ime.<component>``. Settings
come from ``MONGOL_IME_*`` environment variables or from a named preset.
``span`` wraps one engine operation (a keystroke, a backspace, a candidate
click) so telelog profiles it and tags every line logged inside it with the
operation's context. Invisible script controls in logged values are written
as ``<U+XXXX>`` so a log line shows exactly what was typed.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager, ExitStack
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MONGOL_IME_"
ROOT_LOGGER = "mongol_ime"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
# Variation selectors are category Mn, so isprintable() accepts them.
_SELECTORS = frozenset(chr(code) for code in range(0x180B, 0x180E))

_loggers: MutableMapping[str, Any] = {}
_active_config: Optional[Any] = None


def escape_controls(value: str) -> str:
    return "".join(
        f"<U+{ord(ch):04X}>" if ch in _SELECTORS or not ch.isprintable() else ch
        for ch in value
    )


def _render(value: Any) -> str:
    if isinstance(value, str):
        return escape_controls(value)
    if isinstance(value, (tuple, list)):
        return "(" + ", ".join(_render(item) for item in value) + ")"
    return str(value)


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Everything the engine lets a deployment tune about its logs."""

    level: str = "WARNING"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def flag(key: str, default: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{key}")
            return default if raw is None else raw.lower() in _TRUTHY

        try:
            buffer_size = int(env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE", "2048"))
        except ValueError:
            buffer_size = 2048
        return cls(
            level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper(),
            console=not flag("DISABLE_CONSOLE", False),
            colored=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
            buffered=flag("LOG_BUFFERED", False),
            buffer_size=buffer_size,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level.upper())
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # Spans rely on logger.profile.
        config.with_profiling(True)
        return config


def preset_settings(
    name: str, base: Optional[TelemetrySettings] = None
) -> TelemetrySettings:
    """Settings for ``development``, ``production`` or ``performance``.

    A log file named in the environment still wins over the preset's file.
    """

    base = base or TelemetrySettings.from_env()
    key = name.lower()
    if key == "development":
        return replace(base, level="DEBUG", console=True, colored=True, json=False)
    if key == "production":
        return replace(
            base,
            level="WARNING",
            console=False,
            buffered=True,
            log_file=base.log_file or "mongol_ime.log",
        )
    if key in {"performance", "performance_analysis"}:
        return replace(
            base,
            level="DEBUG",
            console=False,
            buffered=True,
            json=True,
            log_file=base.log_file or "mongol_ime-performance.log",
        )
    raise ValueError(f"Unknown telemetry preset '{name}'.")


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[TelemetrySettings] = None,
) -> None:
    """Swap the telelog configuration every logger is built from.

    At most one of ``config`` (a ready ``telelog.Config``), ``preset`` or
    ``settings`` may be given; with none, the environment is re-read.
    Loggers handed out earlier keep their old configuration.
    """

    global _active_config
    if sum(option is not None for option in (config, preset, settings)) > 1:
        raise ValueError("Pass only one of `config`, `preset` or `settings`.")

    if preset is not None:
        config = preset_settings(preset).to_config()
    elif settings is not None:
        config = settings.to_config()
    elif config is None:
        config = TelemetrySettings.from_env().to_config()

    _active_config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _active_config
    logger_name = name or ROOT_LOGGER
    if logger_name not in _loggers:
        if _active_config is None:
            _active_config = TelemetrySettings.from_env().to_config()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _active_config)
    return _loggers[logger_name]


def _emitter(logger: Any, level: str) -> Tuple[Any, bool]:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    method, structured = _emitter(logger, level)
    pairs = [(str(key), _render(value)) for key, value in fields.items()]
    if structured:
        method(message, pairs)
    else:
        method(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as structured fields."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


class Span(AbstractContextManager["Span"]):
    """One profiled engine operation.

    While open, ``metadata`` is attached to the logger as context and the
    block is profiled (and tracked as ``component`` when one is named). An
    exception leaving the block is logged as ``span::fail`` and re-raised.
    """

    def __init__(
        self,
        name: str,
        *,
        logger_name: Optional[str] = None,
        component: Optional[str | bool] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.name = name
        self.logger = get_logger(logger_name)
        self.component = name if component is True else (component or None)
        self.metadata: Dict[str, str] = {
            key: _render(value) for key, value in (metadata or {}).items()
        }
        self._stack = ExitStack()

    def __enter__(self) -> "Span":
        context_keys = tuple(self.metadata)
        for key in context_keys:
            self.logger.add_context(key, self.metadata[key])
        self._stack.callback(self._drop_context, context_keys)
        if self.component:
            self._stack.enter_context(self.logger.track_component(self.component))
        self._stack.enter_context(self.logger.profile(self.name))
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is not None:
            self.fail(str(exc))
        self._stack.__exit__(exc_type, exc, tb)
        return False

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _render(value)

    def fail(self, reason: str) -> None:
        fields: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            fields["component"] = self.component
        fields["reason"] = reason
        _emit(self.logger, "error", "span::fail", fields)

    def _drop_context(self, keys: Tuple[str, ...]) -> None:
        for key in keys:
            self.logger.remove_context(key)


def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Span:
    """Open a :class:`Span`; ``component=True`` reuses ``name`` as the component."""

    return Span(name, logger_name=logger_name, component=component, metadata=metadata)


__all__ = [
    "ENV_PREFIX",
    "Span",
    "TelemetrySettings",
    "configure",
    "escape_controls",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
