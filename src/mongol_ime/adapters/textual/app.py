"""Executable Textual app that hosts the Mongolian IME engine."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mongol_ime.adapters.textual.app"
    ) from exc

from mongol_ime.buffer import BufferMirror, EditBuffer
from mongol_ime.engine import ImeController
from mongol_ime.runtime import EngineConfig, telemetry

from .controller import TextualImeAdapter, TextualImeHooks
from .vocabulary import WordListDataSource

LOGGER_NAME = "mongol_ime.adapters.textual"

CURSOR_MARK = "|"


def create_default_controller(
    data_source: Optional[WordListDataSource] = None,
) -> ImeController:
    """Build a controller bound to a demo word list."""

    controller = ImeController(config=EngineConfig.from_env())
    (data_source or WordListDataSource()).bind(controller)
    return controller


def render_mirror(mirror: BufferMirror) -> str:
    """Show the text with the cursor (or selection) and composing region marked."""

    text = mirror.text
    marks = {mirror.selection_start: "[", mirror.selection_end: "]"}
    if mirror.selection_start == mirror.selection_end:
        marks = {mirror.cursor: CURSOR_MARK}
    if mirror.composing is not None:
        start, end = mirror.composing
        marks[start] = marks.get(start, "") + "<"
        marks[end] = ">" + marks.get(end, "")
    parts = []
    for index in range(len(text) + 1):
        parts.append(marks.get(index, ""))
        if index < len(text):
            parts.append(text[index])
    return telemetry.escape_controls("".join(parts))


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    candidates_text: str = ""


class MongolImeApp(App[None]):
    """Minimal Textual UI typing into an in-memory editor through the IME."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#candidate-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, data_source: Optional[WordListDataSource] = None) -> None:
        super().__init__()
        self._state = UIState()
        self._data_source = data_source
        self.controller: ImeController | None = None
        self.adapter: TextualImeAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._candidate_widget: Static | None = None
        self._logger = telemetry.get_logger(LOGGER_NAME)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._candidate_widget = Static("", id="candidate-line")
        self._status_widget = Static("", id="status-line")
        yield self._candidate_widget
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.controller = create_default_controller(self._data_source)
        hooks = TextualImeHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_candidates=self._show_candidates,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualImeAdapter(self.controller, EditBuffer(), hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        modifiers = ("SHIFT",) if event.key.startswith("shift+") else ()
        key = event.key.removeprefix("shift+")
        if self.adapter.handle_textual_key(key, text=event.character, modifiers=modifiers):
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = render_mirror(mirror)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_candidates(self, words: Sequence[str]) -> None:
        self._state.candidates_text = "  ".join(
            f"F{index + 1}:{word}" for index, word in enumerate(words)
        )
        if self._candidate_widget:
            self._candidate_widget.update(self._state.candidates_text)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "word.finished" and isinstance(payload, tuple):
            self._update_status(f"{name}:{payload[0]}")

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Mongolian IME Textual demo.")
    parser.add_argument(
        "--words",
        default=os.environ.get("MONGOL_IME_WORDS"),
        help="UTF-8 word list, one word per line (default: built-in demo words)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=os.environ.get("MONGOL_IME_LOG_PRESET"),
        help="telelog preset to configure before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    data_source = WordListDataSource.from_file(args.words) if args.words else None
    app = MongolImeApp(data_source=data_source)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
