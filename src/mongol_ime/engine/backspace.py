"""Delete-time rules: how much one logical backspace removes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from mongol_ime.host import HostConnection
from mongol_ime.runtime import telemetry
from mongol_ime.runtime.config import DEFAULT_BACKSPACE_WINDOW
from mongol_ime.script import codes
from mongol_ime.script.classifier import is_invisible_control, is_joiner, is_mongolian

from .candidates import CandidateList
from .composing import ComposingStateTracker

LOGGER_NAME = "mongol_ime.engine.backspace"

# (step name, guard over (window, index of the char now before the deletion))
TrailingRule = Tuple[str, Callable[[str, int], bool]]


def _is_mvs(window: str, index: int) -> bool:
    return window[index] == codes.MVS


def _is_orphan_joiner(window: str, index: int) -> bool:
    # A joiner between two letters keeps their cursive forms; keep it.
    if not is_joiner(window[index]):
        return False
    return index == 0 or not is_mongolian(window[index - 1])


TRAILING_CONTROL_RULES: Sequence[TrailingRule] = (
    ("trailing_mvs", _is_mvs),
    ("orphan_joiner", _is_orphan_joiner),
)


@dataclass(frozen=True, slots=True)
class BackspacePlan:
    """Ordered single-character deletions for one logical backspace."""

    steps: Tuple[str, ...] = ()

    @property
    def deletions(self) -> int:
        return len(self.steps)


def plan_backspace(
    window: str, trailing_rules: Sequence[TrailingRule] = TRAILING_CONTROL_RULES
) -> BackspacePlan:
    """Decide the deletions for the text ``window`` just before the cursor."""

    if not window:
        return BackspacePlan()

    steps = []
    index = len(window) - 1
    if is_invisible_control(window[index]):
        steps.append("invisible_control")
        index -= 1

    # The visible character always goes, even if the window ran out above.
    steps.append("grapheme")
    index -= 1

    if index >= 0:
        for name, applies in trailing_rules:
            if applies(window, index):
                steps.append(name)
                break
    return BackspacePlan(tuple(steps))


class BackspaceEngine:
    def __init__(
        self,
        composing: ComposingStateTracker,
        candidates: Optional[CandidateList] = None,
        *,
        window: int = DEFAULT_BACKSPACE_WINDOW,
        trailing_rules: Sequence[TrailingRule] = TRAILING_CONTROL_RULES,
    ) -> None:
        self._composing = composing
        self._candidates = candidates
        self.window = window
        self.trailing_rules = tuple(trailing_rules)

    def backspace(self, connection: HostConnection) -> BackspacePlan:
        with telemetry.span(
            "backspace::run",
            logger_name=LOGGER_NAME,
            component="backspace",
        ) as handle:
            if not connection.connected:
                handle.add_metadata("skipped", "no_connection")
                return BackspacePlan()

            # Never silently drop uncommitted preview text.
            self._composing.commit_pending(connection)

            if connection.has_selection():
                connection.send_low_level_delete()
                return BackspacePlan(("selection",))

            window = connection.text_before_cursor(self.window)
            plan = plan_backspace(window, self.trailing_rules)
            if not plan.deletions:
                return plan

            # One minimal delete per character: hosts differ on range deletes.
            with connection.batch_edit():
                for _ in plan.steps:
                    connection.send_low_level_delete()
            handle.add_metadata("steps", ",".join(plan.steps))

            if self._candidates is not None:
                self._candidates.clear()
            return plan


__all__ = [
    "BackspaceEngine",
    "BackspacePlan",
    "TRAILING_CONTROL_RULES",
    "plan_backspace",
]
