"""Composition engine: rules, backspace, word scanning and composing state."""

from .backspace import BackspaceEngine, BackspacePlan, plan_backspace
from .bus import EngineBus
from .candidates import CandidateList
from .composing import (
    EMPTY,
    ComposingState,
    ComposingStateTracker,
    Empty,
    Pending,
    PopupChoice,
)
from .composition import CompositionEngine, default_composition_rules
from .controller import ImeController
from .edits import EditAction
from .rules import Rule, RuleConflictError, RuleContext, RuleMatch, RuleSet
from .words import WordBoundaryScanner, scan_previous_words

__all__ = [
    "BackspaceEngine",
    "BackspacePlan",
    "plan_backspace",
    "EngineBus",
    "CandidateList",
    "EMPTY",
    "ComposingState",
    "ComposingStateTracker",
    "Empty",
    "Pending",
    "PopupChoice",
    "CompositionEngine",
    "default_composition_rules",
    "ImeController",
    "EditAction",
    "Rule",
    "RuleConflictError",
    "RuleContext",
    "RuleMatch",
    "RuleSet",
    "WordBoundaryScanner",
    "scan_previous_words",
]
