"""Ordered guarded transformations: first matching rule wins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from mongol_ime.runtime.telemetry import span

from .edits import EditAction


@dataclass(frozen=True, slots=True)
class RuleContext:
    """The input token plus the few characters around the cursor."""

    token: str
    before: str = ""
    after: str = ""

    @property
    def previous_char(self) -> str:
        return self.before[-1:]

    @property
    def next_char(self) -> str:
        return self.after[:1]

    @property
    def first_char(self) -> str:
        return self.token[:1]


Predicate = Callable[[RuleContext], bool]
Action = Callable[[RuleContext], EditAction]


@dataclass(frozen=True, slots=True)
class Rule:
    id: str
    predicate: Predicate
    action: Action
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Rule id cannot be empty")
        if not callable(self.predicate) or not callable(self.action):
            raise TypeError("predicate and action must be callable")

    def matches(self, context: RuleContext) -> bool:
        return bool(self.predicate(context))


@dataclass(frozen=True, slots=True)
class RuleMatch:
    rule: Rule
    edit: EditAction


class RuleConflictError(RuntimeError):
    """Raised when a rule id is registered twice."""

    def __init__(self, rule: Rule) -> None:
        super().__init__(f"Rule '{rule.id}' is already registered")
        self.rule = rule


class RuleSet:
    """Keeps rules in evaluation order."""

    def __init__(
        self, rules: Iterable[Rule] = (), *, logger_name: str | None = None
    ) -> None:
        self._rules: List[Rule] = []
        self._logger_name = logger_name
        for rule in rules:
            self.register(rule)

    def __iter__(self) -> Iterator[Rule]:
        return iter(tuple(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return any(rule.id == rule_id for rule in self._rules)

    def ids(self) -> tuple[str, ...]:
        return tuple(rule.id for rule in self._rules)

    def get(self, rule_id: str) -> Rule:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise KeyError(f"Rule '{rule_id}' is not registered")

    def register(
        self,
        rule: Rule,
        *,
        before: Optional[str] = None,
        replace: bool = False,
    ) -> Rule:
        """Append ``rule``, or insert it ahead of the rule named ``before``.

        With ``replace=True`` a rule with the same id is swapped in place.
        """

        existing = self._index_of(rule.id)
        if existing is not None:
            if not replace:
                raise RuleConflictError(rule)
            self._rules[existing] = rule
            return rule

        if before is None:
            self._rules.append(rule)
        else:
            anchor = self._index_of(before)
            if anchor is None:
                raise KeyError(f"Rule '{before}' is not registered")
            self._rules.insert(anchor, rule)
        return rule

    def unregister(self, rule_id: str) -> Optional[Rule]:
        index = self._index_of(rule_id)
        if index is None:
            return None
        return self._rules.pop(index)

    def evaluate(self, context: RuleContext) -> Optional[RuleMatch]:
        with span(
            "rules::evaluate",
            logger_name=self._logger_name,
            metadata={"token": context.token},
        ) as handle:
            for rule in self._rules:
                if rule.matches(context):
                    handle.add_metadata("rule", rule.id)
                    return RuleMatch(rule=rule, edit=rule.action(context))
            return None

    def _index_of(self, rule_id: str) -> Optional[int]:
        for index, rule in enumerate(self._rules):
            if rule.id == rule_id:
                return index
        return None

    def snapshot(self) -> Dict[str, str]:
        return {rule.id: rule.description for rule in self._rules}


__all__ = [
    "Rule",
    "RuleContext",
    "RuleConflictError",
    "RuleMatch",
    "RuleSet",
]
