"""Document model produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass

from rulesheet.contexts import Span


@dataclass(frozen=True, slots=True)
class Rule:
    """A single declaration: key: value."""

    key: str
    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Selector group and its declarations, in source order."""

    selectors: tuple[str, ...]
    rules: tuple[Rule, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class Document:
    """Root document node."""

    rule_sets: tuple[RuleSet, ...]
    span: Span
