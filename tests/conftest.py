"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from rulesheet.engine import parse
from rulesheet.model import Document, RuleSet


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Document."""

    def _parse(source: str, filename: str = "test.css", *, keep_quotes: bool = False) -> Document:
        return parse(source, filename, keep_quotes=keep_quotes)

    return _parse


def rules_of(rule_set: RuleSet) -> list[tuple[str, str]]:
    """Return the (key, value) pairs of a rule set."""
    return [(r.key, r.value) for r in rule_set.rules]
