"""Document dumps: --debug tree to stderr and plain data for JSON output."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from rulesheet.model import Document, Rule, RuleSet


def dump_document(doc: Document, *, file: TextIO | None = None) -> None:
    """Print a human-readable document tree to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    _dump_document(doc, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_document(doc: Document, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}Document\n")
    for rule_set in doc.rule_sets:
        _dump_rule_set(rule_set, depth + 1, f)


def _dump_rule_set(rule_set: RuleSet, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}RuleSet {', '.join(rule_set.selectors)}\n")
    for rule in rule_set.rules:
        _dump_rule(rule, depth + 1, f)


def _dump_rule(rule: Rule, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}Rule {rule.key}: {rule.value}\n")


def document_to_dict(doc: Document) -> dict[str, Any]:
    """Convert a document to plain dicts and lists (spans omitted)."""
    return {
        "rule_sets": [
            {
                "selectors": list(rule_set.selectors),
                "rules": [{"key": r.key, "value": r.value} for r in rule_set.rules],
            }
            for rule_set in doc.rule_sets
        ]
    }
