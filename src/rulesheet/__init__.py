"""Rulesheet: a state-machine parser for a simplified CSS-like stylesheet grammar."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rulesheet.model import Document

__version__ = "0.1.0"


def parse(source: str, filename: str = "input.css", *, keep_quotes: bool = False) -> Document:
    """Parse stylesheet source into a Document of rule sets."""
    from rulesheet.engine import parse as _parse

    return _parse(source, filename, keep_quotes=keep_quotes)
