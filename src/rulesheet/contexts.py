"""Parser contexts, commands, source positions, and character helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Context(Enum):
    ROOT = auto()  # between rule sets; permanent stack floor
    SELECTOR = auto()  # a, b.c
    RULE_SET = auto()  # inside { ... }, between declarations
    KEY = auto()  # declaration name before ':'
    VALUE = auto()  # declaration value before ';' or '}'
    STRING = auto()  # quoted text inside a value


class Command(Enum):
    CONTINUE = auto()  # accumulate the character
    BEGIN = auto()  # push the target context
    APPEND = auto()  # flush into a list, stay in context
    END = auto()  # pop the current context
    END_KEEP_CHAR = auto()  # pop, then reclassify the same character


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


WHITESPACE = frozenset(" \t\r\n")
QUOTES = frozenset("\"'")


def is_whitespace(ch: str) -> bool:
    """Return True if ch is insignificant whitespace between tokens."""
    return ch in WHITESPACE


def is_quote(ch: str) -> bool:
    """Return True if ch opens a quoted string."""
    return ch in QUOTES
