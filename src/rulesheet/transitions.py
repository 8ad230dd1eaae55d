"""Per-context transition policies.

Each policy is a pure function of the lookahead character (and, for strings,
the quote that opened the string). It answers which command the engine runs
and which context that command targets. Every policy is total: characters a
context does not recognize are accumulated.
"""

from __future__ import annotations

from typing import Callable

from rulesheet.contexts import Command, Context, is_quote, is_whitespace

Transition = tuple[Command, Context]
Policy = Callable[[str, str], Transition]


def _root(ch: str, quote: str) -> Transition:
    if is_whitespace(ch):
        return Command.CONTINUE, Context.ROOT
    return Command.BEGIN, Context.SELECTOR


def _selector(ch: str, quote: str) -> Transition:
    if ch == "{":
        return Command.END, Context.RULE_SET
    if ch == ",":
        return Command.APPEND, Context.SELECTOR
    return Command.CONTINUE, Context.SELECTOR


def _rule_set(ch: str, quote: str) -> Transition:
    if is_whitespace(ch):
        return Command.CONTINUE, Context.RULE_SET
    if ch == "}":
        return Command.END, Context.ROOT
    return Command.BEGIN, Context.KEY


def _key(ch: str, quote: str) -> Transition:
    if ch == ":":
        return Command.END, Context.VALUE
    return Command.CONTINUE, Context.KEY


def _value(ch: str, quote: str) -> Transition:
    if is_quote(ch):
        return Command.BEGIN, Context.STRING
    if ch == ";":
        return Command.END, Context.RULE_SET
    if ch == "}":
        # The brace also closes the enclosing rule set
        return Command.END_KEEP_CHAR, Context.RULE_SET
    return Command.CONTINUE, Context.VALUE


def _string(ch: str, quote: str) -> Transition:
    if ch == quote:
        return Command.END, Context.VALUE
    return Command.CONTINUE, Context.STRING


POLICIES: dict[Context, Policy] = {
    Context.ROOT: _root,
    Context.SELECTOR: _selector,
    Context.RULE_SET: _rule_set,
    Context.KEY: _key,
    Context.VALUE: _value,
    Context.STRING: _string,
}


def transition(context: Context, ch: str, quote: str = "") -> Transition:
    """Classify ch in context and return the (command, target context) pair."""
    return POLICIES[context](ch, quote)
