"""Rulesheet parser engine: drives the context state machine over source text."""

from __future__ import annotations

from rulesheet.contexts import Command, Context, Position, Span, WHITESPACE
from rulesheet.errors import ErrorKind, ParseError
from rulesheet.model import Document, Rule, RuleSet
from rulesheet.transitions import transition

_TRIM = "".join(sorted(WHITESPACE))

_UNTERMINATED: dict[Context, tuple[ErrorKind, str]] = {
    Context.SELECTOR: (ErrorKind.UNTERMINATED_SELECTOR, "expected '{'"),
    Context.RULE_SET: (ErrorKind.UNTERMINATED_RULE_SET, "expected '}'"),
    Context.KEY: (ErrorKind.UNTERMINATED_KEY, "expected ':'"),
    Context.VALUE: (ErrorKind.UNTERMINATED_VALUE, "expected ';' or '}'"),
    Context.STRING: (ErrorKind.UNTERMINATED_STRING, "expected closing quote"),
}


class Engine:
    """Build a Document from stylesheet text, one character at a time.

    An engine parses a single source. Use the module-level :func:`parse`,
    which creates a fresh engine per call.
    """

    def __init__(
        self, source: str, filename: str = "input.css", *, keep_quotes: bool = False
    ) -> None:
        self._source = source
        self._filename = filename
        self._keep_quotes = keep_quotes
        self._pos = 0
        self._line = 1
        self._col = 1

        start = self._current_pos()
        self._stack: list[tuple[Context, Position]] = [(Context.ROOT, start)]
        self._buffer: list[str] = []
        self._char = ""
        self._char_start = start
        self._quote = ""

        # In-progress rule set and declaration
        self._selectors: list[str] = []
        self._rules: list[Rule] = []
        self._key = ""
        self._rule_set_start = start
        self._rule_start = start

        self._rule_sets: list[RuleSet] = []

    def parse(self) -> Document:
        """Consume the full source and return the Document."""
        start = self._current_pos()
        for ch in self._source:
            self._step(ch)

        self._check_closed()
        return Document(tuple(self._rule_sets), Span(start, self._current_pos()))

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _advance(self, ch: str) -> None:
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1

    def _error(self, kind: ErrorKind, message: str, start: Position | None = None) -> ParseError:
        if start is None:
            start = self._char_start
        return ParseError(
            kind, message, Span(start, self._current_pos()), self._source, self._filename
        )

    # ------------------------------------------------------------------
    # Stack and buffer
    # ------------------------------------------------------------------

    def _top(self) -> Context:
        if not self._stack:
            raise self._error(ErrorKind.INTERNAL, "internal error: empty context stack")
        return self._stack[-1][0]

    def _push(self, context: Context) -> None:
        self._stack.append((context, self._char_start))

    def _pop(self) -> Context:
        if self._top() is Context.ROOT:
            raise self._error(ErrorKind.INTERNAL, "internal error: cannot close the root context")
        return self._stack.pop()[0]

    def _flush(self) -> str:
        text = "".join(self._buffer).strip(_TRIM)
        self._buffer.clear()
        return text

    # ------------------------------------------------------------------
    # Character loop
    # ------------------------------------------------------------------

    def _step(self, ch: str) -> None:
        self._char = ch
        self._char_start = self._current_pos()
        self._advance(ch)
        self._feed(ch)

    def _feed(self, ch: str) -> None:
        reprocess = True
        while reprocess:
            reprocess = False
            context = self._top()
            command, target = transition(context, ch, self._quote)

            if command is Command.CONTINUE:
                self._buffer.append(ch)
            elif command is Command.BEGIN:
                self._push(target)
                self._begin(target)
            elif command is Command.APPEND:
                self._append(context)
            else:
                self._end(self._pop())
                if self._top() is not target:
                    self._push(target)
                # A closing brace after a value also closes the rule set
                reprocess = command is Command.END_KEEP_CHAR

    def _begin(self, context: Context) -> None:
        if context is Context.SELECTOR:
            self._rule_set_start = self._char_start
            self._buffer.append(self._char)
        elif context is Context.KEY:
            self._rule_start = self._char_start
            self._buffer.append(self._char)
        elif context is Context.STRING:
            self._quote = self._char
            if self._keep_quotes:
                self._buffer.append(self._char)

    def _append(self, context: Context) -> None:
        if context is Context.SELECTOR:
            self._selectors.append(self._flush())

    def _end(self, context: Context) -> None:
        if context is Context.SELECTOR:
            self._selectors.append(self._flush())
        elif context is Context.RULE_SET:
            self._flush()
            span = Span(self._rule_set_start, self._current_pos())
            self._rule_sets.append(RuleSet(tuple(self._selectors), tuple(self._rules), span))
            self._selectors = []
            self._rules = []
        elif context is Context.KEY:
            self._key = self._flush()
        elif context is Context.VALUE:
            # A '}' terminator belongs to the rule set, not the declaration
            end = self._char_start if self._char == "}" else self._current_pos()
            self._rules.append(Rule(self._key, self._flush(), Span(self._rule_start, end)))
            self._key = ""
        elif context is Context.STRING:
            if self._keep_quotes:
                self._buffer.append(self._char)
            self._quote = ""

    # ------------------------------------------------------------------
    # End of input
    # ------------------------------------------------------------------

    def _check_closed(self) -> None:
        context = self._top()
        if context is Context.ROOT:
            return
        start = self._stack[-1][1]
        kind, expected = _UNTERMINATED[context]
        raise self._error(kind, f"{kind.value} ({expected})", start)


def parse(source: str, filename: str = "input.css", *, keep_quotes: bool = False) -> Document:
    """Convenience function: parse stylesheet text and return its Document."""
    return Engine(source, filename, keep_quotes=keep_quotes).parse()
