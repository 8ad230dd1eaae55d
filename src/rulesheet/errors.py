"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum

from rulesheet.contexts import Span


class ErrorKind(Enum):
    UNTERMINATED_SELECTOR = "unterminated selector"
    UNTERMINATED_RULE_SET = "unterminated rule set"
    UNTERMINATED_KEY = "unterminated declaration key"
    UNTERMINATED_VALUE = "unterminated declaration value"
    UNTERMINATED_STRING = "unterminated string"
    INTERNAL = "internal error"


class ParseError(Exception):
    """Raised on the first structural error, with kind, span and source context."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        span: Span,
        source: str,
        filename: str = "input.css",
    ) -> None:
        self.kind = kind
        self.message = message
        self.span = span
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
