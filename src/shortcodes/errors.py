"""Error types with formatted source context."""

from __future__ import annotations


class ShortcodeError(Exception):
    """Base class for all errors raised by the shortcodes package."""


class InvalidInput(ShortcodeError):
    """Raised when input is missing or is not a string."""

    def __init__(self, message: str = "Invalid input") -> None:
        self.message = message
        super().__init__(message)


class ShortcodeSyntaxError(ShortcodeError):
    """Raised when a token's captured text does not match its own grammar.

    The lexer only captures text that already satisfies the grammar, so this
    signals an inconsistency rather than malformed user markup. Without a
    *source*, *raw* itself is shown as the context line.
    """

    def __init__(
        self, message: str, raw: str, position: int = 0, source: str | None = None
    ) -> None:
        self.message = message
        self.raw = raw
        self.position = position
        self.source = source if source is not None else raw

        offset = position if source is not None else 0
        offset = max(0, min(offset, len(self.source)))
        self.line = self.source.count("\n", 0, offset) + 1
        self.column = offset - (self.source.rfind("\n", 0, offset) + 1) + 1
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.splitlines()
        line_idx = self.line - 1
        col = self.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        # Underline the captured text, stopping at the end of the line
        raw_line = self.raw.splitlines()[0] if self.raw else ""
        underline_len = max(1, min(len(raw_line), len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
