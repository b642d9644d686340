"""Token kinds, shortcode grammar patterns, and the immutable Token record."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto

from shortcodes.errors import ShortcodeSyntaxError


class TokenKind(Enum):
    TEXT = auto()  # free text between enclosures
    OPEN = auto()  # [name ...]
    CLOSE = auto()  # [/name]
    SELF_CLOSING = auto()  # [name .../]
    ROOT = auto()  # synthetic forest root, never produced by the lexer


# Tag names
RX_KEY = r"[a-zA-Z][a-zA-Z0-9_-]*"

# One parameter value; the numeric forms are kept apart for readability,
# the unquoted form already covers them.
RX_VALUE = (
    r"\d+\.\d+"  # floats
    r"|\d+"  # ints
    r"|[^\s\"'\[\]]+"  # no-quote strings
    r'|"[^\]"]*"'  # double-quoted strings
    r"|'[^\]']*'"  # single-quoted strings
)
RX_PARAM = rf"{RX_KEY}(?:=(?:{RX_VALUE}))?"
RX_PARAMS = rf"{RX_PARAM}(?:\s+{RX_PARAM})*"

RX_OPEN = rf"\[({RX_KEY})(\s+{RX_PARAMS})?\s*\]"
RX_SELF_CLOSING = rf"\[({RX_KEY})(\s+{RX_PARAMS})?\s*/\]"
RX_CLOSE = rf"\[/({RX_KEY})\]"

# Used only on an already validated parameter string, so the widest value
# forms go first.
RX_PARAM_SPLIT = rf"({RX_KEY})(?:=(\"[^\]\"]*\"|'[^\]']*'|[^\s\"'\[\]]+))?"

# Compiled once, shared read-only by every lexer.
rx_param = re.compile(RX_PARAM_SPLIT, re.IGNORECASE)
rx_open = re.compile(RX_OPEN, re.IGNORECASE)
rx_self_closing = re.compile(RX_SELF_CLOSING, re.IGNORECASE)
rx_close = re.compile(RX_CLOSE, re.IGNORECASE)
# One named group per branch; the matched branch decides the token kind.
rx_enclosure = re.compile(
    rf"(?P<close>{RX_CLOSE})|(?P<self_closing>{RX_SELF_CLOSING})|(?P<open>{RX_OPEN})",
    re.IGNORECASE,
)

_GRAMMARS = {
    TokenKind.OPEN: rx_open,
    TokenKind.SELF_CLOSING: rx_self_closing,
    TokenKind.CLOSE: rx_close,
}

ParamValue = str | bool


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


def position_at(source: str, offset: int) -> Position:
    """Return the line/column Position of *offset* in *source*."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)


def classify(match: re.Match[str]) -> TokenKind:
    """Return the token kind of an ``rx_enclosure`` match.

    The kind comes from the branch that matched, so an unquoted value ending
    in a slash (``[img src=/]``) is still an open tag.
    """
    if match.group("close") is not None:
        return TokenKind.CLOSE
    if match.group("self_closing") is not None:
        return TokenKind.SELF_CLOSING
    return TokenKind.OPEN


def cast_value(value: str) -> str:
    """Strip surrounding quotes; every other literal stays as text."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_params(param_str: str) -> dict[str, ParamValue]:
    """Split a validated parameter string into a key -> value mapping."""
    params: dict[str, ParamValue] = {}
    for match in rx_param.finditer(param_str):
        key, value = match.group(1), match.group(2)
        params[key] = True if value is None else cast_value(value)
    return params


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: kind, captured text, offset, and parsed tag parts."""

    kind: TokenKind
    raw: str
    position: int = 0
    name: str | None = None
    params: dict[str, ParamValue] = field(default_factory=dict)

    @property
    def end(self) -> int:
        return self.position + len(self.raw)

    @classmethod
    def build(
        cls, kind: TokenKind, raw: str = "", position: int = 0, source: str | None = None
    ) -> Token:
        """Create a token, parsing name and params out of *raw* for tag kinds.

        Raises ShortcodeSyntaxError when *raw* does not match the grammar of
        *kind*. *source* is the full input *raw* was taken from, used only for
        the error snippet.
        """
        if kind in (TokenKind.TEXT, TokenKind.ROOT):
            return cls(kind, raw, position)

        match = _GRAMMARS[kind].fullmatch(raw)
        if match is None:
            raise ShortcodeSyntaxError(
                f"invalid {kind.name} token: {raw!r}", raw, position, source
            )
        groups = match.groups()
        param_str = groups[1] if len(groups) > 1 else None
        params = parse_params(param_str) if param_str else {}
        return cls(kind, raw, position, groups[0], params)
