"""Fault-tolerant parser for bracket-delimited shortcode markup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shortcodes.errors import InvalidInput, ShortcodeError, ShortcodeSyntaxError
from shortcodes.tokenizer import Options, ShortcodesTokenizer, create

if TYPE_CHECKING:
    from shortcodes.ast import Node

__version__ = "0.1.0"

__all__ = [
    "InvalidInput",
    "Options",
    "ShortcodeError",
    "ShortcodeSyntaxError",
    "ShortcodesTokenizer",
    "create",
    "parse",
]


def parse(source: str, skip_whitespace: bool = False) -> list[Node]:
    """Tokenize and build shortcode source into a forest of root-level nodes."""
    return ShortcodesTokenizer(source, Options(skip_whitespace=skip_whitespace)).build_forest()
