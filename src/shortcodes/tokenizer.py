"""Public tokenizer facade: input management, tokens, forest, rendering."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from shortcodes.ast import Node
from shortcodes.errors import InvalidInput
from shortcodes.lexer import Lexer
from shortcodes.parser import TreeBuilder
from shortcodes.recovery import Repair
from shortcodes.render import Params, build_template, render
from shortcodes.tokens import Token


@dataclass(frozen=True, slots=True)
class Options:
    """Tokenizer options.

    ``strict`` is accepted for compatibility; malformed nesting is always
    recovered regardless of its value. ``skip_whitespace`` drops text nodes
    that contain only whitespace when building a forest.
    """

    strict: bool = True
    skip_whitespace: bool = False

    @classmethod
    def coerce(cls, value: Options | Mapping[str, Any] | bool | None) -> Options:
        """Build Options from an Options, a mapping, a bare strict flag, or None."""
        if value is None:
            return cls()
        if isinstance(value, Options):
            return value
        if isinstance(value, bool):
            return cls(strict=value)
        if isinstance(value, Mapping):
            skip = value.get("skip_whitespace", value.get("skipWhiteSpace", False))
            return cls(strict=bool(value.get("strict", True)), skip_whitespace=bool(skip))
        raise TypeError(f"invalid options: {value!r}")


class ShortcodesTokenizer:
    """Tokenize shortcode text and build it into a forest of nodes.

    Input can be passed to the constructor, set later with ``set_input()``,
    or passed directly to ``tokens()`` / ``build_forest()``.
    """

    def __init__(
        self,
        input: str | None = None,
        options: Options | Mapping[str, Any] | bool | None = None,
    ) -> None:
        self.options = Options.coerce(options)
        self._lexer: Lexer | None = None
        self.repairs: list[Repair] = []
        if input is not None:
            self.set_input(input)

    @property
    def input(self) -> str | None:
        return self._lexer.source if self._lexer is not None else None

    def set_input(self, input: str) -> ShortcodesTokenizer:
        """Replace the input buffer and rewind to position zero."""
        if not isinstance(input, str):
            raise InvalidInput()
        self._lexer = Lexer(input)
        return self

    def reset(self) -> ShortcodesTokenizer:
        """Rewind to the originally supplied input."""
        if self._lexer is not None:
            self._lexer.reset()
        return self

    def next(self) -> list[Token] | None:
        """Return the next one or two tokens, or None when input is exhausted."""
        return self._require_lexer().next()

    def tokens(self, input: str | None = None) -> list[Token]:
        """Tokenize the remaining input (or *input*, when given)."""
        if input is not None:
            self.set_input(input)
        return self._require_lexer().tokenize()

    def build_forest(self, input: str | None = None) -> list[Node]:
        """Tokenize and build a forest; repairs made are kept in ``repairs``."""
        tokens = self.tokens(input)
        builder = TreeBuilder(self.options.skip_whitespace)
        forest = builder.build(tokens)
        self.repairs = builder.repairs
        return forest

    def render(self, node: Node, params: Params = None, level: int = 1) -> str:
        return render(node, params, level)

    def build_template(self, node: Node | None, params: Params = None) -> str:
        return build_template(node, params)

    def _require_lexer(self) -> Lexer:
        if self._lexer is None:
            raise InvalidInput()
        return self._lexer


def create(
    input: str | None = None,
    options: Options | Mapping[str, Any] | bool | None = None,
) -> ShortcodesTokenizer:
    """Create a tokenizer, optionally with input and options."""
    return ShortcodesTokenizer(input, options)
