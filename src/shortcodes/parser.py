"""Shortcode tree builder — assembles a token stream into a forest of nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from shortcodes.ast import Node
from shortcodes.errors import ShortcodeSyntaxError
from shortcodes.lexer import tokenize
from shortcodes.recovery import Repair, recover_close, recover_end
from shortcodes.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Stack-based builder for shortcode token streams.

    Mismatched and unclosed tags are repaired rather than reported; each
    repair is kept in ``repairs``.
    """

    def __init__(self, skip_whitespace: bool = False) -> None:
        self._skip_whitespace = skip_whitespace
        self._root = Node.root()
        self._stack: list[Node] = [self._root]
        self.repairs: list[Repair] = []

    @property
    def parent(self) -> Node:
        return self._stack[-1]

    def build(self, tokens: Iterable[Token]) -> list[Node]:
        """Consume *tokens* and return the children of ROOT."""
        for token in tokens:
            self._feed(token)

        if not self.parent.is_root:
            self._stack, repair = recover_end(self._stack)
            self._record(repair)

        return self._root.children

    def _feed(self, token: Token) -> None:
        kind = token.kind

        if kind is TokenKind.TEXT:
            if self._skip_whitespace and not token.raw.strip():
                return
            self.parent.children.append(Node(token))
        elif kind is TokenKind.OPEN:
            node = Node(token)
            self.parent.children.append(node)
            self._stack.append(node)
        elif kind is TokenKind.SELF_CLOSING:
            self.parent.children.append(Node(token))
        elif kind is TokenKind.CLOSE:
            # Just closing parent token
            if self.parent.can_close(token.name):
                self.parent.closed = True
                self._stack.pop()
            else:
                self._stack, repair = recover_close(self._stack, Node(token))
                self._record(repair)
        else:
            raise ShortcodeSyntaxError(
                f"unexpected {kind.name} token in stream", token.raw, token.position
            )

    def _record(self, repair: Repair) -> None:
        logger.debug("repaired at offset %d: %s", repair.position, repair.describe())
        self.repairs.append(repair)


def build_forest(source: str, skip_whitespace: bool = False) -> list[Node]:
    """Convenience function: tokenize and build *source* into a forest."""
    return TreeBuilder(skip_whitespace).build(tokenize(source))
