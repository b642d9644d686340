"""AST node type for parsed shortcode forests."""

from __future__ import annotations

from dataclasses import dataclass, field

from shortcodes.tokens import ParamValue, Token, TokenKind


@dataclass(eq=False, slots=True)
class Node:
    """Mutable tree wrapper around one immutable Token.

    ``kind`` starts as the token's kind and is the only part of a node's
    identity that can change: recovery relabels an unmatched OPEN node as
    SELF_CLOSING through ``collapse()``.
    """

    token: Token
    kind: TokenKind = field(init=False)
    children: list[Node] = field(default_factory=list)
    closed: bool = field(init=False)

    def __post_init__(self) -> None:
        self.kind = self.token.kind
        # Leaves never wait for a close
        self.closed = self.kind in (TokenKind.TEXT, TokenKind.SELF_CLOSING, TokenKind.ROOT)

    @classmethod
    def root(cls) -> Node:
        return cls(Token(TokenKind.ROOT, ""))

    @property
    def name(self) -> str | None:
        return self.token.name

    @property
    def params(self) -> dict[str, ParamValue]:
        return self.token.params

    @property
    def raw(self) -> str:
        return self.token.raw

    @property
    def position(self) -> int:
        return self.token.position

    @property
    def is_root(self) -> bool:
        return self.kind is TokenKind.ROOT

    def can_close(self, name: str | None) -> bool:
        """Return True if a close tag named *name* matches this node."""
        return self.name == name

    def collapse(self) -> list[Node]:
        """Close this node as a leaf and hand back its detached children."""
        self.kind = TokenKind.SELF_CLOSING
        self.closed = True
        children, self.children = self.children, []
        return children

    def walk(self):
        """Yield this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
