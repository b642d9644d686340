"""Human-readable token and tree dumps."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from shortcodes.ast import Node
from shortcodes.tokens import Token, TokenKind


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*."""
    for token in tokens:
        file.write(f"{token.position:>6} {token.kind.name:<12} {token.raw!r}")
        if token.name is not None:
            file.write(f" name={token.name}")
        if token.params:
            file.write(f" params={token.params!r}")
        file.write("\n")


def dump_forest(nodes: Iterable[Node], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable tree of *nodes* to *file*."""
    file.write("Root\n")
    # (node, depth) pairs, kept in document order on pop
    stack = [(node, 1) for node in reversed(list(nodes))]
    while stack:
        node, depth = stack.pop()
        _dump_node(node, depth, file)
        stack.extend((child, depth + 1) for child in reversed(node.children))


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Node, depth: int, f: TextIO) -> None:
    if node.kind is TokenKind.TEXT:
        f.write(f"{_indent(depth)}Text({node.raw!r})\n")
        return

    state = "" if node.closed else " (open)"
    relabelled = " (collapsed)" if node.kind is not node.token.kind else ""
    f.write(f"{_indent(depth)}{_kind_label(node.kind)} [{node.name}]{relabelled}{state}\n")
    for key, value in node.params.items():
        f.write(f"{_indent(depth + 1)}Param {key}={value!r}\n")


def _kind_label(kind: TokenKind) -> str:
    return {
        TokenKind.OPEN: "Open",
        TokenKind.CLOSE: "Close",
        TokenKind.SELF_CLOSING: "SelfClosing",
        TokenKind.ROOT: "Root",
    }.get(kind, kind.name)
