"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from shortcodes.ast import Node
from shortcodes.lexer import tokenize
from shortcodes.parser import TreeBuilder
from shortcodes.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def build():
    """Return a helper that builds source into (forest, repairs)."""

    def _build(source: str, skip_whitespace: bool = False):
        builder = TreeBuilder(skip_whitespace)
        forest = builder.build(tokenize(source))
        return forest, builder.repairs

    return _build


@pytest.fixture
def shape():
    """Return a helper that reduces a forest to nested (label, children) tuples.

    Tags are labelled by name, text by its stripped content; whitespace-only
    text is dropped.
    """

    def _shape(nodes: list[Node]) -> list[tuple]:
        result = []
        for node in nodes:
            if node.kind is TokenKind.TEXT:
                if node.raw.strip():
                    result.append((node.raw.strip(), []))
            else:
                result.append((node.name, _shape(node.children)))
        return result

    return _shape
