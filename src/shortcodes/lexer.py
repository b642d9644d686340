"""Shortcode lexer — converts source text into a flat, lossless token stream."""

from __future__ import annotations

from collections.abc import Iterator

from shortcodes.errors import InvalidInput
from shortcodes.tokens import Token, TokenKind, classify, rx_enclosure


class Lexer:
    """Scan shortcode source text into Token objects.

    The lexer keeps the original source and a cursor; ``reset()`` rewinds the
    cursor so the same input can be replayed.
    """

    def __init__(self, source: str) -> None:
        if not isinstance(source, str):
            raise InvalidInput()
        self._source = source
        self._pos = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._source)

    def reset(self) -> Lexer:
        self._pos = 0
        return self

    def next(self) -> list[Token] | None:
        """Return the tokens for the next enclosure, or None at end of input.

        A TEXT token for any text before the enclosure comes first. When no
        enclosure is left the rest of the input becomes one TEXT token.
        """
        if self.exhausted:
            return None

        match = rx_enclosure.search(self._source, self._pos)

        # all text
        if match is None:
            token = Token.build(TokenKind.TEXT, self._source[self._pos :], self._pos)
            self._pos = len(self._source)
            return [token]

        tokens: list[Token] = []
        start, end = match.span()

        if start != self._pos:
            tokens.append(Token.build(TokenKind.TEXT, self._source[self._pos : start], self._pos))

        tokens.append(Token.build(classify(match), match.group(0), start, self._source))

        self._pos = end
        return tokens

    def __iter__(self) -> Iterator[Token]:
        while (tokens := self.next()) is not None:
            yield from tokens

    def tokenize(self) -> list[Token]:
        """Tokenize the remaining source and return the token list."""
        return list(self)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()
