"""Test the lexer: token sequences, positions, and losslessness."""

import pytest

from shortcodes.errors import InvalidInput
from shortcodes.lexer import Lexer, tokenize
from shortcodes.tokens import TokenKind


def kinds(tokens):
    return [t.kind for t in tokens]


class TestTokenSequence:
    def test_empty_input(self, lex):
        assert lex("") == []

    def test_plain_text(self, lex):
        tokens = lex("just some text")
        assert kinds(tokens) == [TokenKind.TEXT]
        assert tokens[0].raw == "just some text"
        assert tokens[0].position == 0

    def test_single_open(self, lex):
        tokens = lex("[basket]")
        assert kinds(tokens) == [TokenKind.OPEN]
        assert tokens[0].name == "basket"

    def test_single_letter_tag(self, lex):
        assert kinds(lex("[a][/a]")) == [TokenKind.OPEN, TokenKind.CLOSE]

    def test_text_around_tags(self, lex):
        tokens = lex("a [b] c [/b]")
        assert kinds(tokens) == [
            TokenKind.TEXT,
            TokenKind.OPEN,
            TokenKind.TEXT,
            TokenKind.CLOSE,
        ]
        assert [t.raw for t in tokens] == ["a ", "[b]", " c ", "[/b]"]
        assert [t.position for t in tokens] == [0, 2, 5, 8]

    def test_self_closing_forms(self, lex):
        tokens = lex("[row/][row /]")
        assert kinds(tokens) == [TokenKind.SELF_CLOSING, TokenKind.SELF_CLOSING]
        assert all(t.name == "row" and t.params == {} for t in tokens)

    def test_params_parsed_while_lexing(self, lex):
        tokens = lex("x[row a=1 flag]")
        assert tokens[1].params == {"a": "1", "flag": True}

    def test_trailing_text(self, lex):
        tokens = lex("[b]tail")
        assert kinds(tokens) == [TokenKind.OPEN, TokenKind.TEXT]
        assert tokens[1].position == 3


class TestNonEnclosures:
    def test_numeric_bracket_is_text(self, lex):
        assert kinds(lex("see [1] below")) == [TokenKind.TEXT]

    def test_empty_brackets_are_text(self, lex):
        assert kinds(lex("[] and [/]")) == [TokenKind.TEXT]

    def test_bad_params_are_text(self, lex):
        assert kinds(lex('[row "x"]')) == [TokenKind.TEXT]

    def test_unterminated_bracket_is_text(self, lex):
        assert kinds(lex("[row a=1")) == [TokenKind.TEXT]

    def test_nested_bracket_finds_inner_tag(self, lex):
        tokens = lex("[[b]]")
        assert [t.raw for t in tokens] == ["[", "[b]", "]"]
        assert tokens[1].kind is TokenKind.OPEN


class TestSlashValues:
    """An unquoted value may end in a slash without making the tag self-closing."""

    def test_slash_value_is_open(self, lex):
        tokens = lex("[row a=/]")
        assert kinds(tokens) == [TokenKind.OPEN]
        assert tokens[0].name == "row"
        assert tokens[0].params == {"a": "/"}

    def test_slash_value_between_text(self, lex):
        tokens = lex("x [img src=/] y")
        assert kinds(tokens) == [TokenKind.TEXT, TokenKind.OPEN, TokenKind.TEXT]
        assert tokens[1].raw == "[img src=/]"
        assert tokens[1].params == {"src": "/"}

    def test_slash_value_after_other_params(self, lex):
        tokens = lex("[a b=c d=/]")
        assert kinds(tokens) == [TokenKind.OPEN]
        assert tokens[0].params == {"b": "c", "d": "/"}

    def test_slash_value_then_self_closing_slash(self, lex):
        tokens = lex("[img src=/ /]")
        assert kinds(tokens) == [TokenKind.SELF_CLOSING]
        assert tokens[0].params == {"src": "/"}

    def test_slash_value_builds_a_closed_tree(self, build):
        forest, repairs = build("[img src=/]caption[/img]")
        assert repairs == []
        assert [n.name for n in forest] == ["img"]
        assert forest[0].children[0].raw == "caption"


class TestLossless:
    @pytest.mark.parametrize(
        "source",
        [
            "",
            "plain",
            "[a][b][/a]",
            "before [row a=1 b='x y'] mid [col/] [/row] after",
            "[[x]] [1] [/] [ y ] [z /]\n\n[/z]",
            "multi\nline [tag\nflag] text",
        ],
    )
    def test_concatenation_reconstructs_input(self, lex, source):
        tokens = lex(source)
        assert "".join(t.raw for t in tokens) == source

    def test_positions_are_contiguous(self, lex):
        tokens = lex("x [a k=v]y[/a] [b/] z")
        expected = 0
        for token in tokens:
            assert token.position == expected
            expected = token.end


class TestLexerStepping:
    def test_next_returns_text_and_tag_together(self):
        lexer = Lexer("ab[c]")
        step = lexer.next()
        assert kinds(step) == [TokenKind.TEXT, TokenKind.OPEN]
        assert lexer.next() is None

    def test_next_tag_only(self):
        lexer = Lexer("[c]tail")
        assert kinds(lexer.next()) == [TokenKind.OPEN]
        assert kinds(lexer.next()) == [TokenKind.TEXT]
        assert lexer.next() is None
        assert lexer.next() is None

    def test_all_text_is_terminal(self):
        lexer = Lexer("no tags")
        assert kinds(lexer.next()) == [TokenKind.TEXT]
        assert lexer.exhausted
        assert lexer.next() is None

    def test_reset_replays(self):
        lexer = Lexer("a[b]c")
        first = lexer.tokenize()
        assert lexer.tokenize() == []
        assert lexer.reset().tokenize() == first

    def test_iteration(self):
        assert [t.raw for t in Lexer("x[y/]")] == ["x", "[y/]"]

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInput):
            Lexer(42)

    def test_tokenize_helper(self):
        assert kinds(tokenize("[a/]")) == [TokenKind.SELF_CLOSING]
