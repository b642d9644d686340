"""Test error types and their formatted messages."""

import pytest

from shortcodes.errors import InvalidInput, ShortcodeError, ShortcodeSyntaxError
from shortcodes.tokens import Token, TokenKind

SOURCE = "line one\nabcde[9lives] tail"


class TestHierarchy:
    def test_invalid_input_is_shortcode_error(self):
        assert issubclass(InvalidInput, ShortcodeError)

    def test_syntax_error_is_shortcode_error(self):
        assert issubclass(ShortcodeSyntaxError, ShortcodeError)

    def test_invalid_input_default_message(self):
        assert str(InvalidInput()) == "Invalid input"


class TestSyntaxErrorFormatting:
    def _error(self) -> ShortcodeSyntaxError:
        with pytest.raises(ShortcodeSyntaxError) as exc_info:
            Token.build(TokenKind.OPEN, "[9lives]", 14, SOURCE)
        return exc_info.value

    def test_format_contains_error_prefix(self):
        assert self._error().format().startswith("error:")

    def test_line_and_column_from_source(self):
        err = self._error()
        assert (err.line, err.column) == (2, 6)
        assert err.position == 14

    def test_format_contains_arrow_and_location(self):
        formatted = self._error().format()
        assert "  --> <input>:2:6\n" in formatted

    def test_format_with_custom_filename(self):
        assert "--> page.txt:2:6" in self._error().format("page.txt")

    def test_format_shows_source_line_with_gutter(self):
        lines = self._error().format().split("\n")
        assert lines[2] == "  |"
        assert lines[3] == "2 | abcde[9lives] tail"

    def test_carets_under_captured_text(self):
        lines = self._error().format().split("\n")
        assert lines[4] == "  |      " + "^" * len("[9lives]")

    def test_str_is_formatted(self):
        err = self._error()
        assert str(err) == err.format()

    def test_gutter_widens_with_line_number(self):
        source = "\n" * 11 + "[9lives]"
        err = ShortcodeSyntaxError("bad", "[9lives]", 11, source)
        lines = err.format().split("\n")
        assert lines[1] == "   --> <input>:12:1"
        assert lines[3] == "12 | [9lives]"


class TestSyntaxErrorWithoutSource:
    def test_raw_is_the_context_line(self):
        err = ShortcodeSyntaxError("bad", "[9lives]", 14)
        assert (err.line, err.column) == (1, 1)
        assert "1 | [9lives]" in err.format()

    def test_multiline_raw_shows_first_line(self):
        err = ShortcodeSyntaxError("bad", "[a\nb", 0)
        formatted = err.format()
        assert "1 | [a\n" in formatted
        assert formatted.endswith("  | ^^")
