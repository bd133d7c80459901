"""Tests for the line tokenizer."""

from pipesh.tokenizer import tokenize


class TestTokenize:
    """Verify how a raw line is split into words."""

    def test_empty_line_has_no_tokens(self) -> None:
        """Empty and blank lines should produce no tokens."""
        assert tokenize("") == []
        assert tokenize("   \t ") == []

    def test_splits_on_whitespace(self) -> None:
        """Runs of whitespace separate words."""
        assert tokenize("/bin/echo  a   b") == ["/bin/echo", "a", "b"]

    def test_operators_are_separate_words(self) -> None:
        """Operators written with spaces come out as their own tokens."""
        assert tokenize("/bin/cat < in | /bin/sort >> out") == [
            "/bin/cat", "<", "in", "|", "/bin/sort", ">>", "out",
        ]

    def test_double_quotes_keep_spaces(self) -> None:
        """A double-quoted word stays one token without its quotes."""
        assert tokenize('/bin/echo "hello world" x') == ["/bin/echo", "hello world", "x"]

    def test_single_quotes_keep_spaces(self) -> None:
        """A single-quoted word stays one token without its quotes."""
        assert tokenize("/bin/echo 'a  b'") == ["/bin/echo", "a  b"]

    def test_escaped_quotes_are_unescaped(self) -> None:
        """Backslash-escaped quotes lose the backslash."""
        assert tokenize(r'/bin/echo \"hi\"') == ["/bin/echo", '"hi"']

    def test_unterminated_quote_is_a_plain_word(self) -> None:
        """An unmatched quote does not swallow the rest of the line."""
        assert tokenize('/bin/echo "abc def') == ["/bin/echo", '"abc', "def"]
