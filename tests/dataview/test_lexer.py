"""Tests for ExpressionLexer."""

import pytest

from vs_dataview.dataview.errors import DataviewSyntaxError
from vs_dataview.dataview.lexer import ExpressionLexer, TokenType


def token_types(text):
    return [token.type for token in ExpressionLexer(text).tokenize()]


class TestLexerOperators:
    """Test tokenizing operators."""

    def test_comparison_and_logical(self):
        """Test a condition mixing comparison and logical operators."""
        assert token_types('a >= 1 && b != "x"') == [
            TokenType.IDENTIFIER,
            TokenType.GREATER_EQUAL,
            TokenType.NUMBER,
            TokenType.AND,
            TokenType.IDENTIFIER,
            TokenType.NOT_EQUALS,
            TokenType.STRING,
            TokenType.EOF,
        ]

    def test_equality_spellings(self):
        """Test =, == and === all lex as EQUALS."""
        tokens = ExpressionLexer("a = b == c === d !== e").tokenize()
        assert [t.value for t in tokens if t.type == TokenType.EQUALS] == ["=", "==", "==="]
        assert [t.value for t in tokens if t.type == TokenType.NOT_EQUALS] == ["!=="]

    def test_bang_is_not(self):
        """Test ! lexes as NOT."""
        assert token_types("!done") == [TokenType.NOT, TokenType.IDENTIFIER, TokenType.EOF]

    def test_arithmetic(self):
        """Test arithmetic operators."""
        assert token_types("1+2-3*4/5%6")[1::2] == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STAR,
            TokenType.SLASH,
            TokenType.PERCENT,
            TokenType.EOF,
        ]


class TestLexerKeywords:
    """Test keywords and identifiers."""

    def test_keywords(self):
        assert token_types("a and b or not c") == [
            TokenType.IDENTIFIER,
            TokenType.AND,
            TokenType.IDENTIFIER,
            TokenType.OR,
            TokenType.NOT,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    @pytest.mark.parametrize("word", ["And", "OR", "Not", "True", "FALSE", "Null"])
    def test_keywords_are_lowercase_only(self, word):
        """Test capitalized keywords lex as identifiers, so they can name fields."""
        assert token_types(word) == [TokenType.IDENTIFIER, TokenType.EOF]

    def test_boolean_and_null(self):
        """Test literal keywords keep their text."""
        tokens = ExpressionLexer("true FALSE null").tokenize()
        assert [(t.type, t.value) for t in tokens[:3]] == [
            (TokenType.BOOLEAN, "true"),
            (TokenType.BOOLEAN, "false"),
            (TokenType.NULL, "null"),
        ]

    def test_member_access_splits_on_dot(self):
        """Test dotted names lex as identifiers joined by DOT."""
        assert token_types("tp.date.now") == [
            TokenType.IDENTIFIER,
            TokenType.DOT,
            TokenType.IDENTIFIER,
            TokenType.DOT,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]


class TestLexerLiterals:
    """Test string and number literals."""

    def test_strings_in_either_quote(self):
        """Test single and double quoted strings."""
        tokens = ExpressionLexer("'one' \"two\"").tokenize()
        assert [t.value for t in tokens[:2]] == ["one", "two"]

    def test_string_escapes(self):
        """Test escaped quotes and newlines."""
        tokens = ExpressionLexer(r'"say \"hi\"\n"').tokenize()
        assert tokens[0].value == 'say "hi"\n'

    def test_decimal_number(self):
        """Test decimal numbers."""
        tokens = ExpressionLexer("1.5").tokenize()
        assert (tokens[0].type, tokens[0].value) == (TokenType.NUMBER, "1.5")

    def test_number_followed_by_dot(self):
        """Test a dot without digits is not part of the number."""
        assert token_types("1.x") == [
            TokenType.NUMBER,
            TokenType.DOT,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_minus_is_an_operator(self):
        """Test negative numbers lex as MINUS then NUMBER."""
        assert token_types("-1") == [TokenType.MINUS, TokenType.NUMBER, TokenType.EOF]


class TestLexerErrors:
    """Test lexer errors."""

    def test_unterminated_string(self):
        """Test unterminated strings raise."""
        with pytest.raises(DataviewSyntaxError, match="Unterminated string"):
            ExpressionLexer('"open').tokenize()

    def test_unexpected_character(self):
        """Test unknown characters raise with their position."""
        with pytest.raises(DataviewSyntaxError, match="Unexpected character '@' at line 1, column 3"):
            ExpressionLexer("a @ b").tokenize()
