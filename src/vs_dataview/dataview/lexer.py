"""
Lexical analyzer (tokenizer) for where-conditions and template expressions.
"""

from dataclasses import dataclass
from enum import Enum, auto

from vs_dataview.dataview.errors import DataviewSyntaxError


class TokenType(Enum):
    """Token types for expressions."""

    # Keywords
    AND = auto()
    OR = auto()
    NOT = auto()

    # Comparison operators
    EQUALS = auto()  # =, ==, ===
    NOT_EQUALS = auto()  # !=, !==
    LESS_THAN = auto()  # <
    GREATER_THAN = auto()  # >
    LESS_EQUAL = auto()  # <=
    GREATER_EQUAL = auto()  # >=

    # Arithmetic operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Literals
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()

    IDENTIFIER = auto()

    # Punctuation
    COMMA = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    DOT = auto()

    # Special
    EOF = auto()


@dataclass
class Token:
    """A token in an expression."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class ExpressionLexer:
    """Tokenizer for the expression language."""

    # Lowercase only; "And" or "NULL" stay usable as frontmatter keys
    KEYWORDS = {
        "and": TokenType.AND,
        "or": TokenType.OR,
        "not": TokenType.NOT,
        "true": TokenType.BOOLEAN,
        "false": TokenType.BOOLEAN,
        "null": TokenType.NULL,
    }

    # Longest operators first so '===' wins over '==' and '='
    OPERATORS = [
        ("===", TokenType.EQUALS),
        ("!==", TokenType.NOT_EQUALS),
        ("==", TokenType.EQUALS),
        ("!=", TokenType.NOT_EQUALS),
        ("<=", TokenType.LESS_EQUAL),
        (">=", TokenType.GREATER_EQUAL),
        ("&&", TokenType.AND),
        ("||", TokenType.OR),
        ("=", TokenType.EQUALS),
        ("<", TokenType.LESS_THAN),
        (">", TokenType.GREATER_THAN),
        ("!", TokenType.NOT),
        ("+", TokenType.PLUS),
        ("-", TokenType.MINUS),
        ("*", TokenType.STAR),
        ("/", TokenType.SLASH),
        ("%", TokenType.PERCENT),
    ]

    PUNCTUATION = {
        ",": TokenType.COMMA,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
        ".": TokenType.DOT,
    }

    ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the entire input."""
        while self.pos < len(self.text):
            self._skip_whitespace()
            if self.pos >= len(self.text):
                break

            if not self._try_tokenize_one():
                raise DataviewSyntaxError(
                    f"Unexpected character '{self.text[self.pos]}'", self.line, self.column
                )

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens

    def _try_tokenize_one(self) -> bool:
        """Try to tokenize one token. Returns True if successful."""
        return (
            self._match_string()
            or self._match_number()
            or self._match_operator()
            or self._match_identifier()
            or self._match_punctuation()
        )

    def _skip_whitespace(self):
        """Skip whitespace but track newlines."""
        while self.pos < len(self.text) and self.text[self.pos] in " \t\r\n":
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance(self, count: int = 1) -> None:
        self.pos += count
        self.column += count

    def _match_string(self) -> bool:
        """Match string literals in single or double quotes."""
        if self.text[self.pos] not in ('"', "'"):
            return False

        quote = self.text[self.pos]
        start_col = self.column
        self._advance()

        chars = []
        while self.pos < len(self.text) and self.text[self.pos] != quote:
            char = self.text[self.pos]
            if char == "\\" and self.pos + 1 < len(self.text):
                escaped = self.text[self.pos + 1]
                chars.append(self.ESCAPES.get(escaped, escaped))
                self._advance(2)
                continue
            if char == "\n":
                break
            chars.append(char)
            self._advance()

        if self.pos >= len(self.text) or self.text[self.pos] != quote:
            raise DataviewSyntaxError("Unterminated string", self.line, start_col)

        self._advance()  # Skip closing quote
        self.tokens.append(Token(TokenType.STRING, "".join(chars), self.line, start_col))
        return True

    def _match_number(self) -> bool:
        """Match unsigned numeric literals; a leading '-' is a unary operator."""
        if not self.text[self.pos].isdigit():
            return False

        start = self.pos
        start_col = self.column
        while self.pos < len(self.text) and self.text[self.pos].isdigit():
            self._advance()

        # Optional decimal part, only when a digit follows the dot
        if (
            self.pos + 1 < len(self.text)
            and self.text[self.pos] == "."
            and self.text[self.pos + 1].isdigit()
        ):
            self._advance()
            while self.pos < len(self.text) and self.text[self.pos].isdigit():
                self._advance()

        self.tokens.append(Token(TokenType.NUMBER, self.text[start : self.pos], self.line, start_col))
        return True

    def _match_operator(self) -> bool:
        """Match operators."""
        for symbol, token_type in self.OPERATORS:
            if self.text.startswith(symbol, self.pos):
                self.tokens.append(Token(token_type, symbol, self.line, self.column))
                self._advance(len(symbol))
                return True
        return False

    def _match_identifier(self) -> bool:
        """Match identifiers and keywords."""
        char = self.text[self.pos]
        if not (char.isalpha() or char in ("_", "$")):
            return False

        start = self.pos
        start_col = self.column
        while self.pos < len(self.text) and (
            self.text[self.pos].isalnum() or self.text[self.pos] in ("_", "$")
        ):
            self._advance()

        value = self.text[start : self.pos]
        token_type = self.KEYWORDS.get(value, TokenType.IDENTIFIER)
        self.tokens.append(Token(token_type, value, self.line, start_col))
        return True

    def _match_punctuation(self) -> bool:
        """Match punctuation."""
        token_type = self.PUNCTUATION.get(self.text[self.pos])
        if token_type is None:
            return False

        self.tokens.append(Token(token_type, self.text[self.pos], self.line, self.column))
        self._advance()
        return True
