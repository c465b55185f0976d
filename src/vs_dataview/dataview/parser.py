"""
Parsers for query blocks and expressions.

DataviewParser splits a query block into its table/from/where clauses.
ExpressionParser turns a where-condition or template expression into an AST.
"""

import re

from loguru import logger

from vs_dataview.dataview.ast import (
    BinaryOpNode,
    CallNode,
    DataviewQuery,
    ExpressionNode,
    FieldSpec,
    IdentifierNode,
    IndexNode,
    LiteralNode,
    MemberNode,
    UnaryOpNode,
)
from vs_dataview.dataview.errors import DataviewSyntaxError
from vs_dataview.dataview.lexer import ExpressionLexer, Token, TokenType

FENCE = re.compile(r"^\s*```[\w-]*\s*$")
LEADING_DIGITS = re.compile(r"^\d+")


class DataviewParser:
    """Parser for table/from/where query blocks."""

    TABLE = "table"
    FROM = "from"
    WHERE = "where"

    def __init__(self, lines: list[str]):
        self.lines = lines

    @classmethod
    def parse(cls, query_text: str) -> DataviewQuery:
        """Parse a query block (fenced or bare) into a DataviewQuery."""
        lines = [
            line.rstrip() for line in query_text.splitlines() if line.strip() and not FENCE.match(line)
        ]
        return cls(lines).parse_query()

    def parse_query(self) -> DataviewQuery:
        """Parse the clauses found in the block's lines."""
        table_clause = self._find_clause(self.TABLE)
        from_clause = self._find_clause(self.FROM)
        where_clause = self._find_clause(self.WHERE)

        if table_clause is None or from_clause is None:
            missing = [
                name
                for name, clause in ((self.TABLE, table_clause), (self.FROM, from_clause))
                if clause is None
            ]
            raise DataviewSyntaxError(f"Invalid query format: missing {' and '.join(missing)} clause")

        query = DataviewQuery(
            fields=self._parse_table_fields(table_clause),
            from_tag=self._parse_from_tag(from_clause),
            condition=self._parse_condition(where_clause),
        )
        logger.debug(f"Parsed query: {query!r}")
        return query

    def _find_clause(self, prefix: str) -> str | None:
        """Return the text after the prefix on the first line starting with it."""
        for line in self.lines:
            if line.startswith(prefix):
                return line[len(prefix) :]
        return None

    def _parse_table_fields(self, clause: str) -> list[FieldSpec]:
        """Parse the comma separated field list of the table clause."""
        sources = [piece.strip() for piece in clause.split(",")]
        fields = [self.parse_field(source) for source in sources if source]
        if not fields:
            raise DataviewSyntaxError("Invalid query format: table clause requires at least one field")
        return fields

    def _parse_from_tag(self, clause: str) -> str:
        tag = clause.strip()
        if tag.startswith("#"):
            tag = tag[1:]
        if not tag:
            raise DataviewSyntaxError("Invalid query format: from clause requires a tag")
        return tag

    def _parse_condition(self, clause: str | None) -> str | None:
        if clause is None:
            return None
        return clause.strip() or None

    @staticmethod
    def parse_field(source: str) -> FieldSpec:
        """Parse 'key' or 'key[index]' into a FieldSpec.

        The index is the run of digits right after the bracket; anything
        else marks the field as unresolvable rather than failing the query.
        """
        if "[" not in source:
            return FieldSpec(source=source, key=source)

        key, _, rest = source.partition("[")
        index_text = rest.split("]", 1)[0].strip()
        digits = LEADING_DIGITS.match(index_text)
        if digits is None:
            return FieldSpec(source=source, key=key.strip(), invalid_index=True)
        return FieldSpec(source=source, key=key.strip(), index=int(digits.group()))


class ExpressionParser:
    """Recursive descent parser for the expression language.

    Precedence, lowest first: or, and, not, equality, comparison,
    additive, multiplicative, unary (! and -), postfix (.name, [i], call).
    """

    EQUALITY = (TokenType.EQUALS, TokenType.NOT_EQUALS)
    # "=" and "==" compare loosely; "===" and "!==" keep operand types apart
    EQUALITY_OPERATORS = {"=": "=", "==": "=", "!=": "!=", "===": "===", "!==": "!=="}
    COMPARISON = (
        TokenType.LESS_THAN,
        TokenType.GREATER_THAN,
        TokenType.LESS_EQUAL,
        TokenType.GREATER_EQUAL,
    )
    ADDITIVE = (TokenType.PLUS, TokenType.MINUS)
    MULTIPLICATIVE = (TokenType.STAR, TokenType.SLASH, TokenType.PERCENT)

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    @classmethod
    def parse(cls, text: str) -> ExpressionNode:
        """Parse an expression string into an AST."""
        tokens = ExpressionLexer(text).tokenize()
        parser = cls(tokens)
        expression = parser.parse_expression()
        if not parser._is_at_end():
            token = parser._current()
            raise DataviewSyntaxError(f"Unexpected token: {token.value}", token.line, token.column)
        return expression

    def parse_expression(self) -> ExpressionNode:
        """Parse an expression (handles operator precedence)."""
        if self._is_at_end():
            token = self._current()
            raise DataviewSyntaxError("Unexpected end of expression", token.line, token.column)
        return self._parse_or_expression()

    def _parse_or_expression(self) -> ExpressionNode:
        """Parse OR expression."""
        left = self._parse_and_expression()

        while self._check(TokenType.OR):
            self._advance()
            right = self._parse_and_expression()
            left = BinaryOpNode(operator="OR", left=left, right=right)

        return left

    def _parse_and_expression(self) -> ExpressionNode:
        """Parse AND expression."""
        left = self._parse_not_expression()

        while self._check(TokenType.AND):
            self._advance()
            right = self._parse_not_expression()
            left = BinaryOpNode(operator="AND", left=left, right=right)

        return left

    def _parse_not_expression(self) -> ExpressionNode:
        """Parse the 'not' keyword, which binds looser than comparisons."""
        if self._check(TokenType.NOT) and self._current().value != "!":
            self._advance()
            return UnaryOpNode(operator="NOT", operand=self._parse_not_expression())
        return self._parse_equality_expression()

    def _parse_equality_expression(self) -> ExpressionNode:
        left = self._parse_comparison_expression()

        while self._check_any(self.EQUALITY):
            operator = self.EQUALITY_OPERATORS[self._advance().value]
            right = self._parse_comparison_expression()
            left = BinaryOpNode(operator=operator, left=left, right=right)

        return left

    def _parse_comparison_expression(self) -> ExpressionNode:
        left = self._parse_additive_expression()

        while self._check_any(self.COMPARISON):
            op_token = self._advance()
            right = self._parse_additive_expression()
            left = BinaryOpNode(operator=op_token.value, left=left, right=right)

        return left

    def _parse_additive_expression(self) -> ExpressionNode:
        left = self._parse_multiplicative_expression()

        while self._check_any(self.ADDITIVE):
            op_token = self._advance()
            right = self._parse_multiplicative_expression()
            left = BinaryOpNode(operator=op_token.value, left=left, right=right)

        return left

    def _parse_multiplicative_expression(self) -> ExpressionNode:
        left = self._parse_unary_expression()

        while self._check_any(self.MULTIPLICATIVE):
            op_token = self._advance()
            right = self._parse_unary_expression()
            left = BinaryOpNode(operator=op_token.value, left=left, right=right)

        return left

    def _parse_unary_expression(self) -> ExpressionNode:
        if self._check(TokenType.NOT) and self._current().value == "!":
            self._advance()
            return UnaryOpNode(operator="NOT", operand=self._parse_unary_expression())
        if self._check(TokenType.MINUS):
            self._advance()
            return UnaryOpNode(operator="-", operand=self._parse_unary_expression())
        return self._parse_postfix_expression()

    def _parse_postfix_expression(self) -> ExpressionNode:
        """Parse member access, indexing and calls chained onto a primary."""
        expr = self._parse_primary_expression()

        while True:
            if self._check(TokenType.DOT):
                self._advance()
                if not self._check(TokenType.IDENTIFIER):
                    raise self._error("Expected property name after '.'")
                expr = MemberNode(target=expr, name=self._advance().value)
            elif self._check(TokenType.LBRACKET):
                self._advance()
                index = self.parse_expression()
                self._expect(TokenType.RBRACKET, "Expected ']' after index")
                expr = IndexNode(target=expr, index=index)
            elif self._check(TokenType.LPAREN):
                self._advance()
                args = self._parse_function_arguments()
                self._expect(TokenType.RPAREN, "Expected ')' after function arguments")
                expr = CallNode(callee=expr, arguments=args)
            else:
                return expr

    def _parse_primary_expression(self) -> ExpressionNode:
        """Parse primary expression (literals, identifiers, parentheses)."""
        # String literal
        if self._check(TokenType.STRING):
            return LiteralNode(value=self._advance().value)

        # Number literal
        if self._check(TokenType.NUMBER):
            value = self._advance().value
            if "." in value:
                return LiteralNode(value=float(value))
            return LiteralNode(value=int(value))

        # Boolean literal
        if self._check(TokenType.BOOLEAN):
            return LiteralNode(value=self._advance().value.lower() == "true")

        # Null literal
        if self._check(TokenType.NULL):
            self._advance()
            return LiteralNode(value=None)

        if self._check(TokenType.IDENTIFIER):
            return IdentifierNode(name=self._advance().value)

        # Parenthesized expression
        if self._check(TokenType.LPAREN):
            self._advance()
            expr = self.parse_expression()
            self._expect(TokenType.RPAREN, "Expected ')' after expression")
            return expr

        if self._is_at_end():
            raise self._error("Unexpected end of expression")
        raise self._error(f"Unexpected token: {self._current().value}")

    def _parse_function_arguments(self) -> list[ExpressionNode]:
        """Parse function arguments."""
        args: list[ExpressionNode] = []

        if self._check(TokenType.RPAREN):
            return args

        args.append(self.parse_expression())

        while self._check(TokenType.COMMA):
            self._advance()
            args.append(self.parse_expression())

        return args

    # Helper methods

    def _current(self) -> Token:
        """Get the current token."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # Return EOF

    def _advance(self) -> Token:
        """Advance to the next token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches the given type."""
        if self._is_at_end():
            return False
        return self._current().type == token_type

    def _check_any(self, token_types: tuple[TokenType, ...]) -> bool:
        """Check if current token matches any of the given types."""
        return any(self._check(t) for t in token_types)

    def _expect(self, token_type: TokenType, message: str) -> Token:
        if not self._check(token_type):
            raise self._error(message)
        return self._advance()

    def _error(self, message: str) -> DataviewSyntaxError:
        token = self._current()
        return DataviewSyntaxError(message, token.line, token.column)

    def _is_at_end(self) -> bool:
        """Check if we're at the end of tokens."""
        return self._current().type == TokenType.EOF
