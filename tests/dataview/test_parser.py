"""Tests for DataviewParser and ExpressionParser."""

import pytest

from vs_dataview.dataview.ast import (
    BinaryOpNode,
    CallNode,
    FieldSpec,
    IdentifierNode,
    IndexNode,
    LiteralNode,
    MemberNode,
    UnaryOpNode,
)
from vs_dataview.dataview.errors import DataviewSyntaxError
from vs_dataview.dataview.parser import DataviewParser, ExpressionParser


class TestParserClauses:
    """Test splitting a block into clauses."""

    def test_parse_fenced_block(self):
        """Test a full fenced block."""
        query = DataviewParser.parse("```vs-dataview\ntable a, b\nfrom #proj\nwhere a > 1\n```")
        assert [f.source for f in query.fields] == ["a", "b"]
        assert query.from_tag == "proj"
        assert query.condition == "a > 1"

    def test_parse_bare_block(self):
        """Test a block without fences."""
        query = DataviewParser.parse("table status\nfrom #project")
        assert query.from_tag == "project"
        assert query.condition is None

    def test_clauses_in_any_order(self):
        """Test clause order does not matter and extra lines are ignored."""
        query = DataviewParser.parse("where done\nsome note\nfrom #tasks\n\ntable title")
        assert [f.source for f in query.fields] == ["title"]
        assert query.from_tag == "tasks"
        assert query.condition == "done"

    def test_first_matching_line_wins(self):
        """Test only the first line with a prefix is used."""
        query = DataviewParser.parse("table a\ntable b\nfrom #x\nfrom #y")
        assert [f.source for f in query.fields] == ["a"]
        assert query.from_tag == "x"

    def test_crlf_line_endings(self):
        """Test Windows line endings."""
        query = DataviewParser.parse("table a\r\nfrom #proj\r\nwhere a > 1\r\n")
        assert query.from_tag == "proj"
        assert query.condition == "a > 1"

    def test_headers(self):
        """Test headers prepend the File column."""
        query = DataviewParser.parse("table a, tags[0]\nfrom #proj")
        assert query.headers == ["File", "a", "tags[0]"]


class TestParserTableClause:
    """Test parsing the table clause."""

    def test_fields_are_trimmed(self):
        """Test whitespace around fields is removed."""
        query = DataviewParser.parse("table   a ,b,  c  \nfrom #p")
        assert [f.source for f in query.fields] == ["a", "b", "c"]

    def test_empty_pieces_are_dropped(self):
        """Test empty comma pieces."""
        query = DataviewParser.parse("table a,, b,\nfrom #p")
        assert [f.source for f in query.fields] == ["a", "b"]

    def test_table_without_fields(self):
        """Test a table clause with no fields is an error."""
        with pytest.raises(DataviewSyntaxError, match="at least one field"):
            DataviewParser.parse("table\nfrom #p")


class TestParserFromClause:
    """Test parsing the from clause."""

    def test_from_without_hash(self):
        """Test the leading # is optional."""
        assert DataviewParser.parse("table a\nfrom proj").from_tag == "proj"

    def test_only_one_hash_is_stripped(self):
        """Test a single leading # is removed."""
        assert DataviewParser.parse("table a\nfrom ##proj").from_tag == "#proj"

    def test_empty_from(self):
        """Test an empty tag is an error."""
        with pytest.raises(DataviewSyntaxError, match="requires a tag"):
            DataviewParser.parse("table a\nfrom #")


class TestParserWhereClause:
    """Test parsing the where clause."""

    def test_empty_where_means_no_condition(self):
        """Test an empty where clause."""
        assert DataviewParser.parse("table a\nfrom #p\nwhere   ").condition is None

    def test_where_is_kept_verbatim(self):
        """Test the condition text is not interpreted by the clause parser."""
        query = DataviewParser.parse('table a\nfrom #p\nwhere status == "done" && a >')
        assert query.condition == 'status == "done" && a >'


class TestParserMissingClauses:
    """Test missing required clauses."""

    def test_missing_from(self):
        """Test a block without from."""
        with pytest.raises(DataviewSyntaxError, match="Invalid query format: missing from"):
            DataviewParser.parse("table a, b\nwhere a > 1")

    def test_missing_table(self):
        """Test a block without table."""
        with pytest.raises(DataviewSyntaxError, match="missing table"):
            DataviewParser.parse("from #p")

    def test_missing_both(self):
        """Test an empty block."""
        with pytest.raises(DataviewSyntaxError, match="missing table and from"):
            DataviewParser.parse("```vs-dataview\n```")

    def test_prefix_is_left_anchored(self):
        """Test indented clause lines do not count."""
        with pytest.raises(DataviewSyntaxError, match="missing table"):
            DataviewParser.parse("  table a\nfrom #p")

    def test_prefix_is_case_sensitive(self):
        """Test upper-case clause names do not count."""
        with pytest.raises(DataviewSyntaxError):
            DataviewParser.parse("TABLE a\nFROM #p")


class TestParseField:
    """Test parsing field specifiers."""

    def test_plain_key(self):
        assert DataviewParser.parse_field("status") == FieldSpec(source="status", key="status")

    def test_indexed_key(self):
        assert DataviewParser.parse_field("tags[1]") == FieldSpec(
            source="tags[1]", key="tags", index=1
        )

    def test_index_with_spaces(self):
        assert DataviewParser.parse_field("tags[ 2 ]").index == 2

    def test_non_numeric_index(self):
        spec = DataviewParser.parse_field("tags[x]")
        assert spec.key == "tags"
        assert spec.invalid_index is True

    def test_negative_index(self):
        assert DataviewParser.parse_field("tags[-1]").invalid_index is True


class TestExpressionParser:
    """Test parsing expressions."""

    def test_comparison(self):
        assert ExpressionParser.parse("a > 1") == BinaryOpNode(
            operator=">", left=IdentifierNode("a"), right=LiteralNode(1)
        )

    def test_loose_equality_is_normalized(self):
        """Test = and == parse to the same loose operator."""
        for text in ("a = 1", "a == 1"):
            assert ExpressionParser.parse(text).operator == "="
        assert ExpressionParser.parse("a != 1").operator == "!="

    def test_strict_equality_is_kept_apart(self):
        assert ExpressionParser.parse("a === 1").operator == "==="
        assert ExpressionParser.parse("a !== 1").operator == "!=="

    def test_and_binds_tighter_than_or(self):
        expr = ExpressionParser.parse("a or b and c")
        assert expr.operator == "OR"
        assert expr.right == BinaryOpNode(
            operator="AND", left=IdentifierNode("b"), right=IdentifierNode("c")
        )

    def test_not_keyword_wraps_comparison(self):
        expr = ExpressionParser.parse("not a == b")
        assert isinstance(expr, UnaryOpNode)
        assert isinstance(expr.operand, BinaryOpNode)

    def test_bang_binds_to_operand(self):
        expr = ExpressionParser.parse("!a == b")
        assert isinstance(expr, BinaryOpNode)
        assert expr.left == UnaryOpNode(operator="NOT", operand=IdentifierNode("a"))

    def test_arithmetic_precedence(self):
        expr = ExpressionParser.parse("1 + 2 * 3")
        assert expr.operator == "+"
        assert expr.right.operator == "*"

    def test_parentheses(self):
        expr = ExpressionParser.parse("(1 + 2) * 3")
        assert expr.operator == "*"
        assert expr.left.operator == "+"

    def test_float_and_negative_literals(self):
        assert ExpressionParser.parse("1.5") == LiteralNode(1.5)
        assert ExpressionParser.parse("-1") == UnaryOpNode(operator="-", operand=LiteralNode(1))

    def test_helper_call_chain(self):
        expr = ExpressionParser.parse('tp.date.now("YYYY")')
        assert expr == CallNode(
            callee=MemberNode(
                target=MemberNode(target=IdentifierNode("tp"), name="date"), name="now"
            ),
            arguments=[LiteralNode("YYYY")],
        )

    def test_index_access(self):
        assert ExpressionParser.parse("tags[0]") == IndexNode(
            target=IdentifierNode("tags"), index=LiteralNode(0)
        )

    def test_function_with_arguments(self):
        expr = ExpressionParser.parse('contains(tags, "dev")')
        assert isinstance(expr, CallNode)
        assert len(expr.arguments) == 2

    def test_trailing_tokens(self):
        with pytest.raises(DataviewSyntaxError, match="Unexpected token: b"):
            ExpressionParser.parse("a b")

    def test_empty_expression(self):
        with pytest.raises(DataviewSyntaxError, match="Unexpected end of expression"):
            ExpressionParser.parse("")

    def test_dangling_operator(self):
        with pytest.raises(DataviewSyntaxError):
            ExpressionParser.parse("a >")

    def test_unclosed_parenthesis(self):
        with pytest.raises(DataviewSyntaxError, match="Expected '\\)'"):
            ExpressionParser.parse("(a")
