"""
Abstract Syntax Tree (AST) definitions for queries and expressions.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ExpressionNode:
    """Base class for expression nodes in the AST."""

    pass


@dataclass
class LiteralNode(ExpressionNode):
    """Literal value (string, number, boolean, null)."""

    value: Any


@dataclass
class IdentifierNode(ExpressionNode):
    """Bare name (e.g. 'status', 'tp'), resolved against the evaluation scope."""

    name: str


@dataclass
class MemberNode(ExpressionNode):
    """Property access (e.g. 'tp.date', 'tags.length')."""

    target: ExpressionNode
    name: str


@dataclass
class IndexNode(ExpressionNode):
    """Subscript access (e.g. 'tags[0]')."""

    target: ExpressionNode
    index: ExpressionNode


@dataclass
class UnaryOpNode(ExpressionNode):
    """Unary operation ('not', '!', '-')."""

    operator: str
    operand: ExpressionNode


@dataclass
class BinaryOpNode(ExpressionNode):
    """Binary operation (e.g. 'status = "active"', 'priority > 1', 'a + 1')."""

    operator: str  # =, !=, ===, !==, <, >, <=, >=, +, -, *, /, %, AND, OR
    left: ExpressionNode
    right: ExpressionNode


@dataclass
class CallNode(ExpressionNode):
    """Call expression (e.g. 'contains(tags, "bug")', 'tp.date.now("YYYY")')."""

    callee: ExpressionNode
    arguments: list[ExpressionNode]


@dataclass
class FieldSpec:
    """Column of a TABLE clause: a metadata key, optionally indexed ('tags[0]')."""

    source: str
    key: str
    index: int | None = None
    # set when the brackets hold something other than digits
    invalid_index: bool = False


@dataclass
class DataviewQuery:
    """Complete parsed query block."""

    fields: list[FieldSpec] = field(default_factory=list)
    from_tag: str = ""
    condition: str | None = None

    @property
    def headers(self) -> list[str]:
        """Table headers: the link column followed by each field as written."""
        return ["File"] + [f.source for f in self.fields]

    def __repr__(self) -> str:
        parts = [f"DataviewQuery(fields={len(self.fields)}", f"from={self.from_tag!r}"]
        if self.condition:
            parts.append("where=...")
        return ", ".join(parts) + ")"
