"""
Expression evaluator for where-conditions and template placeholders.

Evaluates AST expressions against a scope: a frontmatter record for
conditions, the helper namespace for templates. Nothing outside the scope,
the builtin functions and the string/list methods below is reachable.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from loguru import logger

from vs_dataview.dataview.ast import (
    BinaryOpNode,
    CallNode,
    ExpressionNode,
    IdentifierNode,
    IndexNode,
    LiteralNode,
    MemberNode,
    UnaryOpNode,
)
from vs_dataview.dataview.errors import DataviewExecutionError
from vs_dataview.dataview.parser import ExpressionParser
from vs_dataview.dataview.values import is_truthy, parse_date, to_number, to_text


@dataclass
class EvalResult:
    """Outcome of a guarded evaluation: a value, or the error that replaced it."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _kind(value: Any) -> str:
    """Scripting type of a value, used by strict equality and coercion."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, date):
        return "date"
    if isinstance(value, (list, tuple)):
        return "list"
    return "record"


# Kinds that loose equality and relational operators convert to numbers
_NUMERIC_KINDS = ("boolean", "number", "string")
_RELATIONAL_KINDS = _NUMERIC_KINDS + ("null",)


def _require_string(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise DataviewExecutionError(f"{name}() requires a string")
    return value


def _includes(target: Any, item: Any) -> bool:
    if isinstance(target, str):
        return to_text(item) in target
    return item in target


METHODS: dict[str, Callable[..., Any]] = {
    "includes": _includes,
    "startsWith": lambda target, prefix: _require_string("startsWith", target).startswith(
        to_text(prefix)
    ),
    "endsWith": lambda target, suffix: _require_string("endsWith", target).endswith(
        to_text(suffix)
    ),
    "toLowerCase": lambda target: _require_string("toLowerCase", target).lower(),
    "toUpperCase": lambda target: _require_string("toUpperCase", target).upper(),
    "trim": lambda target: _require_string("trim", target).strip(),
}


class ExpressionEvaluator:
    """Evaluates expressions in the context of a scope."""

    def __init__(self, scope: dict[str, Any]):
        self.scope = scope

    def evaluate(self, expression: ExpressionNode) -> Any:
        """
        Evaluate an expression node.

        Args:
            expression: AST expression node

        Returns:
            Evaluated value

        Raises:
            DataviewExecutionError: unknown names, unsupported operands and calls
        """
        if isinstance(expression, LiteralNode):
            return expression.value

        elif isinstance(expression, IdentifierNode):
            if expression.name in self.scope:
                return self.scope[expression.name]
            raise DataviewExecutionError(f"{expression.name} is not defined")

        elif isinstance(expression, MemberNode):
            target = self.evaluate(expression.target)
            return self._get_member(target, expression.name, expression)

        elif isinstance(expression, IndexNode):
            target = self.evaluate(expression.target)
            index = self.evaluate(expression.index)
            return self._get_index(target, index, expression)

        elif isinstance(expression, UnaryOpNode):
            operand = self.evaluate(expression.operand)
            if expression.operator == "NOT":
                return not is_truthy(operand)
            if not _is_number(operand):
                raise DataviewExecutionError(f"Cannot negate {to_text(operand)!r}")
            return -operand

        elif isinstance(expression, BinaryOpNode):
            return self._eval_binary_op(expression)

        elif isinstance(expression, CallNode):
            return self._eval_call(expression)

        else:
            raise DataviewExecutionError(f"Unknown expression type: {type(expression)}")

    def try_evaluate(self, expression: ExpressionNode | str) -> EvalResult:
        """Parse (when given text) and evaluate, capturing any failure in the result."""
        try:
            if isinstance(expression, str):
                expression = ExpressionParser.parse(expression)
            return EvalResult(value=self.evaluate(expression))
        except Exception as e:
            return EvalResult(error=str(e) or type(e).__name__)

    def matches(self, condition: ExpressionNode | str) -> bool:
        """Evaluate a condition; failures count as not matching."""
        result = self.try_evaluate(condition)
        if not result.ok:
            logger.debug(f"Condition evaluation failed: {result.error}")
            return False
        return is_truthy(result.value)

    # Operators

    def _eval_binary_op(self, expression: BinaryOpNode) -> Any:
        """Evaluate binary operations; AND/OR short-circuit and return an operand."""
        operator = expression.operator
        left = self.evaluate(expression.left)

        if operator == "AND":
            return self.evaluate(expression.right) if is_truthy(left) else left
        if operator == "OR":
            return left if is_truthy(left) else self.evaluate(expression.right)

        right = self.evaluate(expression.right)

        if operator == "=":
            return self._loose_equals(left, right)
        elif operator == "!=":
            return not self._loose_equals(left, right)
        elif operator == "===":
            return self._strict_equals(left, right)
        elif operator == "!==":
            return not self._strict_equals(left, right)
        elif operator in ("<", ">", "<=", ">="):
            return self._compare(operator, left, right)
        elif operator == "+":
            if isinstance(left, str) or isinstance(right, str):
                return to_text(left) + to_text(right)
            return self._arithmetic(operator, left, right)
        elif operator in ("-", "*", "/", "%"):
            return self._arithmetic(operator, left, right)
        else:
            raise DataviewExecutionError(f"Unknown operator: {operator}")

    @staticmethod
    def _coerce_dates(left: Any, right: Any) -> tuple[Any, Any]:
        """Compare dates with date-shaped strings as dates."""
        if isinstance(left, date) or isinstance(right, date):
            left_date, right_date = parse_date(left), parse_date(right)
            if left_date is not None and right_date is not None:
                return left_date, right_date
        return left, right

    def _loose_equals(self, left: Any, right: Any) -> bool:
        """'=' and '==': null only equals null; mixed scalars compare as numbers."""
        left, right = self._coerce_dates(left, right)
        if left is None or right is None:
            return left is None and right is None

        left_kind, right_kind = _kind(left), _kind(right)
        if left_kind == right_kind:
            return left == right
        if left_kind in _NUMERIC_KINDS and right_kind in _NUMERIC_KINDS:
            return to_number(left) == to_number(right)
        return False

    @staticmethod
    def _strict_equals(left: Any, right: Any) -> bool:
        """'===': equal values of the same kind, so 2 !== '2' and true !== 1."""
        return _kind(left) == _kind(right) and left == right

    def _compare(self, operator: str, left: Any, right: Any) -> bool:
        left, right = self._coerce_dates(left, right)
        # Two strings compare as text, any other scalar pair as numbers
        if not (isinstance(left, str) and isinstance(right, str)):
            if _kind(left) in _RELATIONAL_KINDS and _kind(right) in _RELATIONAL_KINDS:
                left, right = to_number(left), to_number(right)
                if math.isnan(left) or math.isnan(right):
                    return False
        try:
            if operator == "<":
                return left < right
            elif operator == ">":
                return left > right
            elif operator == "<=":
                return left <= right
            return left >= right
        except TypeError as e:
            raise DataviewExecutionError(
                f"Cannot compare {type(left).__name__} with {type(right).__name__}"
            ) from e

    @staticmethod
    def _arithmetic(operator: str, left: Any, right: Any) -> Any:
        if not (_is_number(left) and _is_number(right)):
            raise DataviewExecutionError(
                f"Unsupported operands for {operator}: {to_text(left)!r} and {to_text(right)!r}"
            )
        if operator == "+":
            return left + right
        elif operator == "-":
            return left - right
        elif operator == "*":
            return left * right

        if right == 0:
            # Scripting semantics: x / 0 is a signed Infinity, 0 / 0 and x % 0 are NaN
            if operator == "%" or left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1, right)
        if operator == "/":
            return left / right
        # Remainder takes the sign of the dividend
        remainder = math.fmod(left, right)
        if isinstance(left, int) and isinstance(right, int):
            return int(remainder)
        return remainder

    # Access

    def _get_member(self, target: Any, name: str, node: MemberNode) -> Any:
        if target is None:
            raise DataviewExecutionError(
                f"Cannot read property '{name}' of {describe(node.target)}, which is null"
            )
        if isinstance(target, dict):
            return target.get(name)
        if name == "length" and isinstance(target, (str, list, tuple)):
            return len(target)
        return None

    @staticmethod
    def _get_index(target: Any, index: Any, node: IndexNode) -> Any:
        if target is None:
            raise DataviewExecutionError(f"Cannot index {describe(node.target)}, which is null")
        if isinstance(target, dict):
            return target.get(to_text(index))
        if isinstance(target, (list, tuple, str)):
            if not _is_number(index) or index != int(index) or index < 0 or index >= len(target):
                return None
            return target[int(index)]
        return None

    def _eval_call(self, expression: CallNode) -> Any:
        callee = expression.callee
        args = [self.evaluate(arg) for arg in expression.arguments]

        if isinstance(callee, MemberNode):
            target = self.evaluate(callee.target)
            member = self._get_member(target, callee.name, callee)
            if callable(member):
                return member(*args)
            if callee.name in METHODS and isinstance(target, (str, list, tuple)):
                return METHODS[callee.name](target, *args)
            raise DataviewExecutionError(f"{describe(callee)} is not a function")

        if isinstance(callee, IdentifierNode):
            value = self.scope.get(callee.name)
            if callable(value):
                return value(*args)
            if callee.name in FUNCTIONS:
                return FUNCTIONS[callee.name](*args)
            if callee.name not in self.scope:
                raise DataviewExecutionError(f"{callee.name} is not defined")
            raise DataviewExecutionError(f"{callee.name} is not a function")

        value = self.evaluate(callee)
        if not callable(value):
            raise DataviewExecutionError(f"{describe(callee)} is not a function")
        return value(*args)


def _contains(*args: Any) -> bool:
    if len(args) != 2:
        raise DataviewExecutionError("contains() requires 2 arguments")
    collection, value = args
    if isinstance(collection, (list, tuple)):
        return value in collection
    elif isinstance(collection, str):
        return to_text(value) in collection
    return False


def _length(*args: Any) -> int:
    if len(args) != 1:
        raise DataviewExecutionError("length() requires 1 argument")
    value = args[0]
    if isinstance(value, (str, list, tuple, dict)):
        return len(value)
    return 0


def _case(name: str, convert: Callable[[str], str]) -> Callable[..., Any]:
    def apply(*args: Any) -> Any:
        if len(args) != 1:
            raise DataviewExecutionError(f"{name}() requires 1 argument")
        value = args[0]
        return convert(value) if isinstance(value, str) else value

    return apply


FUNCTIONS: dict[str, Callable[..., Any]] = {
    "contains": _contains,
    "length": _length,
    "lower": _case("lower", str.lower),
    "upper": _case("upper", str.upper),
}


def describe(node: ExpressionNode) -> str:
    """Short source-like rendering of a node for error messages."""
    if isinstance(node, IdentifierNode):
        return node.name
    if isinstance(node, MemberNode):
        return f"{describe(node.target)}.{node.name}"
    if isinstance(node, IndexNode):
        return f"{describe(node.target)}[{describe(node.index)}]"
    if isinstance(node, CallNode):
        return f"{describe(node.callee)}(...)"
    if isinstance(node, LiteralNode):
        return repr(node.value)
    return "expression"
