"""
Query parser and executor for vs-dataview.

This module provides parsing and execution of table/from/where query blocks
over the frontmatter of markdown documents.
"""

from vs_dataview.dataview.ast import (
    DataviewQuery,
    ExpressionNode,
    FieldSpec,
)
from vs_dataview.dataview.detector import DataviewBlock, DataviewDetector
from vs_dataview.dataview.document import Document
from vs_dataview.dataview.errors import (
    DataviewError,
    DataviewExecutionError,
    DataviewParseError,
    DataviewSyntaxError,
)
from vs_dataview.dataview.executor import (
    DataviewExecutor,
    EvalResult,
    ExpressionEvaluator,
    FieldResolver,
    ResultFormatter,
)
from vs_dataview.dataview.lexer import ExpressionLexer, Token, TokenType
from vs_dataview.dataview.parser import DataviewParser, ExpressionParser

__all__ = [
    # AST
    "DataviewQuery",
    "ExpressionNode",
    "FieldSpec",
    # Detector
    "DataviewBlock",
    "DataviewDetector",
    "Document",
    # Errors
    "DataviewError",
    "DataviewExecutionError",
    "DataviewParseError",
    "DataviewSyntaxError",
    # Executor
    "DataviewExecutor",
    "EvalResult",
    "ExpressionEvaluator",
    "FieldResolver",
    "ResultFormatter",
    # Lexer
    "ExpressionLexer",
    "Token",
    "TokenType",
    # Parser
    "DataviewParser",
    "ExpressionParser",
]
