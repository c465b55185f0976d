"""
Query Executor.

Executes parsed queries against a collection of documents.
"""

from vs_dataview.dataview.executor.executor import DataviewExecutor
from vs_dataview.dataview.executor.expression_eval import EvalResult, ExpressionEvaluator
from vs_dataview.dataview.executor.field_resolver import FieldResolver
from vs_dataview.dataview.executor.result_formatter import ResultFormatter

__all__ = [
    "DataviewExecutor",
    "EvalResult",
    "ExpressionEvaluator",
    "FieldResolver",
    "ResultFormatter",
]
