"""
Main executor for queries.

Executes parsed queries against a collection of documents.
"""

from typing import Iterable

from loguru import logger

from vs_dataview.dataview.ast import DataviewQuery, ExpressionNode
from vs_dataview.dataview.document import Document
from vs_dataview.dataview.errors import DataviewSyntaxError
from vs_dataview.dataview.executor.expression_eval import ExpressionEvaluator
from vs_dataview.dataview.executor.field_resolver import FieldResolver
from vs_dataview.dataview.executor.result_formatter import ResultFormatter
from vs_dataview.dataview.parser import DataviewParser, ExpressionParser


class DataviewExecutor:
    """Executes queries against document collections."""

    def __init__(self, documents: Iterable[Document]):
        """
        Initialize executor with a collection of documents.

        Args:
            documents: Documents in discovery order; iterated once per query
        """
        self.documents = documents
        self.field_resolver = FieldResolver()
        self.formatter = ResultFormatter()

    def run(self, query_text: str) -> str:
        """Parse a query block and execute it.

        Raises:
            DataviewSyntaxError: If the block lacks a table or from clause.
                Raised before any document is read.
        """
        return self.execute(DataviewParser.parse(query_text))

    def execute(self, query: DataviewQuery) -> str:
        """
        Execute a query and return the rendered table.

        Args:
            query: Parsed query

        Returns:
            Markdown table string
        """
        rows = self.build_rows(query)
        logger.info(f"Query from #{query.from_tag} matched {len(rows)} documents")
        return self.formatter.format_table(query.headers, rows)

    def build_rows(self, query: DataviewQuery) -> list[list[str]]:
        """Build one row per matching document, in discovery order."""
        condition: ExpressionNode | None = None
        if query.condition:
            try:
                condition = ExpressionParser.parse(query.condition)
            except DataviewSyntaxError as e:
                # A condition that cannot parse excludes every row
                logger.warning(f"Ignoring all rows, where clause does not parse: {e}")
                return []

        rows = []
        for document in self.documents:
            if not document.has_tag(query.from_tag):
                continue
            if condition is not None and not ExpressionEvaluator(document.metadata).matches(condition):
                continue

            row = [document.link]
            row.extend(self.field_resolver.resolve(document.metadata, field) for field in query.fields)
            rows.append(row)

        return rows
