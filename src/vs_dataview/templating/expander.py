"""Expansion of ``<% ... %>`` placeholders in template text."""

import re
from datetime import datetime
from typing import Any, Callable, Optional

from loguru import logger

from vs_dataview.dataview.executor.expression_eval import ExpressionEvaluator
from vs_dataview.dataview.values import to_text
from vs_dataview.templating.date_helpers import DateHelpers

PLACEHOLDER = re.compile(r"<%([\s\S]*?)%>")

Clock = Callable[[], datetime]


class TemplateExpander:
    """Replaces each placeholder with the value of its expression.

    Expressions see only the ``tp`` namespace. A failing placeholder is
    replaced by an ``<Error: ...>`` marker and the others still expand.
    """

    def __init__(self, clock: Clock = datetime.now):
        self.clock = clock

    def build_scope(self, now: datetime) -> dict[str, Any]:
        return {"tp": {"date": DateHelpers(now).namespace()}}

    def expand(self, text: str, now: Optional[datetime] = None) -> str:
        """Expand every placeholder in text.

        Args:
            text: Template text
            now: Instant seen by the date helpers; the clock is read once when omitted

        Returns:
            Text with placeholders replaced, left to right
        """
        if not PLACEHOLDER.search(text):
            return text

        evaluator = ExpressionEvaluator(self.build_scope(now or self.clock()))
        return PLACEHOLDER.sub(lambda match: self._evaluate(evaluator, match.group(1)), text)

    def _evaluate(self, evaluator: ExpressionEvaluator, code: str) -> str:
        result = evaluator.try_evaluate(code.strip())
        if not result.ok:
            logger.error(f"Error evaluating template code: {code.strip()!r}: {result.error}")
            return f"<Error: {result.error}>"
        # Placeholders print null as text; table cells leave it empty
        if result.value is None:
            return "null"
        return to_text(result.value)
