"""Template placeholder expansion."""

from vs_dataview.templating.date_helpers import DateHelpers, ordinal
from vs_dataview.templating.expander import PLACEHOLDER, TemplateExpander

__all__ = [
    "DateHelpers",
    "PLACEHOLDER",
    "TemplateExpander",
    "ordinal",
]
