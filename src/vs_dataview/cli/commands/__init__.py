"""CLI commands for vs-dataview."""

from . import table, template

__all__ = [
    "table",
    "template",
]
