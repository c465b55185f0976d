"""
Field resolver for table columns.

Resolves field specifiers like 'status', 'tags[0]' or 'project.owner'
against a document's frontmatter record and renders them for a table cell.
"""

from typing import Any

from vs_dataview.dataview.ast import FieldSpec
from vs_dataview.dataview.parser import DataviewParser
from vs_dataview.dataview.values import MetadataValue, to_display

_MISSING = object()


class FieldResolver:
    """Resolves field values from frontmatter records."""

    @classmethod
    def lookup(cls, record: dict[str, MetadataValue], spec: FieldSpec) -> MetadataValue:
        """
        Look up the raw value a field specifier points at.

        Args:
            record: Frontmatter record
            spec: Parsed field specifier

        Returns:
            The raw value, or None when the key, index or path does not resolve
        """
        if spec.invalid_index:
            return None

        value = cls._lookup_key(record, spec.key)
        if value is _MISSING:
            return None

        if spec.index is None:
            return value

        if not isinstance(value, (list, tuple)):
            return None
        if spec.index >= len(value):
            return None
        return value[spec.index]

    @classmethod
    def resolve(cls, record: dict[str, MetadataValue], spec: FieldSpec | str) -> str:
        """
        Resolve a field specifier to its cell text.

        Dates render as 'Month DD, YYYY'. Anything that does not resolve
        renders as an empty string; zero and false render literally.
        """
        if isinstance(spec, str):
            spec = DataviewParser.parse_field(spec)
        return to_display(cls.lookup(record, spec))

    @staticmethod
    def _lookup_key(record: dict[str, MetadataValue], key: str) -> Any:
        """Find a key directly, then as a dotted path through nested records."""
        if key in record:
            return record[key]
        if "." not in key:
            return _MISSING

        value: Any = record
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return _MISSING
            value = value[part]
        return value
