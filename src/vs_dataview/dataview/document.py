"""
Document model: one markdown file's display name and frontmatter record.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from vs_dataview.dataview.values import MetadataValue, to_text

TAG_SEPARATORS = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class Document:
    """A markdown document as seen by a query."""

    name: str
    path: Path
    metadata: dict[str, MetadataValue] = field(default_factory=dict)

    @property
    def link(self) -> str:
        """Wiki link used as the first cell of a table row."""
        return f"[[{self.name}]]"

    @property
    def tags(self) -> list[str]:
        """Normalized tags: list or comma/space separated string, leading '#' dropped."""
        raw = self.metadata.get("tags")
        if raw is None:
            return []
        if isinstance(raw, str):
            items = [item for item in TAG_SEPARATORS.split(raw) if item]
        elif isinstance(raw, (list, tuple)):
            items = [to_text(item).strip() for item in raw]
        else:
            items = [to_text(raw).strip()]
        return [item[1:] if item.startswith("#") else item for item in items]

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags
