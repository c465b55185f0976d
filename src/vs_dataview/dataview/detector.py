"""
Detector for fenced query blocks in markdown content.
"""

import re
from dataclasses import dataclass

from vs_dataview.dataview.errors import DataviewParseError

DEFAULT_LANGUAGE = "vs-dataview"


@dataclass
class DataviewBlock:
    """A detected query block."""

    query: str
    start_line: int  # line of the opening fence, 0-based
    end_line: int  # line of the closing fence, 0-based

    def __repr__(self) -> str:
        return f"DataviewBlock(lines={self.start_line}-{self.end_line})"


class DataviewDetector:
    """Detects ```vs-dataview blocks in markdown content."""

    CODEBLOCK_END = re.compile(r"^```\s*$")

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = language
        self.codeblock_start = re.compile(rf"^```{re.escape(language)}\s*$")

    def is_query_block(self, text: str) -> bool:
        """Check whether a selection is a query block: it must open with the fence."""
        return text.startswith(f"```{self.language}")

    def require_query_block(self, text: str) -> str:
        """Return the selection when it is a query block.

        Raises:
            DataviewParseError: If the selection does not open with the fence
        """
        if not self.is_query_block(text):
            raise DataviewParseError(f"Selected text is not a valid `{self.language}` block")
        return text

    def detect_queries(self, content: str) -> list[DataviewBlock]:
        """
        Detect all closed query blocks in markdown content.

        Returns:
            List of DataviewBlock objects containing query text and location.
        """
        blocks = []
        lines = content.split("\n")
        i = 0

        while i < len(lines):
            if self.codeblock_start.match(lines[i].rstrip("\r")):
                start_line = i
                query_lines = []
                i += 1

                # Collect query lines until we hit the closing ```
                while i < len(lines):
                    if self.CODEBLOCK_END.match(lines[i].rstrip("\r")):
                        blocks.append(
                            DataviewBlock(
                                query="\n".join(query_lines),
                                start_line=start_line,
                                end_line=i,
                            )
                        )
                        break
                    query_lines.append(lines[i].rstrip("\r"))
                    i += 1

            i += 1

        return blocks

    @staticmethod
    def replace_blocks(content: str, replacements: list[tuple[DataviewBlock, str]]) -> str:
        """Replace each block (fences included) with its rendered text.

        Rendered lines take the content's line ending, so CRLF files stay CRLF.
        """
        crlf = "\r\n" in content
        lines = content.split("\n")
        # Bottom-up so earlier line numbers stay valid
        for block, text in sorted(replacements, key=lambda item: item[0].start_line, reverse=True):
            rendered = text.split("\n")
            if crlf:
                rendered = [line + "\r" for line in rendered[:-1]] + [rendered[-1]]
            # The last rendered line keeps the ending of the closing fence
            if lines[block.end_line].endswith("\r"):
                rendered[-1] += "\r"
            lines[block.start_line : block.end_line + 1] = rendered
        return "\n".join(lines)
