"""
Result formatter for query results.

Formats header and row lists as a markdown table.
"""


class ResultFormatter:
    """Formats query results for display."""

    DIVIDER = "---"

    @classmethod
    def format_table(cls, headers: list[str], rows: list[list[str]]) -> str:
        """
        Format rows as a markdown table.

        Rows are written in the order given and are not checked against the
        header count. With no rows only the header and divider are returned.

        Args:
            headers: Column headers
            rows: Rendered cells, one list per row

        Returns:
            Markdown table string without a trailing newline
        """
        lines = [
            cls._format_row(headers),
            cls._format_row([cls.DIVIDER] * len(headers)),
        ]
        lines.extend(cls._format_row(row) for row in rows)
        return "\n".join(lines)

    @staticmethod
    def _format_row(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"
