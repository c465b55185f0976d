"""
Exceptions raised while reading query blocks and evaluating expressions.
"""


class DataviewError(Exception):
    """Base class for query and expression errors."""


class DataviewSyntaxError(DataviewError):
    """A query block or expression that does not parse.

    Clause errors carry no position; expression errors carry the line and
    column of the offending token.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(message + self.location)

    @property
    def location(self) -> str:
        if self.line is None:
            return ""
        if self.column is None:
            return f" at line {self.line}"
        return f" at line {self.line}, column {self.column}"


class DataviewParseError(DataviewError):
    """Selected text is not a query block."""


class DataviewExecutionError(DataviewError):
    """An expression failed while being evaluated against its scope."""
