"""
Coercion rules for frontmatter values.

Frontmatter parses into plain Python values: str, int, float, bool,
date/datetime (YAML turns bare dates into date objects), lists, nested dicts
and None. These helpers decide how such values are rendered, compared as
dates and tested for truthiness.
"""

import json
import math
import re
from datetime import date, datetime
from typing import Any, Union

MetadataValue = Union[str, int, float, bool, date, datetime, list, dict, None]

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

_MONTHS_BY_NAME = {name.lower(): i for i, name in enumerate(MONTH_NAMES, start=1)}
_MONTHS_BY_NAME.update({name[:3].lower(): i for i, name in enumerate(MONTH_NAMES, start=1)})

_ISO_DATE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)
_YEAR_FIRST_SLASHED = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$")
_MONTH_FIRST_SLASHED = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_MONTH_NAME_FIRST = re.compile(r"^([A-Za-z]+)\.? (\d{1,2})(?:st|nd|rd|th)?,? (\d{4})$")
_DAY_FIRST = re.compile(r"^(\d{1,2}) ([A-Za-z]+)\.?,? (\d{4})$")


def _build_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date(value: Any) -> date | None:
    """Return the calendar date a value denotes, or None.

    Only date objects and date-shaped strings count. The accepted string
    shapes do not depend on the process locale: ISO 8601 dates and
    datetimes, ``YYYY/MM/DD``, ``MM/DD/YYYY`` and English month-name forms
    such as ``November 9, 2024`` or ``9 Nov 2024``. Numbers are never dates.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    match = _ISO_DATE.match(text)
    if match:
        return _build_date(*(int(part) for part in match.groups()))

    match = _YEAR_FIRST_SLASHED.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return _build_date(year, month, day)

    match = _MONTH_FIRST_SLASHED.match(text)
    if match:
        month, day, year = (int(part) for part in match.groups())
        return _build_date(year, month, day)

    match = _MONTH_NAME_FIRST.match(text)
    if match:
        month = _MONTHS_BY_NAME.get(match.group(1).lower())
        if month:
            return _build_date(int(match.group(3)), month, int(match.group(2)))
        return None

    match = _DAY_FIRST.match(text)
    if match:
        month = _MONTHS_BY_NAME.get(match.group(2).lower())
        if month:
            return _build_date(int(match.group(3)), month, int(match.group(1)))

    return None


def format_date(value: date) -> str:
    """Format a date as 'November 09, 2024'."""
    return f"{MONTH_NAMES[value.month - 1]} {value.day:02d}, {value.year:04d}"


def format_number(value: int | float) -> str:
    """Render numbers the way they read in a document: 2.0 -> '2'."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


_DECIMAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_PREFIXED_INTEGER = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITY = re.compile(r"^[+-]?Infinity$")


def to_number(value: Any) -> int | float:
    """Numeric value of a scalar under scripting rules, NaN when it has none.

    null and blank strings are 0 and booleans are 0 or 1. Other strings are
    trimmed and read as a decimal, a signed ``Infinity`` or a 0x/0o/0b
    integer literal.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if not text:
        return 0
    if _DECIMAL.match(text):
        return float(text)
    if _PREFIXED_INTEGER.match(text):
        return int(text, 0)
    if _INFINITY.match(text):
        return -math.inf if text.startswith("-") else math.inf
    return math.nan


def to_text(value: Any) -> str:
    """Natural string form of a metadata value.

    None renders empty; zero and false render literally.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(to_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str, ensure_ascii=False, separators=(", ", ": "))
    return str(value)


def to_display(value: Any) -> str:
    """Render a value for a table cell: dates as 'Month DD, YYYY', else to_text."""
    parsed = parse_date(value)
    if parsed is not None:
        return format_date(parsed)
    return to_text(value)


def is_truthy(value: Any) -> bool:
    """Scripting-style truthiness: lists and records are always true."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True
