"""Date helpers exposed to template placeholders as ``tp.date``."""

import math
from datetime import datetime, timedelta
from typing import Any, Callable

from vs_dataview.dataview.values import MONTH_NAMES

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def ordinal(day: int) -> str:
    """1 -> '1st', 12 -> '12th', 23 -> '23rd'."""
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


class DateHelpers:
    """Date functions bound to a single instant.

    Every helper reads the same ``now`` so all placeholders of one
    expansion agree on the date.
    """

    def __init__(self, now: datetime):
        self._now = now

    def now(self, format: str) -> str:
        """Format the instant with moment-style tokens.

        Tokens are substituted in a fixed order (dddd, MMMM, Do, YYYY, MM,
        DD, HH, mm, ss) and only the first occurrence of each is replaced.
        Text produced by an earlier token can be matched by a later one.
        """
        if not isinstance(format, str):
            raise TypeError("now() format must be a string")

        moment = self._now
        substitutions = [
            ("dddd", DAY_NAMES[moment.weekday()]),
            ("MMMM", MONTH_NAMES[moment.month - 1]),
            ("Do", ordinal(moment.day)),
            ("YYYY", f"{moment.year:04d}"),
            ("MM", f"{moment.month:02d}"),
            ("DD", f"{moment.day:02d}"),
            ("HH", f"{moment.hour:02d}"),
            ("mm", f"{moment.minute:02d}"),
            ("ss", f"{moment.second:02d}"),
        ]
        result = format
        for token, value in substitutions:
            result = result.replace(token, value, 1)
        return result

    def _offset(self, days: int) -> str:
        return (self._now + timedelta(days=days)).strftime("%Y-%m-%d")

    def today(self) -> str:
        return self._offset(0)

    def tomorrow(self) -> str:
        return self._offset(1)

    def yesterday(self) -> str:
        return self._offset(-1)

    def get_current_week(self) -> int:
        """Week of the year as ceil(day_of_year / 7); January 1st is in week 1."""
        day_of_year = self._now.timetuple().tm_yday
        return math.ceil(day_of_year / 7)

    def namespace(self) -> dict[str, Callable[..., Any]]:
        """Helper names as templates call them."""
        return {
            "now": self.now,
            "today": self.today,
            "tomorrow": self.tomorrow,
            "yesterday": self.yesterday,
            "getCurrentWeek": self.get_current_week,
        }
