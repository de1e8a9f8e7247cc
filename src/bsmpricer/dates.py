"""Day-count conventions.

The valuation date is always an argument; nothing here reads a process-wide
"today". Business-day calendars are not modelled.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum

__all__ = ["DayCounter", "year_fraction", "time_to_maturity"]


class DayCounter(str, Enum):
    ACTUAL_365_FIXED = "Actual/365 (Fixed)"
    ACTUAL_360 = "Actual/360"
    THIRTY_360 = "30/360 (Bond Basis)"

    @classmethod
    def parse(cls, text) -> "DayCounter":
        """Accept a member, its display value or its name (any case)."""
        if isinstance(text, cls):
            return text
        s = str(text).strip()
        for member in cls:
            if s.lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"unknown day counter {text!r}")

    def __str__(self) -> str:
        return self.value


def _thirty_360_days(start: dt.date, end: dt.date) -> int:
    d1 = min(start.day, 30)
    d2 = end.day
    if d1 == 30:
        d2 = min(d2, 30)
    return (360 * (end.year - start.year)
            + 30 * (end.month - start.month)
            + (d2 - d1))


def year_fraction(start: dt.date, end: dt.date,
                  day_counter: DayCounter = DayCounter.ACTUAL_365_FIXED) -> float:
    """Signed year fraction between two dates (negative if ``end < start``)."""
    day_counter = DayCounter.parse(day_counter)
    if day_counter is DayCounter.ACTUAL_365_FIXED:
        return (end - start).days / 365.0
    if day_counter is DayCounter.ACTUAL_360:
        return (end - start).days / 360.0
    return _thirty_360_days(start, end) / 360.0


def time_to_maturity(valuation_date: dt.date, maturity: dt.date,
                     day_counter: DayCounter = DayCounter.ACTUAL_365_FIXED) -> float:
    """Year fraction from ``valuation_date`` to ``maturity``.

    Expiry before the valuation date yields a negative number, which the
    pricer rejects; it is not clamped here.
    """
    return year_fraction(valuation_date, maturity, day_counter)
