# backend/app/utils/months.py
"""Helpers for the YYYY-MM month parameter."""
import calendar
import re
from datetime import date
from typing import List, Tuple

from backend.app.errors import MalformedMonth

# ASCII digits only; str.isdigit() and \d also accept other scripts
_MONTH_RE = re.compile(r"([0-9]{4})-([0-9]{2})")


def parse_month(month: str) -> Tuple[int, int]:
    match = _MONTH_RE.fullmatch(month) if month else None
    if not match:
        raise MalformedMonth(month)
    year, month_no = int(match.group(1)), int(match.group(2))
    if not 1 <= month_no <= 12 or year < 1:
        raise MalformedMonth(month)
    return year, month_no


def month_bounds(month: str) -> Tuple[date, date]:
    """Return the first and last calendar day of ``month``.

    >>> month_bounds("2024-02")
    (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))
    """
    year, month_no = parse_month(month)
    last_day = calendar.monthrange(year, month_no)[1]
    return date(year, month_no, 1), date(year, month_no, last_day)


def months_ending(month: str, count: int) -> List[str]:
    """The ``count`` months up to and including ``month``, oldest first.

    >>> months_ending("2024-02", 3)
    ['2023-12', '2024-01', '2024-02']
    """
    year, month_no = parse_month(month)
    index = year * 12 + (month_no - 1)
    out = []
    for i in range(index - count + 1, index + 1):
        y, m = divmod(i, 12)
        if y < 1:
            continue
        out.append(f"{y:04d}-{m + 1:02d}")
    return out
