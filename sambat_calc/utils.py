"""Utility functions for the Bikram Sambat calculator.

This module provides helpers for parsing user input into Python data types and
for date arithmetic on BS dates: shifting by whole months, computing the civil
year/month/day breakdown between two dates and adding such a breakdown back
onto a date. Month lengths always come from the calendar table, never from a
fixed pattern.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, getcontext
from typing import Optional, Tuple

from . import config
from .bs_calendar import CalendarTable, DEFAULT_TABLE, month_name
from .data_models import BSDate, DateBreakdown, Number
from .errors import InvalidArgumentError, OutOfTableRangeError

getcontext().prec = config.DECIMAL_PRECISION

_BS_DATE_RE = re.compile(r"^\s*(\d{4})\s*[/-]\s*(\d{1,2})\s*[/-]\s*(\d{1,2})\s*$")


def parse_bs_date(text: str, table: Optional[CalendarTable] = None) -> BSDate:
    """Parse a ``YYYY/MM/DD`` (or ``YYYY-MM-DD``) string into a ``BSDate``.

    The result is checked against the calendar table.

    Raises
    ------
    ValueError
        If the string is malformed, or one of the calendar errors if the date
        does not exist.
    """
    match = _BS_DATE_RE.match(text or "")
    if not match:
        raise InvalidArgumentError(f"Invalid BS date string: {text!r}; expected YYYY/MM/DD")
    year, month, day = (int(part) for part in match.groups())
    bs_date = BSDate(year, month, day)
    (table or DEFAULT_TABLE).validate(bs_date)
    return bs_date


def parse_ad_date(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` Gregorian date."""
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid AD date string: {text!r}; expected YYYY-MM-DD") from exc


def format_bs_date(bs_date: BSDate, long: bool = False) -> str:
    """Render a BS date as ``2082/04/09`` or, with ``long``, ``2082 Shrawan 9``."""
    if long:
        return f"{bs_date.year} {month_name(bs_date.month)} {bs_date.day}"
    return str(bs_date)


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = value.replace(",", "").strip()
        result = Decimal(cleaned)
    except (AttributeError, InvalidOperation) as exc:
        raise InvalidArgumentError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise InvalidArgumentError(f"Invalid numeric value: {value}")
    return result


def to_decimal(value: Number) -> Decimal:
    """Coerce an amount or rate to ``Decimal``; floats go through ``str``."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid numeric value: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    return decimal_from_str(str(value))


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Return the (year, month) that is ``offset`` months after the given one."""
    total = year * 12 + (month - 1) + offset
    return total // 12, total % 12 + 1


def breakdown(start: BSDate, end: BSDate, table: Optional[CalendarTable] = None) -> DateBreakdown:
    """Return the civil years, months and days from ``start`` to ``end``.

    Whole calendar months are counted first, ignoring the day of month. When
    the end day is earlier than the start day, one month is given back and the
    length of the month just before the end month is borrowed into the day
    count. If ``start`` falls on a day the borrowed month does not have (a
    32nd, say) the borrow continues into earlier months until the day count is
    no longer negative.

    An ``end`` that is not after ``start`` yields an all-zero breakdown.
    """
    tbl = table or DEFAULT_TABLE
    total_days = tbl.to_index(end) - tbl.to_index(start)
    if total_days <= 0:
        return DateBreakdown.zero()

    total_months = (end.year - start.year) * 12 + (end.month - start.month)
    days = end.day - start.day

    borrow_year, borrow_month = end.year, end.month
    while days < 0:
        total_months -= 1
        borrow_year, borrow_month = shift_month(borrow_year, borrow_month, -1)
        days += tbl.month_length(borrow_year, borrow_month)

    return DateBreakdown(
        years=total_months // 12,
        months=total_months % 12,
        days=days,
        total_days=total_days,
    )


def add_duration(
    start: BSDate,
    years: int = 0,
    months: int = 0,
    days: int = 0,
    table: Optional[CalendarTable] = None,
) -> BSDate:
    """Add a civil duration to ``start``.

    The month is shifted first. The start day and the extra days are then
    counted forward from the first of that month, so a day beyond the month's
    length rolls into the following month. Adding ``breakdown(start, end)``
    to ``start`` gives back ``end``.
    """
    tbl = table or DEFAULT_TABLE
    tbl.validate(start)
    year, month = shift_month(start.year, start.month, years * 12 + months)
    if year not in tbl:
        raise OutOfTableRangeError(f"{year}/{month:02d} is outside the calendar table")
    first_of_month = tbl.to_index(BSDate(year, month, 1))
    return tbl.from_index(first_of_month + start.day - 1 + days)
