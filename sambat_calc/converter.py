"""Conversion between Gregorian (AD) dates and Bikram Sambat (BS) dates.

A single known correspondence anchors the conversion. The distance between
an AD date and the anchor is counted in ordinary Gregorian days and the same
number of days is walked through the BS calendar table from the BS side of
the anchor. Dates whose result falls outside the table raise
``OutOfTableRangeError``; there is no approximate fallback.

Wall-clock time never enters this module. ``today`` and friends take the
instant as an argument and apply the fixed Nepal offset (UTC+05:45) to it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional, TypeVar, Union

from . import config
from .bs_calendar import CalendarTable, DEFAULT_TABLE
from .data_models import BSDate

NEPAL_TZ = timezone(config.NEPAL_UTC_OFFSET, "NPT")
REFERENCE_BS = BSDate(*config.REFERENCE_BS)

T = TypeVar("T")


def ad_to_bs(ad_date: Union[date, datetime], table: Optional[CalendarTable] = None) -> BSDate:
    """Convert a Gregorian date to its BS equivalent.

    Parameters
    ----------
    ad_date: date or datetime
        The Gregorian calendar day. A ``datetime`` is reduced to its date as
        given, so it should already be in Nepal local time (see
        :func:`nepal_date`).

    Raises
    ------
    OutOfTableRangeError
        If the result would lie outside the tabulated BS years.
    """
    tbl = table or DEFAULT_TABLE
    if isinstance(ad_date, datetime):
        ad_date = ad_date.date()
    days_diff = ad_date.toordinal() - config.REFERENCE_AD.toordinal()
    return tbl.from_index(tbl.to_index(REFERENCE_BS) + days_diff)


def bs_to_ad(bs_date: BSDate, table: Optional[CalendarTable] = None) -> date:
    """Convert a BS date to the Gregorian date it falls on."""
    tbl = table or DEFAULT_TABLE
    offset = tbl.to_index(bs_date) - tbl.to_index(REFERENCE_BS)
    return config.REFERENCE_AD + timedelta(days=offset)


def to_nepal_time(instant: datetime) -> datetime:
    """Express ``instant`` in Nepal Standard Time.

    Naive datetimes are taken to be UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(NEPAL_TZ)


def nepal_date(instant: datetime) -> date:
    """Return the calendar day in Nepal at ``instant``."""
    return to_nepal_time(instant).date()


def today(instant: datetime, table: Optional[CalendarTable] = None) -> BSDate:
    """Return the BS date in Nepal at ``instant``.

    The date changes at midnight Nepal time, i.e. at 18:15 UTC.
    """
    return ad_to_bs(nepal_date(instant), table=table)


def group_by_bs_day(
    items: Iterable[T],
    key: Callable[[T], datetime],
    table: Optional[CalendarTable] = None,
) -> Dict[BSDate, List[T]]:
    """Group timestamped items by the BS day they fall on in Nepal.

    Buckets are returned in date order; items keep their input order inside a
    bucket.
    """
    buckets: Dict[BSDate, List[T]] = {}
    for item in items:
        day = today(key(item), table=table)
        buckets.setdefault(day, []).append(item)
    return {day: buckets[day] for day in sorted(buckets)}
