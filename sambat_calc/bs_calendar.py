"""Bikram Sambat calendar table, validation and linear day indexing.

BS month lengths follow no arithmetic rule; they are published per year and
loaded here from a static JSON file. The table is read once at import and
shared read-only by every function in the package.

Day indices count days from the first day of the first tabulated year
(index 0). Converting to an index and back is exact for every tabulated day.
"""

from __future__ import annotations

import json
import logging
from bisect import bisect_right
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from . import config
from .data_models import BSDate
from .errors import (
    CalendarDataError,
    InvalidDayError,
    InvalidMonthError,
    OutOfTableRangeError,
    UnknownYearError,
)

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "Baishakh",
    "Jestha",
    "Ashadh",
    "Shrawan",
    "Bhadra",
    "Ashwin",
    "Kartik",
    "Mangsir",
    "Poush",
    "Magh",
    "Falgun",
    "Chaitra",
]


class CalendarTable:
    """Immutable lookup of month lengths keyed by BS year.

    Parameters
    ----------
    years: Mapping[int, Sequence[int]]
        Twelve month lengths for every year. Years must be contiguous.
    version: str
        Free-form version label of the data set.
    """

    def __init__(self, years: Mapping[Union[int, str], Sequence[int]], version: str = "unversioned") -> None:
        if not years:
            raise CalendarDataError("Calendar table is empty")
        data: Dict[int, tuple] = {}
        for raw_year, months in years.items():
            try:
                year = int(raw_year)
            except (TypeError, ValueError) as exc:
                raise CalendarDataError(f"Invalid year key: {raw_year!r}") from exc
            if len(months) != 12:
                raise CalendarDataError(f"Year {year} lists {len(months)} months; expected 12")
            if any(not isinstance(m, int) or m <= 0 for m in months):
                raise CalendarDataError(f"Year {year} has a non-positive month length")
            data[year] = tuple(months)

        ordered = sorted(data)
        if ordered[-1] - ordered[0] + 1 != len(ordered):
            raise CalendarDataError("Calendar years must be contiguous")

        self._data = data
        self.version = version
        self.first_year = ordered[0]
        self.last_year = ordered[-1]

        # Index of the first day of each year
        self._year_starts: Dict[int, int] = {}
        running = 0
        for year in ordered:
            self._year_starts[year] = running
            running += sum(data[year])
        self._total_days = running
        self._start_list = [self._year_starts[year] for year in ordered]

    def __contains__(self, year: object) -> bool:
        try:
            year = int(str(year))
        except ValueError:
            return False
        return year in self._data

    def years(self) -> List[int]:
        return list(range(self.first_year, self.last_year + 1))

    @property
    def total_days(self) -> int:
        return self._total_days

    def month_lengths(self, year: int) -> tuple:
        try:
            return self._data[int(year)]
        except KeyError:
            raise UnknownYearError(int(year)) from None

    def month_length(self, year: int, month: int) -> int:
        """Return the number of days in ``month`` of BS ``year``.

        Raises
        ------
        UnknownYearError
            If the year is not tabulated.
        InvalidMonthError
            If ``month`` is not in 1..12.
        """
        lengths = self.month_lengths(year)
        if not 1 <= month <= 12:
            raise InvalidMonthError(month)
        return lengths[month - 1]

    def year_length(self, year: int) -> int:
        return sum(self.month_lengths(year))

    def validate(self, bs_date: BSDate) -> BSDate:
        """Raise the matching error if ``bs_date`` is not in the table."""
        max_day = self.month_length(bs_date.year, bs_date.month)
        if not 1 <= bs_date.day <= max_day:
            raise InvalidDayError(bs_date.year, bs_date.month, bs_date.day, max_day)
        return bs_date

    def is_valid_date(self, bs_date: BSDate) -> bool:
        if bs_date.year not in self._data:
            return False
        if not 1 <= bs_date.month <= 12:
            return False
        return 1 <= bs_date.day <= self._data[bs_date.year][bs_date.month - 1]

    def to_index(self, bs_date: BSDate) -> int:
        """Return the day index of ``bs_date`` relative to the table epoch."""
        self.validate(bs_date)
        lengths = self._data[bs_date.year]
        return self._year_starts[bs_date.year] + sum(lengths[: bs_date.month - 1]) + bs_date.day - 1

    def from_index(self, index: int) -> BSDate:
        """Return the BS date at ``index``; the inverse of :meth:`to_index`."""
        if index < 0 or index >= self._total_days:
            raise OutOfTableRangeError(
                f"Day index {index} is outside the calendar table "
                f"({self.first_year}-{self.last_year} BS)"
            )
        year = self.first_year + bisect_right(self._start_list, index) - 1
        remaining = index - self._year_starts[year]
        month = 1
        for month_days in self._data[year]:
            if remaining < month_days:
                break
            remaining -= month_days
            month += 1
        return BSDate(year, month, remaining + 1)

    def first_date(self) -> BSDate:
        return BSDate(self.first_year, 1, 1)

    def last_date(self) -> BSDate:
        return BSDate(self.last_year, 12, self._data[self.last_year][11])

    def iter_dates(self) -> Iterable[BSDate]:
        for year in self.years():
            for month, length in enumerate(self._data[year], start=1):
                for day in range(1, length + 1):
                    yield BSDate(year, month, day)


def load_calendar_table(path: Union[str, Path]) -> CalendarTable:
    """Load a calendar table from a JSON data file.

    The file holds ``{"version": ..., "years": {"2000": [...], ...}}``.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise CalendarDataError(f"Cannot read calendar data from {path}: {exc}") from exc
    if not isinstance(payload, dict) or "years" not in payload:
        raise CalendarDataError(f"Calendar data in {path} has no 'years' mapping")
    table = CalendarTable(payload["years"], version=str(payload.get("version", "unversioned")))
    logger.debug(
        "Loaded calendar table %s (%s-%s BS) from %s",
        table.version,
        table.first_year,
        table.last_year,
        path,
    )
    return table


DEFAULT_TABLE = load_calendar_table(config.CALENDAR_FILE)


def _table(table: Optional[CalendarTable]) -> CalendarTable:
    return DEFAULT_TABLE if table is None else table


def month_length(year: int, month: int, table: Optional[CalendarTable] = None) -> int:
    return _table(table).month_length(int(year), int(month))


def year_length(year: int, table: Optional[CalendarTable] = None) -> int:
    return _table(table).year_length(int(year))


def is_valid_date(bs_date: BSDate, table: Optional[CalendarTable] = None) -> bool:
    return _table(table).is_valid_date(bs_date)


def validate_date(bs_date: BSDate, table: Optional[CalendarTable] = None) -> BSDate:
    return _table(table).validate(bs_date)


def to_index(bs_date: BSDate, table: Optional[CalendarTable] = None) -> int:
    return _table(table).to_index(bs_date)


def from_index(index: int, table: Optional[CalendarTable] = None) -> BSDate:
    return _table(table).from_index(index)


def days_between(start: BSDate, end: BSDate, table: Optional[CalendarTable] = None) -> int:
    """Signed number of days from ``start`` to ``end``."""
    tbl = _table(table)
    return tbl.to_index(end) - tbl.to_index(start)


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise InvalidMonthError(month)
    return MONTH_NAMES[month - 1]
