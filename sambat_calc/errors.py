"""Exception types raised by the calendar and interest engine.

All of them derive from ``ValueError`` so callers that already guard numeric
parsing with ``except ValueError`` keep working.
"""


class SambatError(ValueError):
    """Base class for every error raised by this package."""


class CalendarDataError(SambatError):
    """The calendar data file is malformed."""


class UnknownYearError(SambatError):
    def __init__(self, year: int) -> None:
        super().__init__(f"BS year {year} is not in the calendar table")
        self.year = year


class InvalidMonthError(SambatError):
    def __init__(self, month: int) -> None:
        super().__init__(f"Month must be between 1 and 12; got {month}")
        self.month = month


class InvalidDayError(SambatError):
    def __init__(self, year: int, month: int, day: int, max_day: int) -> None:
        super().__init__(
            f"Day {day} is out of range for {year}/{month:02d} (1-{max_day})"
        )
        self.year = year
        self.month = month
        self.day = day
        self.max_day = max_day


class OutOfTableRangeError(SambatError):
    """A computed date falls outside the tabulated years."""


class InvalidArgumentError(SambatError):
    """A numeric argument is outside its allowed range."""
