"""Data models for the Bikram Sambat interest calculator.

This module defines dataclasses for the values passed between the calendar,
the breakdown engine and the interest engine: BS dates, civil durations,
interest results and ledger transactions. Dates are frozen so they can be
used as dictionary keys and never change after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Union

from .errors import InvalidArgumentError


@dataclass(frozen=True, order=True)
class BSDate:
    """A date in the Bikram Sambat calendar.

    Attributes
    ----------
    year: int
        The BS year. A numeric string such as ``"2082"`` is accepted and
        normalized to an integer.
    month: int
        Month number, 1 (Baishakh) to 12 (Chaitra).
    day: int
        Day of the month, starting at 1.

    Construction only normalizes types. Whether the date exists in the
    calendar table is checked by :mod:`sambat_calc.bs_calendar`.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        for name in ("year", "month", "day"):
            raw = getattr(self, name)
            try:
                value = int(str(raw).strip())
            except ValueError as exc:
                raise InvalidArgumentError(f"Invalid BS {name}: {raw!r}") from exc
            object.__setattr__(self, name, value)

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}/{self.day:02d}"


@dataclass(frozen=True)
class DateBreakdown:
    """Civil duration between two BS dates.

    ``months`` is always in 0..11 and ``days`` is never negative. A zero
    ``total_days`` means there is no duration at all.
    """

    years: int
    months: int
    days: int
    total_days: int

    @classmethod
    def zero(cls) -> "DateBreakdown":
        return cls(years=0, months=0, days=0, total_days=0)


@dataclass(frozen=True)
class InterestResult:
    """Result of accruing interest between two BS dates.

    Currency values are rounded to two decimal places. Intermediate values
    used to produce them are never rounded.
    """

    principal: Decimal
    total_interest: Decimal
    final_amount: Decimal
    years: int
    months: int
    days: int
    total_days: int
    yearly_interest: Decimal
    monthly_interest: Decimal
    daily_interest: Decimal

    @property
    def breakdown(self) -> DateBreakdown:
        return DateBreakdown(
            years=self.years, months=self.months, days=self.days, total_days=self.total_days
        )


@dataclass(frozen=True)
class Transaction:
    """A single ledger entry.

    Attributes
    ----------
    date: BSDate
        The day the money changed hands. Interest accrues from this date.
    amount: Decimal
        The amount lent or repaid.
    type: str
        ``"given"`` for money lent out, ``"received"`` for a repayment.
    """

    date: BSDate
    amount: Decimal
    type: str  # "given" or "received"


@dataclass
class LedgerResult:
    """Settlement of a set of transactions against one end date."""

    end_date: BSDate
    given: List[InterestResult] = field(default_factory=list)
    received: List[InterestResult] = field(default_factory=list)
    total_given: Decimal = Decimal("0")
    total_received: Decimal = Decimal("0")
    total_due: Decimal = Decimal("0")
    total_received_with_interest: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")


Number = Union[Decimal, int, float, str]
