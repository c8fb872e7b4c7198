"""Output helpers for the Bikram Sambat calculator.

This module provides simple functions to render interest results, durations
and ledgers in a plain text format, plus the timestamp label used in
transaction histories. We rely only on built-in printing and string
formatting; currency symbols and localized numerals are left to the caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, Optional

from .bs_calendar import CalendarTable
from .converter import ad_to_bs, to_nepal_time
from .data_models import BSDate, DateBreakdown, InterestResult, LedgerResult
from .utils import format_bs_date


def format_timestamp(instant: datetime, table: Optional[CalendarTable] = None) -> str:
    """Render ``instant`` as its Nepal-time BS date and clock time.

    Example: ``2082/04/09 (2:32PM)``.
    """
    local = to_nepal_time(instant)
    bs_date = ad_to_bs(local, table=table)
    hour = local.hour % 12 or 12
    suffix = "PM" if local.hour >= 12 else "AM"
    return f"{format_bs_date(bs_date)} ({hour}:{local.minute:02d}{suffix})"


def format_duration(period: DateBreakdown) -> str:
    parts = []
    for value, unit in ((period.years, "year"), (period.months, "month"), (period.days, "day")):
        if value:
            parts.append(f"{value} {unit}{'s' if value != 1 else ''}")
    return ", ".join(parts) if parts else "0 days"


def print_breakdown(start: BSDate, end: BSDate, period: DateBreakdown) -> None:
    """Print the civil duration between two dates."""
    print("Duration")
    print("-" * 72)
    print(f"From               : {format_bs_date(start)} ({format_bs_date(start, long=True)})")
    print(f"To                 : {format_bs_date(end)} ({format_bs_date(end, long=True)})")
    print(f"Years              : {period.years}")
    print(f"Months             : {period.months}")
    print(f"Days               : {period.days}")
    print(f"Total days         : {period.total_days}")
    print("-" * 72)


def print_result(result: InterestResult, rate: Optional[object] = None) -> None:
    """Print an interest result in a human-readable format."""
    print("Interest")
    print("-" * 72)
    print(f"Principal          : {result.principal:.2f}")
    if rate is not None:
        print(f"Monthly rate       : {rate}%")
    print(f"Duration           : {format_duration(result.breakdown)} ({result.total_days} days)")
    print(f"Yearly interest    : {result.yearly_interest:.2f}")
    print(f"Monthly interest   : {result.monthly_interest:.2f}")
    print(f"Daily interest     : {result.daily_interest:.2f}")
    print(f"Total interest     : {result.total_interest:.2f}")
    print(f"Final amount       : {result.final_amount:.2f}")
    print("-" * 72)


def print_ledger(ledger: LedgerResult, dates: Iterable[BSDate] = ()) -> None:
    """Print a ledger as one row per entry followed by the totals.

    Parameters
    ----------
    ledger: LedgerResult
        The settled ledger.
    dates: Iterable[BSDate]
        Entry dates in the same order as ``given`` followed by ``received``.
        When omitted the date column is left blank.
    """
    date_list = list(dates)
    headers = ["Type", "Date", "Amount", "Duration", "Interest", "Final"]
    print("\t".join(headers))
    rows = [("given", r) for r in ledger.given] + [("received", r) for r in ledger.received]
    for i, (kind, entry) in enumerate(rows):
        row = [
            kind,
            format_bs_date(date_list[i]) if i < len(date_list) else "",
            f"{entry.principal:.2f}",
            format_duration(entry.breakdown),
            f"{entry.total_interest:.2f}",
            f"{entry.final_amount:.2f}",
        ]
        print("\t".join(row))
    print("-" * 72)
    print(f"Settled on         : {format_bs_date(ledger.end_date)}")
    print(f"Total given        : {ledger.total_given:.2f}")
    print(f"Total due          : {ledger.total_due:.2f}")
    if ledger.received:
        print(f"Total received     : {ledger.total_received:.2f}")
        print(f"Received + interest: {ledger.total_received_with_interest:.2f}")
    print(f"Net balance        : {ledger.net_balance:.2f}")
    print("-" * 72)


def result_to_dict(result: InterestResult) -> Dict[str, object]:
    """Convert an interest result into a JSON-serialisable dict."""
    return {
        "principal": str(result.principal),
        "total_interest": str(result.total_interest),
        "final_amount": str(result.final_amount),
        "years": result.years,
        "months": result.months,
        "days": result.days,
        "total_days": result.total_days,
        "yearly_interest": str(result.yearly_interest),
        "monthly_interest": str(result.monthly_interest),
        "daily_interest": str(result.daily_interest),
    }


def ledger_to_dict(ledger: LedgerResult) -> Dict[str, object]:
    return {
        "end_date": format_bs_date(ledger.end_date),
        "given": [result_to_dict(r) for r in ledger.given],
        "received": [result_to_dict(r) for r in ledger.received],
        "total_given": str(ledger.total_given),
        "total_received": str(ledger.total_received),
        "total_due": str(ledger.total_due),
        "total_received_with_interest": str(ledger.total_received_with_interest),
        "net_balance": str(ledger.net_balance),
    }
