"""Core calculation engine for the Bikram Sambat interest calculator.

This module implements the interest accrual used for informal loans in Nepal:
interest compounds once per whole elapsed year, and the leftover months and
days earn simple interest on the compounded principal. It also settles a
ledger of amounts given and received against a single end date. Results are
returned as ``InterestResult`` and ``LedgerResult`` objects.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, getcontext
from typing import Iterable, List, Optional, Tuple

from . import config
from .bs_calendar import CalendarTable, DEFAULT_TABLE
from .data_models import BSDate, InterestResult, LedgerResult, Number, Transaction
from .errors import InvalidArgumentError
from .utils import breakdown, to_decimal

getcontext().prec = config.DECIMAL_PRECISION  # increase precision for financial calculations

TRANSACTION_TYPES = ("given", "received")


def _round(value: Decimal) -> Decimal:
    return value.quantize(config.CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def _check_inputs(principal: Number, monthly_rate_percent: Number) -> Tuple[Decimal, Decimal]:
    principal_value = to_decimal(principal)
    rate_value = to_decimal(monthly_rate_percent)
    if principal_value <= 0:
        raise InvalidArgumentError(f"Principal must be positive; got {principal_value}")
    if rate_value < 0:
        raise InvalidArgumentError(f"Monthly rate must not be negative; got {rate_value}")
    return principal_value, rate_value


def accrue(
    principal: Number,
    monthly_rate_percent: Number,
    start: BSDate,
    end: BSDate,
    table: Optional[CalendarTable] = None,
) -> InterestResult:
    """Accrue interest on ``principal`` from ``start`` to ``end``.

    The accrual runs in three tiers over the civil breakdown of the period:

        for each whole year:   p = p * (1 + 12 * r)
        leftover months:       p_years * r * months
        leftover days:         p_years * (r / 30) * days

    where ``r`` is the monthly rate as a fraction and ``p_years`` is the
    principal after yearly compounding. The month and day tiers share the
    same base; neither is added to the principal before the other is computed.

    Parameters
    ----------
    principal: Number
        The amount lent. Must be positive.
    monthly_rate_percent: Number
        Interest per month in percent, e.g. ``2`` for 2 % a month.
    start, end: BSDate
        The loan period. An ``end`` on or before ``start`` accrues nothing.

    Returns
    -------
    InterestResult
        Currency fields rounded half-up to two decimal places.
    """
    principal_value, rate_value = _check_inputs(principal, monthly_rate_percent)
    period = breakdown(start, end, table=table)

    if period.total_days <= 0:
        zero = _round(Decimal("0"))
        return InterestResult(
            principal=_round(principal_value),
            total_interest=zero,
            final_amount=_round(principal_value),
            years=0,
            months=0,
            days=0,
            total_days=0,
            yearly_interest=zero,
            monthly_interest=zero,
            daily_interest=zero,
        )

    monthly_rate = rate_value / Decimal(100)
    annual_rate = rate_value * Decimal(12) / Decimal(100)
    daily_rate = monthly_rate / Decimal(config.DAYS_PER_INTEREST_MONTH)

    # Compound once per whole year
    principal_after_years = principal_value
    yearly_interest = Decimal("0")
    for _ in range(period.years):
        year_interest = principal_after_years * annual_rate
        yearly_interest += year_interest
        principal_after_years += year_interest

    monthly_interest = principal_after_years * monthly_rate * period.months
    daily_interest = principal_after_years * daily_rate * period.days

    total_interest = yearly_interest + monthly_interest + daily_interest
    final_amount = principal_after_years + monthly_interest + daily_interest

    return InterestResult(
        principal=_round(principal_value),
        total_interest=_round(total_interest),
        final_amount=_round(final_amount),
        years=period.years,
        months=period.months,
        days=period.days,
        total_days=period.total_days,
        yearly_interest=_round(yearly_interest),
        monthly_interest=_round(monthly_interest),
        daily_interest=_round(daily_interest),
    )


def compute_ledger(
    transactions: Iterable[Transaction],
    monthly_rate_percent: Number,
    end: BSDate,
    table: Optional[CalendarTable] = None,
) -> LedgerResult:
    """Settle a set of given and received amounts at ``end``.

    Every entry accrues interest from its own date to ``end`` at the same
    monthly rate. The net balance is what the borrower still owes: the
    accrued value of everything given minus the accrued value of everything
    received. A negative balance means the borrower has overpaid.
    """
    tbl = table or DEFAULT_TABLE
    tbl.validate(end)
    result = LedgerResult(end_date=end)
    for entry in transactions:
        if entry.type not in TRANSACTION_TYPES:
            raise InvalidArgumentError(
                f"Transaction type must be 'given' or 'received'; got {entry.type}"
            )
        accrued = accrue(entry.amount, monthly_rate_percent, entry.date, end, table=tbl)
        if entry.type == "given":
            result.given.append(accrued)
            result.total_given += accrued.principal
            result.total_due += accrued.final_amount
        else:
            result.received.append(accrued)
            result.total_received += accrued.principal
            result.total_received_with_interest += accrued.final_amount
    result.net_balance = result.total_due - result.total_received_with_interest
    return result


def settle_loan(
    principal: Number,
    monthly_rate_percent: Number,
    loan_date: BSDate,
    end: BSDate,
    repayments: Iterable[Tuple[BSDate, Number]] = (),
    today: Optional[BSDate] = None,
    table: Optional[CalendarTable] = None,
) -> LedgerResult:
    """Settle a single loan and its repayments at ``end``.

    This is :func:`compute_ledger` for one ``given`` entry, with the checks a
    loan form applies before calculating:

    * the end date may not be before the loan date;
    * each repayment must be positive and not dated before the loan;
    * repayments may not add up to more than the principal;
    * when ``today`` is given, neither the loan nor any repayment may be
      dated after it.
    """
    tbl = table or DEFAULT_TABLE
    principal_value, _ = _check_inputs(principal, monthly_rate_percent)
    tbl.validate(loan_date)
    tbl.validate(end)
    if tbl.to_index(end) < tbl.to_index(loan_date):
        raise InvalidArgumentError(f"End date {end} is before the loan date {loan_date}")
    if today is not None and tbl.to_index(loan_date) > tbl.to_index(today):
        raise InvalidArgumentError(f"Loan date {loan_date} is in the future")

    transactions: List[Transaction] = [Transaction(date=loan_date, amount=principal_value, type="given")]
    total_repaid = Decimal("0")
    for repayment_date, amount in repayments:
        amount_value = to_decimal(amount)
        if amount_value <= 0:
            raise InvalidArgumentError(f"Repayment amount must be positive; got {amount_value}")
        tbl.validate(repayment_date)
        if tbl.to_index(repayment_date) < tbl.to_index(loan_date):
            raise InvalidArgumentError(
                f"Repayment on {repayment_date} is before the loan date {loan_date}"
            )
        if today is not None and tbl.to_index(repayment_date) > tbl.to_index(today):
            raise InvalidArgumentError(f"Repayment date {repayment_date} is in the future")
        total_repaid += amount_value
        transactions.append(Transaction(date=repayment_date, amount=amount_value, type="received"))

    if total_repaid > principal_value:
        raise InvalidArgumentError(
            f"Total repayments {total_repaid} exceed the loan amount {principal_value}"
        )
    return compute_ledger(transactions, monthly_rate_percent, end, table=tbl)
