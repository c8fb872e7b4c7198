"""Command-line interface for the Bikram Sambat calculator.

This module uses the ``click`` library to implement a multi-command interface.
Users can accrue interest between two BS dates, inspect the civil duration
between them, convert dates between AD and BS, show today's BS date and
settle a loan against its repayments. Results are printed to the terminal or
exported to JSON files.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from .bs_calendar import DEFAULT_TABLE
from .converter import ad_to_bs, bs_to_ad, today as bs_today
from .data_models import BSDate
from .engine import accrue, settle_loan
from .errors import SambatError
from .formatter import (
    ledger_to_dict,
    print_breakdown,
    print_ledger,
    print_result,
    result_to_dict,
)
from .utils import breakdown, decimal_from_str, format_bs_date, parse_ad_date, parse_bs_date

logger = logging.getLogger(__name__)


def parse_amount(value: str) -> Decimal:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("500000", "5,00,000") and shorthand with ``k``/``m``
    suffixes (e.g., "500k" meaning 500_000). Returns a ``Decimal``.
    """
    value = value.strip().lower()
    value = value.replace(",", "")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return decimal_from_str(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def parse_rate(value: str) -> Decimal:
    """Parse a monthly rate in percent (e.g. "2" or "2%")."""
    value = value.strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        return decimal_from_str(value)
    except ValueError:
        raise click.BadParameter(f"Invalid rate: {value}")


def parse_date_option(value: str) -> BSDate:
    try:
        return parse_bs_date(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def parse_repayment_strings(values: Tuple[str, ...]) -> List[Tuple[BSDate, Decimal]]:
    repayments: List[Tuple[BSDate, Decimal]] = []
    for item in values:
        parts = item.split(":")
        if len(parts) != 2:
            raise click.BadParameter(
                f"Repayment must be in YYYY/MM/DD:AMOUNT format; got {item}"
            )
        date_str, amount_str = parts
        repayments.append((parse_date_option(date_str), parse_amount(amount_str)))
    return repayments


def export_to_json(path: Path, data: Dict[str, Any]) -> None:
    """Export a result dictionary to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _json_output(output: str) -> Path:
    path = Path(output)
    if path.suffix.lower() != ".json":
        raise click.BadParameter("Export must use .json extension")
    return path


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Bikram Sambat date arithmetic and interest calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Amount lent")
@click.option("--rate", "-r", "rate", required=True, help="Monthly interest rate (percent)")
@click.option("--start-date", "-s", "start_date", required=True, help="Loan date (YYYY/MM/DD, BS)")
@click.option("--end-date", "-e", "end_date", required=True, help="Settlement date (YYYY/MM/DD, BS)")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def interest(principal: str, rate: str, start_date: str, end_date: str, output: Optional[str]) -> None:
    """Compute interest between two BS dates."""
    principal_value = parse_amount(principal)
    rate_value = parse_rate(rate)
    start = parse_date_option(start_date)
    end = parse_date_option(end_date)
    logger.debug("Accruing %s at %s%% from %s to %s", principal_value, rate_value, start, end)
    try:
        result = accrue(principal_value, rate_value, start, end)
    except SambatError as exc:
        raise click.BadParameter(str(exc))
    if output:
        path = _json_output(output)
        export_to_json(path, {"interest": result_to_dict(result)})
        click.echo(f"Result exported to {path}")
    else:
        print_result(result, rate=rate_value)


@cli.command(name="breakdown")
@click.option("--start-date", "-s", "start_date", required=True, help="Start date (YYYY/MM/DD, BS)")
@click.option("--end-date", "-e", "end_date", required=True, help="End date (YYYY/MM/DD, BS)")
def breakdown_command(start_date: str, end_date: str) -> None:
    """Show the years, months and days between two BS dates."""
    start = parse_date_option(start_date)
    end = parse_date_option(end_date)
    print_breakdown(start, end, breakdown(start, end))


@cli.command()
@click.option("--ad", "ad", help="Gregorian date (YYYY-MM-DD) to convert to BS")
@click.option("--bs", "bs", help="BS date (YYYY/MM/DD) to convert to AD")
def convert(ad: Optional[str], bs: Optional[str]) -> None:
    """Convert a date between the AD and BS calendars."""
    if bool(ad) == bool(bs):
        raise click.UsageError("Provide exactly one of --ad or --bs")
    try:
        if ad:
            result = ad_to_bs(parse_ad_date(ad))
            click.echo(f"{format_bs_date(result)} ({format_bs_date(result, long=True)})")
        else:
            click.echo(bs_to_ad(parse_date_option(bs)).isoformat())
    except SambatError as exc:
        raise click.BadParameter(str(exc))


@cli.command()
@click.option("--at", "at", help="ISO instant to use instead of the current time")
def today(at: Optional[str]) -> None:
    """Show today's date in Nepal in the BS calendar."""
    if at:
        try:
            instant = datetime.fromisoformat(at)
        except ValueError:
            raise click.BadParameter(f"Invalid ISO timestamp: {at}")
    else:
        instant = datetime.now(timezone.utc)
    try:
        result = bs_today(instant)
    except SambatError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"{format_bs_date(result)} ({format_bs_date(result, long=True)})")


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Amount lent")
@click.option("--rate", "-r", "rate", required=True, help="Monthly interest rate (percent)")
@click.option("--start-date", "-s", "start_date", required=True, help="Loan date (YYYY/MM/DD, BS)")
@click.option("--end-date", "-e", "end_date", required=True, help="Settlement date (YYYY/MM/DD, BS)")
@click.option("--repayment", "repayment", multiple=True, help="Repayment in YYYY/MM/DD:AMOUNT format")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def ledger(
    principal: str,
    rate: str,
    start_date: str,
    end_date: str,
    repayment: Tuple[str, ...],
    output: Optional[str],
) -> None:
    """Settle a loan and its repayments at an end date."""
    principal_value = parse_amount(principal)
    rate_value = parse_rate(rate)
    loan_date = parse_date_option(start_date)
    end = parse_date_option(end_date)
    repayments = parse_repayment_strings(repayment) if repayment else []
    logger.debug("Settling loan of %s with %d repayments", principal_value, len(repayments))
    try:
        result = settle_loan(principal_value, rate_value, loan_date, end, repayments)
    except SambatError as exc:
        raise click.BadParameter(str(exc))
    if output:
        path = _json_output(output)
        export_to_json(path, {"ledger": ledger_to_dict(result)})
        click.echo(f"Ledger exported to {path}")
    else:
        print_ledger(result, dates=[loan_date] + [d for d, _ in repayments])


@cli.command()
def info() -> None:
    """Show the calendar table in use."""
    click.echo(f"Calendar table version : {DEFAULT_TABLE.version}")
    click.echo(f"Tabulated years        : {DEFAULT_TABLE.first_year}-{DEFAULT_TABLE.last_year} BS")
    click.echo(f"Covers AD              : {bs_to_ad(DEFAULT_TABLE.first_date())} to {bs_to_ad(DEFAULT_TABLE.last_date())}")


if __name__ == "__main__":
    cli()
