from datetime import date
from decimal import Decimal

import pytest

from sambat_calc.bs_calendar import DEFAULT_TABLE
from sambat_calc.data_models import BSDate, DateBreakdown
from sambat_calc.errors import InvalidArgumentError, InvalidDayError, OutOfTableRangeError
from sambat_calc.utils import (
    add_duration,
    breakdown,
    decimal_from_str,
    format_bs_date,
    parse_ad_date,
    parse_bs_date,
    shift_month,
    to_decimal,
)


def test_breakdown_borrows_from_month_before_end():
    result = breakdown(BSDate(2080, 1, 30), BSDate(2080, 2, 5))
    assert result == DateBreakdown(years=0, months=0, days=6, total_days=6)


def test_breakdown_whole_years():
    result = breakdown(BSDate(2080, 1, 1), BSDate(2082, 1, 1))
    assert (result.years, result.months, result.days) == (2, 0, 0)
    assert result.total_days == 365 + 366


def test_breakdown_mixed_duration():
    result = breakdown(BSDate(2080, 1, 1), BSDate(2081, 3, 11))
    assert (result.years, result.months, result.days) == (1, 2, 10)
    assert result.total_days == 365 + 31 + 32 + 10


def test_breakdown_borrow_rolls_back_a_year():
    result = breakdown(BSDate(2080, 12, 20), BSDate(2081, 1, 5))
    assert result == DateBreakdown(years=0, months=0, days=15, total_days=15)


def test_breakdown_start_on_32nd_keeps_days_non_negative():
    start = BSDate(2080, 4, 32)
    end = BSDate(2080, 10, 1)
    result = breakdown(start, end)
    assert (result.years, result.months, result.days) == (0, 4, 28)
    assert result.total_days == 151
    assert add_duration(start, result.years, result.months, result.days) == end


def test_breakdown_same_and_reversed_dates_are_zero():
    d = BSDate(2081, 5, 10)
    assert breakdown(d, d) == DateBreakdown.zero()
    assert breakdown(BSDate(2082, 1, 1), BSDate(2081, 1, 1)) == DateBreakdown(0, 0, 0, 0)


def test_breakdown_rejects_invalid_dates():
    with pytest.raises(InvalidDayError):
        breakdown(BSDate(2080, 5, 32), BSDate(2081, 1, 1))


def test_breakdown_is_additive():
    dates = [d for d in DEFAULT_TABLE.iter_dates() if 2079 <= d.year <= 2082]
    for start in dates[::37]:
        for end in dates[::53]:
            if end <= start:
                continue
            result = breakdown(start, end)
            assert 0 <= result.months <= 11
            assert result.days >= 0
            assert result.total_days > 0
            assert add_duration(start, result.years, result.months, result.days) == end


def test_add_duration_rolls_day_overflow_forward():
    # Jestha 2080 has 32 days, Ashadh 31
    assert add_duration(BSDate(2080, 2, 32), months=1) == BSDate(2080, 4, 1)
    assert add_duration(BSDate(2080, 1, 15), years=1, months=2, days=3) == BSDate(2081, 3, 18)
    assert add_duration(BSDate(2080, 12, 30), days=1) == BSDate(2081, 1, 1)


def test_add_duration_past_table_end():
    with pytest.raises(OutOfTableRangeError):
        add_duration(BSDate(2090, 6, 1), years=1)


@pytest.mark.parametrize(
    "year, month, offset, expected",
    [
        (2080, 12, 1, (2081, 1)),
        (2081, 1, -1, (2080, 12)),
        (2080, 5, -17, (2078, 12)),
        (2080, 5, 0, (2080, 5)),
    ],
)
def test_shift_month(year, month, offset, expected):
    assert shift_month(year, month, offset) == expected


@pytest.mark.parametrize("text", ["2082/04/09", "2082-4-9", " 2082 / 4 / 09 "])
def test_parse_bs_date(text):
    assert parse_bs_date(text) == BSDate(2082, 4, 9)


def test_parse_bs_date_errors():
    with pytest.raises(InvalidArgumentError):
        parse_bs_date("2082/04")
    with pytest.raises(InvalidArgumentError):
        parse_bs_date("")
    with pytest.raises(InvalidDayError):
        parse_bs_date("2080/05/32")


def test_parse_ad_date():
    assert parse_ad_date("2025-07-25") == date(2025, 7, 25)
    with pytest.raises(InvalidArgumentError):
        parse_ad_date("25/07/2025")


def test_format_bs_date():
    assert format_bs_date(BSDate(2082, 4, 9)) == "2082/04/09"
    assert format_bs_date(BSDate(2082, 4, 9), long=True) == "2082 Shrawan 9"


def test_decimal_parsing():
    assert decimal_from_str("1,00,000") == Decimal("100000")
    assert decimal_from_str(" 2.5 ") == Decimal("2.5")
    with pytest.raises(InvalidArgumentError):
        decimal_from_str("abc")
    with pytest.raises(InvalidArgumentError):
        decimal_from_str("NaN")


def test_to_decimal():
    assert to_decimal(Decimal("1.5")) == Decimal("1.5")
    assert to_decimal(100) == Decimal(100)
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("2") == Decimal(2)
    with pytest.raises(InvalidArgumentError):
        to_decimal(True)
