import json

import pytest

from sambat_calc.bs_calendar import (
    DEFAULT_TABLE,
    CalendarTable,
    days_between,
    from_index,
    is_valid_date,
    load_calendar_table,
    month_length,
    month_name,
    to_index,
    validate_date,
    year_length,
)
from sambat_calc.data_models import BSDate
from sambat_calc.errors import (
    CalendarDataError,
    InvalidArgumentError,
    InvalidDayError,
    InvalidMonthError,
    OutOfTableRangeError,
    UnknownYearError,
)

TWELVE_30S = [30] * 12


def test_month_length_lookup():
    assert month_length(2080, 1) == 31
    assert month_length(2080, 4) == 32
    assert month_length(2081, 12) == 31
    assert month_length("2082", 3) == 32


@pytest.mark.parametrize("year", [1999, 2091])
def test_month_length_unknown_year(year):
    with pytest.raises(UnknownYearError):
        month_length(year, 1)


@pytest.mark.parametrize("month", [0, 13])
def test_month_length_invalid_month(month):
    with pytest.raises(InvalidMonthError):
        month_length(2080, month)


def test_year_lengths():
    assert year_length(2000) == 365
    assert year_length(2081) == 366
    assert year_length(2082) == 365


@pytest.mark.parametrize(
    "bs_date, expected",
    [
        (BSDate(2080, 4, 32), True),
        (BSDate(2080, 1, 1), True),
        (BSDate(2080, 5, 32), False),
        (BSDate(2080, 13, 1), False),
        (BSDate(2080, 0, 1), False),
        (BSDate(2080, 1, 0), False),
        (BSDate(1999, 1, 1), False),
        (BSDate(2091, 1, 1), False),
    ],
)
def test_is_valid_date(bs_date, expected):
    assert is_valid_date(bs_date) is expected


def test_validate_raises_typed_errors():
    with pytest.raises(InvalidDayError):
        validate_date(BSDate(2080, 5, 32))
    with pytest.raises(InvalidMonthError):
        validate_date(BSDate(2080, 13, 1))
    with pytest.raises(UnknownYearError):
        validate_date(BSDate(1999, 1, 1))
    assert validate_date(BSDate(2082, 4, 9)) == BSDate(2082, 4, 9)


def test_bs_date_normalizes_string_components():
    assert BSDate("2082", "4", " 9") == BSDate(2082, 4, 9)
    assert str(BSDate(2082, 4, 9)) == "2082/04/09"
    with pytest.raises(InvalidArgumentError):
        BSDate("twenty", 1, 1)


def test_bs_dates_order_chronologically():
    assert BSDate(2080, 12, 30) < BSDate(2081, 1, 1)
    assert BSDate(2081, 2, 1) > BSDate(2081, 1, 31)


def test_index_of_epoch_and_first_months():
    assert to_index(BSDate(2000, 1, 1)) == 0
    assert to_index(BSDate(2000, 1, 30)) == 29
    assert to_index(BSDate(2000, 2, 1)) == 30
    assert to_index(BSDate(2001, 1, 1)) == 365


def test_index_round_trip_for_every_tabulated_day():
    for expected_index, bs_date in enumerate(DEFAULT_TABLE.iter_dates()):
        assert to_index(bs_date) == expected_index
        assert from_index(expected_index) == bs_date
    assert expected_index == DEFAULT_TABLE.total_days - 1


def test_from_index_outside_table():
    with pytest.raises(OutOfTableRangeError):
        from_index(-1)
    with pytest.raises(OutOfTableRangeError):
        from_index(DEFAULT_TABLE.total_days)
    assert from_index(DEFAULT_TABLE.total_days - 1) == DEFAULT_TABLE.last_date()


def test_to_index_rejects_invalid_date():
    with pytest.raises(InvalidDayError):
        to_index(BSDate(2080, 5, 32))


def test_days_between_is_signed_and_monotonic():
    a = BSDate(2080, 1, 1)
    b = BSDate(2080, 2, 1)
    assert days_between(a, a) == 0
    assert days_between(a, b) == 31
    assert days_between(b, a) == -31
    assert days_between(BSDate(2080, 12, 30), BSDate(2081, 1, 1)) == 1
    assert days_between(BSDate(2080, 1, 1), BSDate(2081, 1, 1)) == 365


def test_days_between_consecutive_days_across_a_year():
    dates = [d for d in DEFAULT_TABLE.iter_dates() if d.year == 2081]
    for earlier, later in zip(dates, dates[1:]):
        assert days_between(earlier, later) == 1


def test_month_names():
    assert month_name(1) == "Baishakh"
    assert month_name(4) == "Shrawan"
    assert month_name(12) == "Chaitra"
    with pytest.raises(InvalidMonthError):
        month_name(13)


def test_injected_table():
    table = CalendarTable({2080: [31] * 12, 2081: TWELVE_30S}, version="test")
    assert table.first_year == 2080
    assert table.last_year == 2081
    assert 2081 in table
    assert "2080" in table
    assert 2082 not in table
    assert to_index(BSDate(2081, 1, 1), table=table) == 372
    assert from_index(372 + 45, table=table) == BSDate(2081, 2, 16)
    assert not is_valid_date(BSDate(2082, 1, 1), table=table)


@pytest.mark.parametrize(
    "years",
    [
        {},
        {2080: [30] * 11},
        {2080: [30] * 11 + [0]},
        {2080: TWELVE_30S, 2082: TWELVE_30S},
        {"abc": TWELVE_30S},
    ],
)
def test_malformed_tables_are_rejected(years):
    with pytest.raises(CalendarDataError):
        CalendarTable(years)


def test_load_calendar_table_from_file(tmp_path):
    path = tmp_path / "calendar.json"
    path.write_text(
        json.dumps({"version": "t1", "years": {"2080": TWELVE_30S, "2081": TWELVE_30S}}),
        encoding="utf-8",
    )
    table = load_calendar_table(path)
    assert table.version == "t1"
    assert table.years() == [2080, 2081]
    assert table.year_length(2081) == 360


def test_load_calendar_table_errors(tmp_path):
    with pytest.raises(CalendarDataError):
        load_calendar_table(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"version": "x"}), encoding="utf-8")
    with pytest.raises(CalendarDataError):
        load_calendar_table(bad)


def test_bundled_table_covers_expected_years():
    assert DEFAULT_TABLE.first_year == 2000
    assert DEFAULT_TABLE.last_year == 2090
    assert DEFAULT_TABLE.first_date() == BSDate(2000, 1, 1)
