from datetime import date
from types import SimpleNamespace

import pytest

from hrportal.core.utils import (
    calculate_hours,
    expand_holidays,
    format_hours,
    holiday_in_year,
    is_late,
    parse_time,
    percentage,
    round_half_up,
    working_days,
)


def test_parse_time():
    assert parse_time("00:00") == 0
    assert parse_time("09:30") == 570
    assert parse_time("23:59") == 1439

    for bad in ("24:00", "9:30", "09:60", "", None, "noon"):
        with pytest.raises(ValueError):
            parse_time(bad)


def test_calculate_hours():
    assert calculate_hours("09:00", "17:30") == 8.5
    assert calculate_hours("09:00", "09:00") == 0.0
    # 8h20m rounds to one decimal place
    assert calculate_hours("09:00", "17:20") == 8.3
    # 3 minutes is 0.05h, which rounds half up
    assert calculate_hours("09:00", "09:03") == 0.1
    assert calculate_hours("08:00", "16:02") == 8.0
    # 57 minutes rounds up to a full hour
    assert calculate_hours("08:00", "08:57") == 1.0


def test_calculate_hours_overnight():
    assert calculate_hours("22:00", "06:30") == 8.5


def test_calculate_hours_incomplete():
    assert calculate_hours("09:00", None) is None
    assert calculate_hours(None, "17:00") is None


def test_format_hours():
    assert format_hours("09:00", "17:00") == "8"
    assert format_hours("08:00", "16:02") == "8.0"
    assert format_hours("08:00", "08:57") == "1.0"
    assert format_hours("09:00", "17:30") == "8.5"
    assert format_hours("09:00", "09:00") == "0"
    assert format_hours("22:00", "06:00") == "8"
    assert format_hours("09:00", None) == "--"


def test_round_half_up():
    assert round_half_up(2.25) == 2.3
    assert round_half_up(2.35) == 2.4
    assert round_half_up(49.5, 0) == 50.0


def test_is_late():
    assert is_late("09:31", "09:30")
    assert not is_late("09:30", "09:30")
    assert not is_late("08:55", "09:30")


def test_holiday_in_year_leap_day():
    assert holiday_in_year(date(2024, 2, 29), 2025) == date(2025, 2, 28)
    assert holiday_in_year(date(2024, 2, 29), 2028) == date(2028, 2, 29)
    assert holiday_in_year(date(2020, 12, 25), 2026) == date(2026, 12, 25)


def test_expand_holidays():
    holidays = [
        SimpleNamespace(date=date(2020, 1, 1), is_recurring=True),
        SimpleNamespace(date=date(2026, 3, 4), is_recurring=False),
        SimpleNamespace(date=date(2025, 3, 5), is_recurring=False),
    ]

    dates = expand_holidays(holidays, date(2025, 12, 30), date(2026, 3, 31))
    assert dates == {date(2026, 1, 1), date(2026, 3, 4)}

    # a recurring holiday never falls before the year it was first recorded
    later = [SimpleNamespace(date=date(2026, 1, 1), is_recurring=True)]
    assert expand_holidays(later, date(2025, 1, 1), date(2026, 12, 31)) == {date(2026, 1, 1)}


def test_working_days():
    # Monday 2 March to Sunday 8 March 2026
    assert working_days(date(2026, 3, 2), date(2026, 3, 8)) == 5
    assert working_days(date(2026, 3, 2), date(2026, 3, 8), {date(2026, 3, 4)}) == 4
    assert working_days(date(2026, 3, 7), date(2026, 3, 8)) == 0
    assert working_days(date(2026, 3, 8), date(2026, 3, 2)) == 0


def test_percentage():
    assert percentage(1, 2) == 50
    assert percentage(2, 3) == 67
    assert percentage(5, 0) == 0
