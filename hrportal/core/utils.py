# hrportal/core/utils.py
import calendar
import re
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Set, Union

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def now_local() -> datetime:
    """Current local time, wrapped so tests can patch it"""
    return datetime.now()


def today() -> date:
    return now_local().date()


def current_time_string() -> str:
    return now_local().strftime("%H:%M")


def parse_time(value: str) -> int:
    """Convert an ``HH:MM`` string to minutes since midnight"""
    match = TIME_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def round_half_up(value: Union[float, int], places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def worked_minutes(check_in: Optional[str], check_out: Optional[str]) -> Optional[int]:
    """Minutes between two ``HH:MM`` strings; a check-out before the check-in is an overnight shift"""
    if not check_in or not check_out:
        return None

    diff_minutes = parse_time(check_out) - parse_time(check_in)
    if diff_minutes < 0:
        diff_minutes += 24 * 60
    return diff_minutes


def calculate_hours(check_in: Optional[str], check_out: Optional[str]) -> Optional[float]:
    """
    Hours worked, rounded half up to one decimal place over the whole span.

    57 minutes is 1.0, never 0.10. Returns None until both times are known.
    """
    minutes = worked_minutes(check_in, check_out)
    if minutes is None:
        return None
    return round_half_up(minutes / 60)


def format_hours(check_in: Optional[str], check_out: Optional[str]) -> str:
    """'8' for whole hours, '8.0' or '8.5' otherwise, '--' until checked out"""
    minutes = worked_minutes(check_in, check_out)
    if minutes is None:
        return "--"
    if minutes % 60 == 0:
        return str(minutes // 60)
    return f"{calculate_hours(check_in, check_out):.1f}"


def is_late(check_in: str, late_after: str) -> bool:
    return parse_time(check_in) > parse_time(late_after)


def holiday_in_year(holiday_date: date, year: int) -> date:
    """Move a recurring holiday into ``year``; 29 Feb falls back to 28 Feb"""
    day = holiday_date.day
    if holiday_date.month == 2 and day == 29 and not calendar.isleap(year):
        day = 28
    return date(year, holiday_date.month, day)


def expand_holidays(holidays: Iterable, start: date, end: date) -> Set[date]:
    """Dates between ``start`` and ``end`` covered by the given holiday rows"""
    dates = set()
    for holiday in holidays:
        if holiday.is_recurring:
            for year in range(max(start.year, holiday.date.year), end.year + 1):
                candidate = holiday_in_year(holiday.date, year)
                if start <= candidate <= end:
                    dates.add(candidate)
        elif start <= holiday.date <= end:
            dates.add(holiday.date)
    return dates


def working_days(start: date, end: date, holidays: Optional[Set[date]] = None) -> int:
    """Count weekdays in [start, end] that are not holidays"""
    if end < start:
        return 0

    holidays = holidays or set()
    total = 0
    current = start
    while current <= end:
        if current.weekday() < 5 and current not in holidays:
            total += 1
        current += timedelta(days=1)
    return total


def percentage(part: int, whole: int) -> int:
    if not whole:
        return 0
    return int(round_half_up(part * 100 / whole, 0))
