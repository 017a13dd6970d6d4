"""Date manipulation utilities for visa windows and contract dates"""

import calendar
from datetime import date, datetime, timezone
from typing import List
from zoneinfo import ZoneInfo
from visaloan_gateway.domain.exceptions import InvalidArgumentError
from visaloan_gateway.domain.rates import MIN_LOAN_DURATION, VISA_BUFFER_MONTHS


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end; a partial final month is not counted"""
    for value in (start, end):
        if not isinstance(value, date):
            raise InvalidArgumentError(f"Expected a calendar date, got {value!r}")

    months = (end.year * 12 + end.month) - (start.year * 12 + start.month)
    if end.day < start.day:
        months -= 1
    return months


def max_loan_duration(today: date, visa_expiry: date) -> int:
    """Longest loan term that matures VISA_BUFFER_MONTHS before the visa expires (never negative)"""
    return max(0, months_between(today, visa_expiry) - VISA_BUFFER_MONTHS)


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month's length"""
    index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def available_durations(max_duration: int) -> List[int]:
    """Selectable terms for a visa window: MIN_LOAN_DURATION..max_duration (empty if too short)"""
    return list(range(MIN_LOAN_DURATION, max_duration + 1))


def day_start_utc(moment: datetime, tz_name: str) -> datetime:
    """Midnight of `moment`'s calendar day in `tz_name`, as an aware UTC datetime"""
    local = moment.astimezone(ZoneInfo(tz_name))
    midnight = datetime(local.year, local.month, local.day, tzinfo=local.tzinfo)
    return midnight.astimezone(timezone.utc)
