from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

DayLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_day(value: DayLike) -> date:
    """Calendar day of a date or a local datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def iso_date(value: DayLike) -> str:
    return to_day(value).strftime("%Y-%m-%d")


def month_range(month: DayLike) -> Tuple[date, date]:
    """[first day of month, first day of next month) for the month containing ``month``."""
    d = to_day(month)
    start = d.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def days_in_month(month: DayLike) -> int:
    d = to_day(month)
    return calendar.monthrange(d.year, d.month)[1]


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed from start to end, never negative."""
    return max(0, int((end - start).total_seconds() // 60))


def format_hhmm(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else ""


def local_date_from_epoch(seconds: float) -> date:
    return datetime.fromtimestamp(seconds).date()


def to_local_naive(value: datetime) -> datetime:
    """Stored instants are naive local time; convert aware values into that form."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


# Numeric dates in older JSON payloads count seconds from 2001-01-01 00:00 UTC.
REFERENCE_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)


def from_reference_seconds(seconds: float) -> datetime:
    return to_local_naive(REFERENCE_EPOCH + timedelta(seconds=seconds))
