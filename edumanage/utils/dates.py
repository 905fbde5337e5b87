from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta


def as_naive_utc(value: datetime) -> datetime:
    # Remote timestamps are tz-aware, seeded ones are naive
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_week_range(period: str = "this", now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    today = as_naive_utc(now) if now else utc_now()
    # Monday = 0, Sunday = 6
    weekday = today.weekday()
    start_of_this_week = today - timedelta(days=weekday)
    start_of_this_week = start_of_this_week.replace(hour=0, minute=0, second=0, microsecond=0)

    if period == "last":
        start = start_of_this_week - timedelta(days=7)
        end = start_of_this_week
    else:  # this week
        start = start_of_this_week
        end = start + timedelta(days=7)

    return start, end


def get_month_range(year: int, month: int) -> Tuple[datetime, datetime]:
    start = datetime(year, month, 1)
    return start, start + relativedelta(months=1)


def shift_month(day: date, months: int) -> date:
    return day + relativedelta(months=months)
