import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from edumanage.schemas.calendar import CalendarDay, CalendarEvent, MonthRef, MonthView
from edumanage.schemas.course import Course
from edumanage.utils.dates import as_naive_utc, shift_month

STATUS_COLORS = {
    "completed": "#10B981",
    "cancelled": "#EF4444",
}
DEFAULT_COLOR = "#3B82F6"


def course_event(course: Course) -> CalendarEvent:
    start = as_naive_utc(course.date)
    return CalendarEvent(
        id=course.id,
        title=course.title,
        start=start,
        end=start + timedelta(minutes=course.duration),
        type="course",
        color=STATUS_COLORS.get(course.status, DEFAULT_COLOR),
        course_id=course.id,
        status=course.status,
        location=course.location,
    )


def course_events(courses: Iterable[Course]) -> List[CalendarEvent]:
    return sorted((course_event(c) for c in courses), key=lambda e: e.start)


def events_for_day(events: Iterable[CalendarEvent], day: date) -> List[CalendarEvent]:
    return [e for e in events if e.start.date() == day]


def events_between(events: Iterable[CalendarEvent], start: datetime, end: datetime) -> List[CalendarEvent]:
    start, end = as_naive_utc(start), as_naive_utc(end)
    return [e for e in events if start <= e.start < end]


def month_view(courses: Iterable[Course], year: int, month: int) -> MonthView:
    events = course_events(courses)
    first_day = date(year, month, 1)
    _, days_in_month = calendar.monthrange(year, month)

    # date.weekday(): Monday = 0; grid columns start on Sunday
    leading = (first_day.weekday() + 1) % 7
    days: List[Optional[CalendarDay]] = [None] * leading
    for offset in range(days_in_month):
        day = first_day + timedelta(days=offset)
        days.append(CalendarDay(date=day, events=events_for_day(events, day)))

    previous_month = shift_month(first_day, -1)
    next_month = shift_month(first_day, 1)
    return MonthView(
        year=year,
        month=month,
        days=days,
        previous=MonthRef(year=previous_month.year, month=previous_month.month),
        next=MonthRef(year=next_month.year, month=next_month.month),
    )
