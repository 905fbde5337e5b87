from fastapi import APIRouter, Depends, HTTPException, Query
from datetime import date, datetime
from typing import List, Optional

from edumanage.dependencies.auth import current_view, get_locale
from edumanage.schemas.calendar import CalendarEvent, MonthView
from edumanage.services import calendar_events
from edumanage.services.scoping import ScopedView
from edumanage.utils.dates import as_naive_utc, get_week_range, utc_now
from edumanage.utils.messages import message

router = APIRouter()

@router.get("/events", response_model=List[CalendarEvent])
def get_events(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    view: ScopedView = Depends(current_view),
    locale: str = Depends(get_locale),
):
    events = calendar_events.course_events(view.courses)
    if start is None and end is None:
        return events
    if start is None or end is None or as_naive_utc(end) <= as_naive_utc(start):
        raise HTTPException(status_code=400, detail=message("invalid_range", locale))
    return calendar_events.events_between(events, start, end)

@router.get("/week", response_model=List[CalendarEvent])
def get_week(
    week: str = Query("this", pattern="^(this|last)$"),
    view: ScopedView = Depends(current_view),
):
    start, end = get_week_range(week)
    return calendar_events.events_between(calendar_events.course_events(view.courses), start, end)

@router.get("/day", response_model=List[CalendarEvent])
def get_day(day: Optional[date] = None, view: ScopedView = Depends(current_view)):
    return calendar_events.events_for_day(calendar_events.course_events(view.courses), day or utc_now().date())

@router.get("/month", response_model=MonthView)
def get_month(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    view: ScopedView = Depends(current_view),
):
    today = utc_now()
    return calendar_events.month_view(view.courses, year or today.year, month or today.month)
