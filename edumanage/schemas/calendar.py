from pydantic import BaseModel
from typing import Optional, List, Literal
from datetime import date as Date, datetime

from edumanage.schemas.course import CourseStatus

# --- Calendar ---
class CalendarEvent(BaseModel):
    id: str
    title: str
    start: datetime
    end: datetime
    type: Literal["course", "meeting", "break"] = "course"
    color: str
    course_id: Optional[str] = None
    status: Optional[CourseStatus] = None
    location: Optional[str] = None

class CalendarDay(BaseModel):
    date: Date
    events: List[CalendarEvent] = []

class MonthRef(BaseModel):
    year: int
    month: int

class MonthView(BaseModel):
    year: int
    month: int
    # Leading None cells pad the first week, which starts on Sunday
    days: List[Optional[CalendarDay]]
    previous: MonthRef
    next: MonthRef
