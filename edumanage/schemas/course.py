from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

CourseStatus = Literal["scheduled", "completed", "cancelled", "no_show"]
AttendanceStatus = Literal["present", "absent", "late", "excused"]

# --- Courses ---
class Course(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    date: datetime
    duration: int
    subject: str
    student_ids: List[str] = []
    teacher_id: str
    status: CourseStatus = "scheduled"
    price: float = 0
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

class CourseCreate(BaseModel):
    title: str
    description: Optional[str] = None
    date: datetime
    duration: int = Field(..., gt=0, description="Length of the course in minutes")
    subject: str
    student_ids: List[str] = []
    teacher_id: Optional[str] = None
    price: float = Field(0, ge=0)
    location: Optional[str] = None
    notes: Optional[str] = None

class CourseUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    duration: Optional[int] = Field(None, gt=0)
    subject: Optional[str] = None
    student_ids: Optional[List[str]] = None
    price: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    notes: Optional[str] = None

class CourseStatusChange(BaseModel):
    status: CourseStatus

# --- Attendance ---
class Attendance(BaseModel):
    id: str
    student_id: str
    course_id: str
    status: AttendanceStatus
    notes: Optional[str] = None

class AttendanceCreate(BaseModel):
    student_id: str
    course_id: str
    status: AttendanceStatus
    notes: Optional[str] = None
