from fastapi import APIRouter, HTTPException, Depends
from typing import List, Optional

from edumanage.dependencies.auth import current_view, get_handlers, get_locale, require_roles
from edumanage.schemas.course import Attendance, AttendanceCreate
from edumanage.services import aggregation
from edumanage.services.scoping import ScopedView
from edumanage.utils.messages import message

router = APIRouter()

staff = require_roles("admin", "teacher")

# -------- Attendance --------
@router.get("/", response_model=List[Attendance])
def get_attendance(
    course_id: Optional[str] = None,
    student_id: Optional[str] = None,
    view: ScopedView = Depends(current_view),
):
    return [
        a for a in view.attendance
        if (course_id is None or a.course_id == course_id) and (student_id is None or a.student_id == student_id)
    ]

@router.get("/rate")
def get_attendance_rate(student_id: Optional[str] = None, view: ScopedView = Depends(current_view)):
    records = [a for a in view.attendance if student_id is None or a.student_id == student_id]
    return {"student_id": student_id, "rate": aggregation.attendance_rate(records), "records": len(records)}

@router.post("/", response_model=Attendance)
def record_attendance(
    record: AttendanceCreate,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if not any(c.id == record.course_id for c in view.courses):
        raise HTTPException(status_code=404, detail=message("course_not_found", locale))
    return handlers.record_attendance(record)

@router.delete("/{attendance_id}")
def delete_attendance(
    attendance_id: str,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if not any(a.id == attendance_id for a in view.attendance):
        raise HTTPException(status_code=404, detail=message("attendance_not_found", locale))
    handlers.delete_attendance(attendance_id)
    return {"message": "Deleted"}
