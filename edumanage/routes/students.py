from fastapi import APIRouter, HTTPException, Depends
from typing import List, Optional

from edumanage.dependencies.auth import current_view, get_handlers, get_locale, require_roles
from edumanage.schemas.student import Student, StudentCreate, StudentUpdate
from edumanage.services import aggregation
from edumanage.services.scoping import ScopedView
from edumanage.utils.messages import message

router = APIRouter()

staff = require_roles("admin", "teacher")

# Get all students visible to the caller
@router.get("/", response_model=List[Student])
def get_all_students(view: ScopedView = Depends(current_view)):
    return view.students

# Get single student by id
@router.get("/{student_id}", response_model=Student)
def get_student_by_id(
    student_id: str,
    view: ScopedView = Depends(current_view),
    locale: str = Depends(get_locale),
):
    student = next((s for s in view.students if s.id == student_id), None)
    if not student:
        raise HTTPException(status_code=404, detail=message("student_not_found", locale))
    return student

# Weighted averages, overall and per subject
@router.get("/{student_id}/averages")
def get_student_averages(
    student_id: str,
    subject: Optional[str] = None,
    view: ScopedView = Depends(current_view),
    locale: str = Depends(get_locale),
):
    if not any(s.id == student_id for s in view.students):
        raise HTTPException(status_code=404, detail=message("student_not_found", locale))
    return {
        "student_id": student_id,
        "average": aggregation.student_average(view.grades, student_id, subject),
        "subjects": aggregation.subject_averages(view.grades, student_id),
    }

# Create student
@router.post("/", response_model=Student)
def create_student(student: StudentCreate, actor=Depends(staff), handlers=Depends(get_handlers)):
    return handlers.create_student(student, actor)

# Edit student
@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: str,
    student: StudentUpdate,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    # Verify student belongs to the user
    if not any(s.id == student_id for s in view.students):
        raise HTTPException(status_code=404, detail=message("student_not_found", locale))
    return handlers.update_student(student_id, student)

# Delete student
@router.delete("/{student_id}")
def delete_student(
    student_id: str,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if not any(s.id == student_id for s in view.students):
        raise HTTPException(status_code=404, detail=message("student_not_found", locale))
    handlers.delete_student(student_id)
    return {"message": "Deleted"}
