from fastapi import APIRouter, HTTPException, Depends
from typing import List, Optional

from edumanage.dependencies.auth import current_view, get_handlers, get_locale, require_roles
from edumanage.schemas.grade import Grade, GradeCreate, GradeUpdate
from edumanage.services import aggregation
from edumanage.services.scoping import ScopedView
from edumanage.utils.messages import message

router = APIRouter()

staff = require_roles("admin", "teacher")

# -------- Grades --------
@router.get("/", response_model=List[Grade])
def get_all_grades(
    student_id: Optional[str] = None,
    subject: Optional[str] = None,
    view: ScopedView = Depends(current_view),
):
    return [
        g for g in view.grades
        if (student_id is None or g.student_id == student_id) and (subject is None or g.subject == subject)
    ]

@router.get("/subjects")
def get_subjects(view: ScopedView = Depends(current_view)):
    return sorted({g.subject for g in view.grades})

@router.get("/averages")
def get_averages(view: ScopedView = Depends(current_view)):
    """Weighted average of every visible student, on a 20-point scale."""
    averages = aggregation.student_averages(view.grades)
    return [
        {
            "student_id": s.id,
            "average": averages.get(s.id, 0),
            "subjects": aggregation.subject_averages(view.grades, s.id),
        }
        for s in view.students
    ]

@router.post("/", response_model=Grade)
def create_grade(grade: GradeCreate, actor=Depends(staff), handlers=Depends(get_handlers)):
    return handlers.create_grade(grade, actor)

@router.put("/{grade_id}", response_model=Grade)
def update_grade(
    grade_id: str,
    grade: GradeUpdate,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if not any(g.id == grade_id for g in view.grades):
        raise HTTPException(status_code=404, detail=message("grade_not_found", locale))
    return handlers.update_grade(grade_id, grade)

@router.delete("/{grade_id}")
def delete_grade(
    grade_id: str,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if not any(g.id == grade_id for g in view.grades):
        raise HTTPException(status_code=404, detail=message("grade_not_found", locale))
    handlers.delete_grade(grade_id)
    return {"message": "Deleted"}
