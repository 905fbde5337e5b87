from fastapi import APIRouter, HTTPException, Depends
from typing import List, Optional

from edumanage.dependencies.auth import current_view, get_handlers, get_locale, require_roles
from edumanage.schemas.course import Course, CourseCreate, CourseStatus, CourseStatusChange, CourseUpdate
from edumanage.services.scoping import ScopedView
from edumanage.utils.messages import message

router = APIRouter()

staff = require_roles("admin", "teacher")


def _owned(view: ScopedView, course_id: str, locale: str) -> Course:
    course = next((c for c in view.courses if c.id == course_id), None)
    if not course:
        raise HTTPException(status_code=404, detail=message("course_not_found", locale))
    return course

# -------- Courses --------
@router.get("/", response_model=List[Course])
def get_all_courses(
    status: Optional[CourseStatus] = None,
    subject: Optional[str] = None,
    view: ScopedView = Depends(current_view),
):
    return [
        c for c in view.courses
        if (status is None or c.status == status) and (subject is None or c.subject == subject)
    ]

@router.get("/{course_id}", response_model=Course)
def get_course(course_id: str, view: ScopedView = Depends(current_view), locale: str = Depends(get_locale)):
    return _owned(view, course_id, locale)

@router.post("/", response_model=Course)
def create_course(course: CourseCreate, actor=Depends(staff), handlers=Depends(get_handlers)):
    return handlers.create_course(course, actor)

@router.put("/{course_id}", response_model=Course)
def update_course(
    course_id: str,
    course: CourseUpdate,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _owned(view, course_id, locale)
    return handlers.update_course(course_id, course)

@router.post("/{course_id}/status", response_model=Course)
def change_course_status(
    course_id: str,
    change: CourseStatusChange,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _owned(view, course_id, locale)
    return handlers.change_course_status(course_id, change.status)

@router.delete("/{course_id}")
def delete_course(
    course_id: str,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _owned(view, course_id, locale)
    handlers.delete_course(course_id)
    return {"message": "Deleted"}
