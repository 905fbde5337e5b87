from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date as Date

GradeType = Literal["quiz", "exam", "homework", "participation"]

# --- Grades ---
class Grade(BaseModel):
    id: str
    student_id: str
    course_id: str
    teacher_id: str
    subject: str
    grade: float
    max_grade: float = 20
    weight: float = 1.0
    type: GradeType = "quiz"
    date: Date
    comment: Optional[str] = None

class GradeCreate(BaseModel):
    student_id: str
    course_id: str
    teacher_id: Optional[str] = None
    subject: str
    grade: float = Field(..., ge=0)
    max_grade: float = Field(20, gt=0)
    weight: float = Field(1.0, gt=0, description="Coefficient of the grade in weighted averages")
    type: GradeType = "quiz"
    date: Date
    comment: Optional[str] = None

class GradeUpdate(BaseModel):
    subject: Optional[str] = None
    grade: Optional[float] = Field(None, ge=0)
    max_grade: Optional[float] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    type: Optional[GradeType] = None
    date: Optional[Date] = None
    comment: Optional[str] = None
