from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime

# --- Students ---
class Student(BaseModel):
    id: str
    user_id: Optional[str] = None
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    level: str
    subjects: List[str] = []
    parent_ids: List[str] = []
    teacher_id: str
    notes: Optional[str] = None
    learning_goals: List[str] = []
    created_at: Optional[datetime] = None

class StudentCreate(BaseModel):
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    level: str
    subjects: List[str] = []
    parent_ids: List[str] = []
    # Overridden with the caller's id when a teacher creates the student
    teacher_id: Optional[str] = None
    user_id: Optional[str] = None
    notes: Optional[str] = None
    learning_goals: List[str] = []

class StudentUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    level: Optional[str] = None
    subjects: Optional[List[str]] = None
    parent_ids: Optional[List[str]] = None
    teacher_id: Optional[str] = None
    notes: Optional[str] = None
    learning_goals: Optional[List[str]] = None
