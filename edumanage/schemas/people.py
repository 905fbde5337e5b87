from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

# --- Teachers (teachers.id == users.id) ---
class Teacher(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    subjects: List[str] = []
    hourly_rate: Optional[float] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    experience_years: int = 0
    created_at: Optional[datetime] = None

# --- Parents (parents.id == users.id) ---
class NotificationSettings(BaseModel):
    email: bool = True
    sms: bool = False
    push: bool = True
    course_reminders: bool = True
    payment_reminders: bool = True
    grade_updates: bool = True

class Parent(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    children: List[str] = []
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    created_at: Optional[datetime] = None

class ParentCreate(BaseModel):
    # Usually the id of the parent's user account
    id: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    children: List[str] = []
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

class ParentUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    children: Optional[List[str]] = None
    notifications: Optional[NotificationSettings] = None
