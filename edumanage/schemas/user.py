from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

Role = Literal["admin", "teacher", "student", "parent"]

# --- Users (auth.users.id -> users.auth_id) ---
class User(BaseModel):
    id: str
    auth_id: Optional[str] = None
    email: str
    first_name: str
    last_name: str
    role: Role
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar_url: Optional[str] = None
    can_change_password: bool = True
    is_active: bool = True
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

class UserCreate(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    first_name: str
    last_name: str
    role: Role
    phone: Optional[str] = None
    address: Optional[str] = None
