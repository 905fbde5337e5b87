from pydantic import BaseModel, Field
from edumanage.schemas.user import User

class LoginRequest(BaseModel):
    email: str
    password: str

class LoginResponse(BaseModel):
    token: str
    user: User

class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)
