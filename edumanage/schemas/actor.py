from pydantic import BaseModel, Field
from typing import Optional, Union, Literal, Sequence, Annotated

from edumanage.schemas.user import User
from edumanage.schemas.student import Student

# --- Actors: the authenticated caller, one shape per role ---
class AdminActor(BaseModel):
    role: Literal["admin"] = "admin"
    id: str

class TeacherActor(BaseModel):
    role: Literal["teacher"] = "teacher"
    id: str

class ParentActor(BaseModel):
    role: Literal["parent"] = "parent"
    id: str

class StudentActor(BaseModel):
    role: Literal["student"] = "student"
    id: str
    # students.id of the record linked to this account
    student_id: str

Actor = Annotated[
    Union[AdminActor, TeacherActor, ParentActor, StudentActor],
    Field(discriminator="role"),
]


def build_actor(user: Optional[User], students: Sequence[Student] = ()) -> Optional[Actor]:
    """Map a user profile to its actor. Unknown roles map to None."""
    if user is None:
        return None
    if user.role == "admin":
        return AdminActor(id=user.id)
    if user.role == "teacher":
        return TeacherActor(id=user.id)
    if user.role == "parent":
        return ParentActor(id=user.id)
    if user.role == "student":
        linked = next((s for s in students if s.user_id == user.id), None)
        return StudentActor(id=user.id, student_id=linked.id if linked else user.id)
    return None
