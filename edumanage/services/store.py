from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from edumanage.schemas.user import User, Role
from edumanage.schemas.people import Teacher, Parent
from edumanage.schemas.student import Student
from edumanage.schemas.course import Course, Attendance
from edumanage.schemas.grade import Grade
from edumanage.schemas.invoice import Invoice
from edumanage.schemas.message import Message

ENTITY_KINDS = (
    "users",
    "teachers",
    "students",
    "parents",
    "courses",
    "grades",
    "invoices",
    "messages",
    "attendance",
)


class EntityStore(ABC):
    """Access contract shared by the remote and in-memory backends.

    Records go in and come out as plain dicts keyed by column name, the same
    shape supabase returns in ``response.data``.
    """

    @abstractmethod
    def list(self, kind: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def get(self, kind: str, record_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def create(self, kind: str, record: Dict[str, Any]) -> str:
        ...

    @abstractmethod
    def update(self, kind: str, record_id: str, patch: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def delete(self, kind: str, record_id: str) -> None:
        ...

    @abstractmethod
    def create_user_account(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: Role,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> str:
        ...

    @abstractmethod
    def delete_user_account(self, user_id: str) -> bool:
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Tuple[Dict[str, Any], str]:
        """Return the user row and an access token, or raise AuthenticationError."""

    @abstractmethod
    def user_for_token(self, token: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    def update_password(self, user_id: str, password: str) -> None:
        """Set a new password on the account of users row ``user_id``."""


class Snapshot(BaseModel):
    """Typed content of every collection at one instant."""
    users: List[User] = []
    teachers: List[Teacher] = []
    students: List[Student] = []
    parents: List[Parent] = []
    courses: List[Course] = []
    grades: List[Grade] = []
    invoices: List[Invoice] = []
    messages: List[Message] = []
    attendance: List[Attendance] = []


def check_kind(kind: str) -> str:
    if kind not in ENTITY_KINDS:
        raise ValueError(f"Unknown entity kind: {kind}")
    return kind


def load_snapshot(store: EntityStore) -> Snapshot:
    return Snapshot(**{kind: store.list(kind) for kind in ENTITY_KINDS})
