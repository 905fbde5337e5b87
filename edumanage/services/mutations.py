import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

from edumanage.errors import InvalidRecordError, RecordNotFoundError
from edumanage.schemas.actor import Actor, TeacherActor
from edumanage.schemas.course import (
    Attendance, AttendanceCreate, Course, CourseCreate, CourseStatus, CourseUpdate,
)
from edumanage.schemas.grade import Grade, GradeCreate, GradeUpdate
from edumanage.schemas.invoice import (
    Invoice, InvoiceCreate, InvoiceItem, InvoiceItemCreate, InvoiceStatusChange,
)
from edumanage.schemas.message import Message, MessageCreate
from edumanage.schemas.people import Parent, ParentCreate, ParentUpdate
from edumanage.schemas.student import Student, StudentCreate, StudentUpdate
from edumanage.schemas.user import User, UserCreate
from edumanage.services import aggregation
from edumanage.services.store import EntityStore
from edumanage.utils.inflight import InFlightGuard

logger = logging.getLogger(__name__)

COURSE_TRANSITIONS = {
    "scheduled": {"completed", "cancelled", "no_show"},
}

INVOICE_TRANSITIONS = {
    "draft": {"sent", "cancelled"},
    "sent": {"paid", "overdue", "cancelled"},
    "overdue": {"paid", "cancelled"},
}

INVOICE_NUMBER = re.compile(r"^INV-(\d{4})-(\d+)$")


class MutationHandlers:
    """The only writers of the entity store.

    Each command validates the record it is about to produce and raises
    InvalidRecordError instead of storing something inconsistent: dangling
    references, out-of-range grades, negative invoice totals and illegal
    status changes are all rejected here.
    """

    def __init__(self, store: EntityStore, guard: Optional[InFlightGuard] = None):
        self.store = store
        self.guard = guard or InFlightGuard()

    # -------- helpers --------

    def _fetch(self, kind: str, record_id: str) -> Dict[str, Any]:
        record = self.store.get(kind, record_id)
        if record is None:
            raise RecordNotFoundError(kind, record_id)
        return record

    def _require(self, kind: str, record_id: Optional[str], field: str) -> Dict[str, Any]:
        record = self.store.get(kind, record_id) if record_id else None
        if record is None:
            logger.warning(f"Rejected record: {field}={record_id} does not reference an existing {kind} row")
            raise InvalidRecordError(f"{field} references unknown {kind} record {record_id}")
        return record

    def _owner_id(self, actor: Optional[Actor], requested: Optional[str]) -> str:
        # Teachers always own what they create
        if isinstance(actor, TeacherActor):
            return actor.id
        if not requested:
            raise InvalidRecordError("teacher_id is required")
        return requested

    def _referenced_by(self, kind: str, field: str, record_id: str) -> bool:
        for row in self.store.list(kind):
            value = row.get(field)
            if value == record_id or (isinstance(value, list) and record_id in value):
                return True
        return False

    # -------- Students --------

    def create_student(self, data: StudentCreate, actor: Optional[Actor] = None) -> Student:
        record = data.model_dump(mode="json")
        record["teacher_id"] = self._owner_id(actor, data.teacher_id)
        self._require("teachers", record["teacher_id"], "teacher_id")
        for parent_id in data.parent_ids:
            self._require("parents", parent_id, "parent_ids")

        with self.guard.hold(f"create:students:{data.first_name}:{data.last_name}"):
            student_id = self.store.create("students", record)
            for parent_id in data.parent_ids:
                self._link_child(parent_id, student_id)

        logger.info(f"Created student {student_id} for teacher {record['teacher_id']}")
        return Student(**self._fetch("students", student_id))

    def update_student(self, student_id: str, data: StudentUpdate) -> Student:
        current = self._fetch("students", student_id)
        patch = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if "teacher_id" in patch:
            self._require("teachers", patch["teacher_id"], "teacher_id")
        for parent_id in patch.get("parent_ids") or []:
            self._require("parents", parent_id, "parent_ids")

        with self.guard.hold(f"update:students:{student_id}"):
            self.store.update("students", student_id, patch)
            if "parent_ids" in patch:
                old, new = set(current.get("parent_ids") or []), set(patch["parent_ids"] or [])
                for parent_id in new - old:
                    self._link_child(parent_id, student_id)
                for parent_id in old - new:
                    self._unlink_child(parent_id, student_id)

        return Student(**self._fetch("students", student_id))

    def delete_student(self, student_id: str) -> None:
        current = self._fetch("students", student_id)
        for kind, field in (("grades", "student_id"), ("invoices", "student_id"),
                            ("courses", "student_ids"), ("attendance", "student_id")):
            if self._referenced_by(kind, field, student_id):
                raise InvalidRecordError(f"Student {student_id} is still referenced by {kind}")

        with self.guard.hold(f"delete:students:{student_id}"):
            for parent_id in current.get("parent_ids") or []:
                self._unlink_child(parent_id, student_id)
            self.store.delete("students", student_id)
        logger.info(f"Deleted student {student_id}")

    def _link_child(self, parent_id: str, student_id: str) -> None:
        parent = self.store.get("parents", parent_id)
        if parent is not None and student_id not in (parent.get("children") or []):
            self.store.update("parents", parent_id, {"children": (parent.get("children") or []) + [student_id]})

    def _unlink_child(self, parent_id: str, student_id: str) -> None:
        parent = self.store.get("parents", parent_id)
        if parent is not None and student_id in (parent.get("children") or []):
            children = [c for c in parent["children"] if c != student_id]
            self.store.update("parents", parent_id, {"children": children})

    # -------- Parents --------

    def create_parent(self, data: ParentCreate) -> Parent:
        for student_id in data.children:
            self._require("students", student_id, "children")

        record = data.model_dump(mode="json")
        if record.get("id") is None:
            record.pop("id")
        with self.guard.hold(f"create:parents:{data.email.lower()}"):
            parent_id = self.store.create("parents", record)
            for student_id in data.children:
                self._link_parent(student_id, parent_id)

        logger.info(f"Created parent {parent_id}")
        return Parent(**self._fetch("parents", parent_id))

    def update_parent(self, parent_id: str, data: ParentUpdate) -> Parent:
        current = self._fetch("parents", parent_id)
        patch = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        for student_id in patch.get("children") or []:
            self._require("students", student_id, "children")

        with self.guard.hold(f"update:parents:{parent_id}"):
            self.store.update("parents", parent_id, patch)
            if "children" in patch:
                old, new = set(current.get("children") or []), set(patch["children"] or [])
                for student_id in new - old:
                    self._link_parent(student_id, parent_id)
                for student_id in old - new:
                    self._unlink_parent(student_id, parent_id)

        return Parent(**self._fetch("parents", parent_id))

    def delete_parent(self, parent_id: str) -> None:
        current = self._fetch("parents", parent_id)
        if self._referenced_by("invoices", "parent_id", parent_id):
            raise InvalidRecordError(f"Parent {parent_id} is still referenced by invoices")

        with self.guard.hold(f"delete:parents:{parent_id}"):
            for student_id in current.get("children") or []:
                self._unlink_parent(student_id, parent_id)
            self.store.delete("parents", parent_id)
        logger.info(f"Deleted parent {parent_id}")

    def _link_parent(self, student_id: str, parent_id: str) -> None:
        student = self.store.get("students", student_id)
        if student is not None and parent_id not in (student.get("parent_ids") or []):
            self.store.update("students", student_id,
                              {"parent_ids": (student.get("parent_ids") or []) + [parent_id]})

    def _unlink_parent(self, student_id: str, parent_id: str) -> None:
        student = self.store.get("students", student_id)
        if student is not None and parent_id in (student.get("parent_ids") or []):
            parent_ids = [p for p in student["parent_ids"] if p != parent_id]
            self.store.update("students", student_id, {"parent_ids": parent_ids})

    # -------- Courses --------

    def create_course(self, data: CourseCreate, actor: Optional[Actor] = None) -> Course:
        record = data.model_dump(mode="json")
        record["teacher_id"] = self._owner_id(actor, data.teacher_id)
        record["status"] = "scheduled"
        self._require("teachers", record["teacher_id"], "teacher_id")
        for student_id in data.student_ids:
            self._require("students", student_id, "student_ids")

        with self.guard.hold(f"create:courses:{record['teacher_id']}:{record['date']}"):
            course_id = self.store.create("courses", record)

        logger.info(f"Created course {course_id} for teacher {record['teacher_id']}")
        return Course(**self._fetch("courses", course_id))

    def update_course(self, course_id: str, data: CourseUpdate) -> Course:
        self._fetch("courses", course_id)
        patch = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        for student_id in patch.get("student_ids") or []:
            self._require("students", student_id, "student_ids")

        with self.guard.hold(f"update:courses:{course_id}"):
            self.store.update("courses", course_id, patch)
        return Course(**self._fetch("courses", course_id))

    def change_course_status(self, course_id: str, status: CourseStatus) -> Course:
        current = self._fetch("courses", course_id)
        if status not in COURSE_TRANSITIONS.get(current["status"], set()):
            raise InvalidRecordError(f"Course {course_id} cannot go from {current['status']} to {status}")

        with self.guard.hold(f"update:courses:{course_id}"):
            self.store.update("courses", course_id, {"status": status})
        logger.info(f"Course {course_id} is now {status}")
        return Course(**self._fetch("courses", course_id))

    def delete_course(self, course_id: str) -> None:
        self._fetch("courses", course_id)
        for kind, field in (("grades", "course_id"), ("invoices", "course_ids"), ("attendance", "course_id")):
            if self._referenced_by(kind, field, course_id):
                raise InvalidRecordError(f"Course {course_id} is still referenced by {kind}")

        with self.guard.hold(f"delete:courses:{course_id}"):
            self.store.delete("courses", course_id)
        logger.info(f"Deleted course {course_id}")

    # -------- Grades --------

    def _check_grade(self, record: Dict[str, Any]) -> None:
        self._require("students", record["student_id"], "student_id")
        self._require("courses", record["course_id"], "course_id")
        self._require("teachers", record["teacher_id"], "teacher_id")
        if record["max_grade"] <= 0:
            raise InvalidRecordError("max_grade must be greater than 0")
        if record["weight"] <= 0:
            raise InvalidRecordError("weight must be greater than 0")
        if not 0 <= record["grade"] <= record["max_grade"]:
            raise InvalidRecordError(
                f"grade {record['grade']} is outside [0, {record['max_grade']}]"
            )

    def create_grade(self, data: GradeCreate, actor: Optional[Actor] = None) -> Grade:
        record = data.model_dump(mode="json")
        record["teacher_id"] = self._owner_id(actor, data.teacher_id)
        self._check_grade(record)

        with self.guard.hold(f"create:grades:{record['student_id']}:{record['course_id']}"):
            grade_id = self.store.create("grades", record)

        logger.info(f"Created grade {grade_id} for student {record['student_id']}")
        return Grade(**self._fetch("grades", grade_id))

    def update_grade(self, grade_id: str, data: GradeUpdate) -> Grade:
        current = self._fetch("grades", grade_id)
        patch = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        self._check_grade({**current, **patch})

        with self.guard.hold(f"update:grades:{grade_id}"):
            self.store.update("grades", grade_id, patch)
        return Grade(**self._fetch("grades", grade_id))

    def delete_grade(self, grade_id: str) -> None:
        self._fetch("grades", grade_id)
        with self.guard.hold(f"delete:grades:{grade_id}"):
            self.store.delete("grades", grade_id)

    # -------- Attendance --------

    def record_attendance(self, data: AttendanceCreate) -> Attendance:
        self._require("students", data.student_id, "student_id")
        course = self._require("courses", data.course_id, "course_id")
        if data.student_id not in (course.get("student_ids") or []):
            raise InvalidRecordError(f"Student {data.student_id} is not enrolled in course {data.course_id}")

        record = data.model_dump(mode="json")
        existing = next(
            (a for a in self.store.list("attendance")
             if a["student_id"] == data.student_id and a["course_id"] == data.course_id),
            None,
        )
        with self.guard.hold(f"attendance:{data.course_id}:{data.student_id}"):
            if existing:
                self.store.update("attendance", existing["id"], record)
                attendance_id = existing["id"]
            else:
                attendance_id = self.store.create("attendance", record)
        return Attendance(**self._fetch("attendance", attendance_id))

    def delete_attendance(self, attendance_id: str) -> None:
        self._fetch("attendance", attendance_id)
        with self.guard.hold(f"delete:attendance:{attendance_id}"):
            self.store.delete("attendance", attendance_id)

    # -------- Invoices --------

    def next_invoice_number(self, year: Optional[int] = None) -> str:
        year = year or date.today().year
        sequence = 0
        for invoice in self.store.list("invoices"):
            match = INVOICE_NUMBER.match(invoice.get("invoice_number") or "")
            if match and int(match.group(1)) == year:
                sequence = max(sequence, int(match.group(2)))
        return f"INV-{year}-{sequence + 1:03d}"

    @staticmethod
    def _priced_items(items: List[InvoiceItem]) -> List[InvoiceItem]:
        return [
            InvoiceItem(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total=aggregation.line_total(item),
            )
            for item in items
        ]

    @staticmethod
    def _checked_amount(items: List[InvoiceItem], discount: float) -> float:
        if not items:
            raise InvalidRecordError("An invoice needs at least one line item")
        if discount < 0:
            raise InvalidRecordError("discount cannot be negative")
        amount = aggregation.invoice_amount(items, discount)
        if amount < 0:
            raise InvalidRecordError(f"Invoice total would be negative ({amount})")
        return amount

    def create_invoice(self, data: InvoiceCreate, actor: Optional[Actor] = None) -> Invoice:
        teacher_id = self._owner_id(actor, data.teacher_id)
        self._require("teachers", teacher_id, "teacher_id")
        self._require("parents", data.parent_id, "parent_id")
        student = self._require("students", data.student_id, "student_id")
        if data.parent_id not in (student.get("parent_ids") or []):
            raise InvalidRecordError(f"Parent {data.parent_id} is not a parent of student {data.student_id}")
        for course_id in data.course_ids:
            self._require("courses", course_id, "course_ids")

        items = self._priced_items([InvoiceItem(**i.model_dump()) for i in data.items])
        amount = self._checked_amount(items, data.discount)

        with self.guard.hold("create:invoices"):
            record = {
                "invoice_number": self.next_invoice_number(),
                "teacher_id": teacher_id,
                "parent_id": data.parent_id,
                "student_id": data.student_id,
                "course_ids": data.course_ids,
                "amount": amount,
                "currency": data.currency,
                "status": "draft",
                "due_date": data.due_date.isoformat(),
                "items": [i.model_dump(mode="json") for i in items],
                "taxes": 0,
                "discount": data.discount,
                "notes": data.notes,
            }
            invoice_id = self.store.create("invoices", record)

        logger.info(f"Created invoice {record['invoice_number']} ({amount} {data.currency})")
        return Invoice(**self._fetch("invoices", invoice_id))

    def _replace_items(self, invoice_id: str, items: List[InvoiceItem]) -> Invoice:
        current = Invoice(**self._fetch("invoices", invoice_id))
        if current.status != "draft":
            raise InvalidRecordError(f"Invoice {current.invoice_number} is {current.status}; only drafts can be edited")
        priced = self._priced_items(items)
        amount = self._checked_amount(priced, current.discount)

        with self.guard.hold(f"update:invoices:{invoice_id}"):
            self.store.update("invoices", invoice_id, {
                "items": [i.model_dump(mode="json") for i in priced],
                "amount": amount,
            })
        return Invoice(**self._fetch("invoices", invoice_id))

    def add_invoice_item(self, invoice_id: str, item: InvoiceItemCreate) -> Invoice:
        current = Invoice(**self._fetch("invoices", invoice_id))
        return self._replace_items(invoice_id, current.items + [InvoiceItem(**item.model_dump())])

    def remove_invoice_item(self, invoice_id: str, index: int) -> Invoice:
        current = Invoice(**self._fetch("invoices", invoice_id))
        if not 0 <= index < len(current.items):
            raise InvalidRecordError(f"Invoice {current.invoice_number} has no line item {index}")
        items = current.items[:index] + current.items[index + 1:]
        return self._replace_items(invoice_id, items)

    def change_invoice_status(self, invoice_id: str, change: InvoiceStatusChange) -> Invoice:
        current = self._fetch("invoices", invoice_id)
        if change.status not in INVOICE_TRANSITIONS.get(current["status"], set()):
            raise InvalidRecordError(
                f"Invoice {current['invoice_number']} cannot go from {current['status']} to {change.status}"
            )

        patch: Dict[str, Any] = {"status": change.status}
        if change.status == "paid":
            patch["paid_date"] = (change.paid_date or date.today()).isoformat()
            patch["payment_method"] = change.payment_method or current.get("payment_method")

        with self.guard.hold(f"update:invoices:{invoice_id}"):
            self.store.update("invoices", invoice_id, patch)
        logger.info(f"Invoice {current['invoice_number']} is now {change.status}")
        return Invoice(**self._fetch("invoices", invoice_id))

    def delete_invoice(self, invoice_id: str) -> None:
        current = self._fetch("invoices", invoice_id)
        if current["status"] not in ("draft", "cancelled"):
            raise InvalidRecordError(f"Invoice {current['invoice_number']} is {current['status']} and cannot be deleted")
        with self.guard.hold(f"delete:invoices:{invoice_id}"):
            self.store.delete("invoices", invoice_id)

    # -------- Messages --------

    def send_message(self, data: MessageCreate, actor: Actor) -> Message:
        self._require("users", data.receiver_id, "receiver_id")
        if data.thread_id:
            thread = [m for m in self.store.list("messages") if m.get("thread_id") == data.thread_id]
            if not thread:
                self._require("messages", data.thread_id, "thread_id")

        record = {**data.model_dump(mode="json"), "sender_id": actor.id, "read": False}
        with self.guard.hold(f"send:messages:{actor.id}:{data.receiver_id}"):
            message_id = self.store.create("messages", record)
        return Message(**self._fetch("messages", message_id))

    def mark_message_read(self, message_id: str) -> Message:
        self._fetch("messages", message_id)
        self.store.update("messages", message_id, {"read": True})
        return Message(**self._fetch("messages", message_id))

    def delete_message(self, message_id: str) -> None:
        self._fetch("messages", message_id)
        with self.guard.hold(f"delete:messages:{message_id}"):
            self.store.delete("messages", message_id)

    # -------- Users --------

    def create_user(self, data: UserCreate) -> User:
        with self.guard.hold(f"create:users:{data.email.lower()}"):
            user_id = self.store.create_user_account(
                email=data.email,
                password=data.password,
                first_name=data.first_name,
                last_name=data.last_name,
                role=data.role,
                phone=data.phone,
                address=data.address,
            )
        return User(**self._fetch("users", user_id))

    def deactivate_user(self, user_id: str) -> User:
        self._fetch("users", user_id)
        with self.guard.hold(f"update:users:{user_id}"):
            self.store.update("users", user_id, {"is_active": False})
        logger.info(f"Deactivated user {user_id}")
        return User(**self._fetch("users", user_id))

    def delete_user(self, user_id: str) -> bool:
        with self.guard.hold(f"delete:users:{user_id}"):
            deleted = self.store.delete_user_account(user_id)
        if not deleted:
            raise RecordNotFoundError("users", user_id)
        return deleted
