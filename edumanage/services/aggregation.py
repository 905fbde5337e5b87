"""Grade, course and invoice arithmetic.

Every function here is pure: it only reads the records it is given, so it is
safe to call on every request. Grade averages are expressed on a 20-point
scale. Rates are percentages and come back as 0 for empty inputs.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

from edumanage.schemas.course import Attendance, Course
from edumanage.schemas.grade import Grade
from edumanage.schemas.invoice import Invoice, InvoiceItem

GRADE_SCALE = 20


# -------- Grades --------

def weighted_average(grades: Sequence[Grade]) -> float:
    """(sum of grade/max_grade * weight) / (sum of weight) * 20, 0 if empty."""
    if not grades:
        return 0
    weighted_sum = sum(g.grade / g.max_grade * g.weight for g in grades)
    total_weight = sum(g.weight for g in grades)
    return weighted_sum / total_weight * GRADE_SCALE if total_weight > 0 else 0


def student_average(grades: Iterable[Grade], student_id: str, subject: Optional[str] = None) -> float:
    selected = [
        g for g in grades
        if g.student_id == student_id and (subject is None or g.subject == subject)
    ]
    return weighted_average(selected)


def average_grade(grades: Sequence[Grade]) -> float:
    """Unweighted mean of every grade normalized to 20."""
    if not grades:
        return 0
    return sum(g.grade / g.max_grade * GRADE_SCALE for g in grades) / len(grades)


def subject_averages(grades: Iterable[Grade], student_id: str) -> Dict[str, float]:
    by_subject: Dict[str, List[Grade]] = OrderedDict()
    for g in grades:
        if g.student_id == student_id:
            by_subject.setdefault(g.subject, []).append(g)
    return {subject: weighted_average(items) for subject, items in by_subject.items()}


def student_averages(grades: Iterable[Grade]) -> Dict[str, float]:
    by_student: Dict[str, List[Grade]] = OrderedDict()
    for g in grades:
        by_student.setdefault(g.student_id, []).append(g)
    return {student_id: weighted_average(items) for student_id, items in by_student.items()}


# -------- Courses --------

def _status_rate(courses: Sequence[Course], status: str) -> float:
    if not courses:
        return 0
    return sum(1 for c in courses if c.status == status) / len(courses) * 100


def completion_rate(courses: Sequence[Course]) -> float:
    return _status_rate(courses, "completed")


def cancellation_rate(courses: Sequence[Course]) -> float:
    return _status_rate(courses, "cancelled")


def no_show_rate(courses: Sequence[Course]) -> float:
    return _status_rate(courses, "no_show")


def attendance_rate(records: Sequence[Attendance]) -> float:
    """Share of attendance rows where the student showed up (present or late)."""
    if not records:
        return 0
    return sum(1 for a in records if a.status in ("present", "late")) / len(records) * 100


# -------- Invoices --------

def line_total(item: InvoiceItem) -> float:
    return item.quantity * item.unit_price


def invoice_amount(items: Iterable[InvoiceItem], discount: float = 0) -> float:
    return sum(line_total(item) for item in items) - discount


def total_revenue(invoices: Iterable[Invoice]) -> float:
    return sum(i.amount for i in invoices if i.status == "paid")


def revenue_per_student(revenue: float, total_students: int) -> float:
    return revenue / total_students if total_students > 0 else 0


def invoice_totals(invoices: Sequence[Invoice]) -> Dict[str, float]:
    def amount_with(status):
        return sum(i.amount for i in invoices if i.status == status)

    return {
        "total": sum(i.amount for i in invoices),
        "paid": amount_with("paid"),
        "pending": amount_with("sent"),
        "overdue": amount_with("overdue"),
    }
