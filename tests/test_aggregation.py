from datetime import date, datetime

import pytest

from edumanage.schemas.course import Attendance, Course
from edumanage.schemas.grade import Grade
from edumanage.schemas.invoice import Invoice, InvoiceItem
from edumanage.services import aggregation


def make_grade(grade, max_grade=20, weight=1, subject="Mathématiques", student_id="student-1", **kwargs):
    return Grade(
        id=kwargs.get("id", f"g-{grade}-{weight}"),
        student_id=student_id,
        course_id="course-1",
        teacher_id="teacher-1",
        subject=subject,
        grade=grade,
        max_grade=max_grade,
        weight=weight,
        date=date(2024, 12, 10),
    )


def make_course(index, status):
    return Course(
        id=f"course-{index}",
        title=f"Course {index}",
        date=datetime(2024, 12, 1, 10, 0),
        duration=60,
        subject="Mathématiques",
        teacher_id="teacher-1",
        status=status,
    )


def make_invoice(amount, status):
    return Invoice(
        id=f"inv-{status}-{amount}",
        invoice_number="INV-2024-001",
        teacher_id="teacher-1",
        parent_id="parent-1",
        student_id="student-1",
        amount=amount,
        status=status,
        due_date=date(2024, 12, 31),
    )


def test_weighted_math_average_scenario():
    grades = [make_grade(15, weight=1), make_grade(12, weight=2)]
    assert aggregation.student_average(grades, "student-1", "Mathématiques") == pytest.approx(13.0)


def test_average_of_no_grades_is_zero():
    assert aggregation.weighted_average([]) == 0
    assert aggregation.student_average([make_grade(15)], "student-2") == 0
    assert aggregation.average_grade([]) == 0


def test_average_is_invariant_to_weight_scaling():
    grades = [make_grade(15, weight=1), make_grade(12, weight=2), make_grade(7, max_grade=10, weight=3)]
    scaled = [g.model_copy(update={"weight": g.weight * 2.5}) for g in grades]
    assert aggregation.weighted_average(scaled) == pytest.approx(aggregation.weighted_average(grades))


def test_grades_on_other_scales_are_normalized_to_twenty():
    assert aggregation.weighted_average([make_grade(9, max_grade=10)]) == pytest.approx(18.0)


def test_subject_averages_split_by_subject():
    grades = [
        make_grade(16, subject="Physique", id="a"),
        make_grade(15, weight=1, id="b"),
        make_grade(12, weight=2, id="c"),
        make_grade(10, student_id="student-3", id="d"),
    ]
    averages = aggregation.subject_averages(grades, "student-1")
    assert averages == {
        "Physique": pytest.approx(16.0),
        "Mathématiques": pytest.approx(13.0),
    }


def test_completion_and_cancellation_rates_scenario():
    courses = [make_course(i, "completed") for i in range(8)]
    courses.append(make_course(8, "cancelled"))
    courses.append(make_course(9, "scheduled"))
    assert aggregation.completion_rate(courses) == pytest.approx(80.0)
    assert aggregation.cancellation_rate(courses) == pytest.approx(10.0)
    assert aggregation.no_show_rate(courses) == 0


def test_rates_of_empty_collections_are_zero():
    assert aggregation.completion_rate([]) == 0
    assert aggregation.cancellation_rate([]) == 0
    assert aggregation.attendance_rate([]) == 0


@pytest.mark.parametrize("statuses", [
    ["completed"],
    ["scheduled", "cancelled"],
    ["completed", "completed", "no_show"],
])
def test_completion_rate_stays_within_bounds(statuses):
    courses = [make_course(i, s) for i, s in enumerate(statuses)]
    assert 0 <= aggregation.completion_rate(courses) <= 100


def test_attendance_rate_counts_late_as_present():
    records = [
        Attendance(id="a1", student_id="s", course_id="c1", status="present"),
        Attendance(id="a2", student_id="s", course_id="c2", status="late"),
        Attendance(id="a3", student_id="s", course_id="c3", status="absent"),
        Attendance(id="a4", student_id="s", course_id="c4", status="excused"),
    ]
    assert aggregation.attendance_rate(records) == pytest.approx(50.0)


def test_invoice_amount_scenario():
    items = [
        InvoiceItem(description="Cours", quantity=2, unit_price=15),
        InvoiceItem(description="Atelier", quantity=1, unit_price=45),
    ]
    assert aggregation.invoice_amount(items, discount=10) == pytest.approx(65)


def test_revenue_only_counts_paid_invoices():
    invoices = [make_invoice(30, "paid"), make_invoice(65, "sent"), make_invoice(30, "overdue")]
    assert aggregation.total_revenue(invoices) == 30
    assert aggregation.invoice_totals(invoices) == {
        "total": 125,
        "paid": 30,
        "pending": 65,
        "overdue": 30,
    }


def test_revenue_per_student_without_students_is_zero():
    assert aggregation.revenue_per_student(100, 0) == 0
    assert aggregation.revenue_per_student(100, 4) == 25
