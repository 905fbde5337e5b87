from datetime import datetime
from typing import Any, Dict, List, Optional

from edumanage.schemas.actor import StudentActor
from edumanage.schemas.course import Course
from edumanage.schemas.user import User
from edumanage.services import aggregation
from edumanage.services.scoping import ScopedView
from edumanage.utils.dates import as_naive_utc, get_week_range, utc_now


def _upcoming(courses: List[Course], now: datetime, limit: Optional[int] = None) -> List[Course]:
    upcoming = [c for c in courses if as_naive_utc(c.date) > now and c.status == "scheduled"]
    upcoming.sort(key=lambda c: as_naive_utc(c.date))
    return upcoming[:limit] if limit else upcoming


def teacher_dashboard(view: ScopedView, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = as_naive_utc(now) if now else utc_now()
    week_start, week_end = get_week_range("this", now)

    today_courses = [c for c in view.courses if as_naive_utc(c.date).date() == now.date()]
    week_courses = [c for c in view.courses if week_start <= as_naive_utc(c.date) < week_end]

    return {
        "active_students": len(view.students),
        "courses_this_week": len(week_courses),
        "courses_today": len(today_courses),
        "today": today_courses,
        "revenue": aggregation.total_revenue(view.invoices),
        "completed_courses": sum(1 for c in view.courses if c.status == "completed"),
        "upcoming": _upcoming(view.courses, now),
    }


def parent_dashboard(view: ScopedView, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = as_naive_utc(now) if now else utc_now()
    pending = [i for i in view.invoices if i.status == "sent"]

    return {
        "children": len(view.students),
        "upcoming_courses": _upcoming(view.courses, now, limit=3),
        "recent_grades": list(reversed(view.grades[-3:])),
        "pending_invoices": len(pending),
        "pending_amount": sum(i.amount for i in pending),
        "averages": {
            s.id: aggregation.student_average(view.grades, s.id) for s in view.students
        },
    }


def student_dashboard(view: ScopedView, actor: StudentActor, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = as_naive_utc(now) if now else utc_now()

    return {
        "average": aggregation.student_average(view.grades, actor.student_id),
        "subject_averages": aggregation.subject_averages(view.grades, actor.student_id),
        "upcoming_courses": _upcoming(view.courses, now, limit=5),
        "recent_grades": list(reversed(view.grades[-5:])),
        "attendance_rate": aggregation.attendance_rate(view.attendance),
    }


def admin_dashboard(users: List[User], courses: List[Course]) -> Dict[str, Any]:
    def count(role):
        return sum(1 for u in users if u.role == role)

    recent = sorted(
        (u for u in users if u.created_at is not None),
        key=lambda u: as_naive_utc(u.created_at),
        reverse=True,
    )[:5]

    return {
        "total_users": len(users),
        "total_teachers": count("teacher"),
        "total_students": count("student"),
        "total_parents": count("parent"),
        "total_courses": len(courses),
        "recent_activity": recent,
    }


def analytics_summary(view: ScopedView) -> Dict[str, Any]:
    revenue = aggregation.total_revenue(view.invoices)
    total_courses = len(view.courses)
    completed = sum(1 for c in view.courses if c.status == "completed")

    return {
        "total_revenue": revenue,
        "total_courses": total_courses,
        "completed_courses": completed,
        "scheduled_courses": total_courses - completed,
        "total_students": len(view.students),
        "average_grade": aggregation.average_grade(view.grades),
        "completion_rate": aggregation.completion_rate(view.courses),
        "cancellation_rate": aggregation.cancellation_rate(view.courses),
        "no_show_rate": aggregation.no_show_rate(view.courses),
        "revenue_per_student": aggregation.revenue_per_student(revenue, len(view.students)),
        "attendance_rate": aggregation.attendance_rate(view.attendance),
        "invoices": aggregation.invoice_totals(view.invoices),
    }
