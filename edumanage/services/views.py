from typing import Dict, List, Optional, Tuple

# (tab id, label, view name) per role, in sidebar order
NAVIGATION: Dict[str, List[Tuple[str, str, str]]] = {
    "admin": [
        ("dashboard", "Dashboard", "admin_dashboard"),
        ("users", "Users", "user_management"),
        ("teachers", "Teachers", "teacher_management"),
        ("students", "Students", "student_management"),
        ("parents", "Parents", "parent_management"),
        ("system", "System", "system_settings"),
        ("analytics", "Analytics", "analytics_dashboard"),
    ],
    "teacher": [
        ("dashboard", "Dashboard", "teacher_dashboard"),
        ("students", "My students", "student_management"),
        ("groups", "Groups", "group_management"),
        ("courses", "Courses", "course_management"),
        ("calendar", "Schedule", "calendar"),
        ("materials", "Materials", "course_materials"),
        ("grades", "Grades", "grade_management"),
        ("attendance", "Attendance", "attendance"),
        ("invoices", "Invoices", "invoice_management"),
        ("messages", "Messages", "message_center"),
    ],
    "student": [
        ("dashboard", "Dashboard", "student_dashboard"),
        ("schedule", "My schedule", "calendar"),
        ("materials", "My materials", "course_materials"),
        ("grades", "My grades", "grade_management"),
        ("homework", "Homework", "homework"),
        ("profile", "My profile", "profile"),
        ("password", "Change password", "change_password"),
    ],
    "parent": [
        ("dashboard", "Dashboard", "parent_dashboard"),
        ("children", "My children", "student_management"),
        ("schedule", "Schedule", "calendar"),
        ("grades", "Grades", "grade_management"),
        ("homework", "Homework", "homework"),
        ("invoices", "My invoices", "invoice_management"),
        ("messages", "Messages", "message_center"),
    ],
}

UNKNOWN_ROLE_VIEW = "unknown_role"


def navigation(role: Optional[str]) -> List[Dict[str, str]]:
    return [
        {"id": tab, "label": label}
        for tab, label, _ in NAVIGATION.get(role or "", [])
    ]


def resolve_view(role: Optional[str], tab: str) -> str:
    """Pick the screen for a tab. Unknown tabs fall back to the role's dashboard."""
    entries = NAVIGATION.get(role or "")
    if not entries:
        return UNKNOWN_ROLE_VIEW
    for entry_tab, _, view in entries:
        if entry_tab == tab:
            return view
    return entries[0][2]
