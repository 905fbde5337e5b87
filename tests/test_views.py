import pytest

from edumanage.services.views import navigation, resolve_view


@pytest.mark.parametrize("role,tab,view", [
    ("admin", "users", "user_management"),
    ("teacher", "invoices", "invoice_management"),
    ("parent", "children", "student_management"),
    ("student", "schedule", "calendar"),
])
def test_tab_resolves_to_view(role, tab, view):
    assert resolve_view(role, tab) == view


@pytest.mark.parametrize("role,dashboard", [
    ("admin", "admin_dashboard"),
    ("teacher", "teacher_dashboard"),
    ("parent", "parent_dashboard"),
    ("student", "student_dashboard"),
])
def test_unknown_tab_falls_back_to_dashboard(role, dashboard):
    assert resolve_view(role, "does-not-exist") == dashboard


def test_unknown_role():
    assert resolve_view(None, "dashboard") == "unknown_role"
    assert resolve_view("janitor", "dashboard") == "unknown_role"
    assert navigation(None) == []


def test_navigation_starts_with_dashboard():
    for role in ("admin", "teacher", "parent", "student"):
        assert navigation(role)[0]["id"] == "dashboard"
    assert "invoices" not in [item["id"] for item in navigation("student")]
