from fastapi.testclient import TestClient

from edumanage.config import Settings
from edumanage.errors import StoreError
from edumanage.main import create_app
from edumanage.services.memory_store import MemoryStore
from edumanage.services.seed import SEED_CREDENTIALS, SEED_DATA


def ids(response):
    return {row["id"] for row in response.json()}


# -------- Auth --------

def test_login_returns_token_and_profile(client):
    response = client.post("/auth/login", json={"email": "admin@edumanage.com", "password": "admin123"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["role"] == "admin"


def test_wrong_password_is_unauthorized(client):
    response = client.post("/auth/login", json={"email": "admin@edumanage.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"


def test_error_messages_follow_locale(store):
    client = TestClient(create_app(Settings(backend="memory", jwt_secret="test-secret", locale="fr"), store))
    response = client.post("/auth/login", json={"email": "admin@edumanage.com", "password": "nope"})
    assert response.json()["detail"] == "Identifiants de connexion invalides"


def test_not_found_messages_follow_locale(store):
    client = TestClient(create_app(Settings(backend="memory", jwt_secret="test-secret", locale="fr"), store))
    login = client.post("/auth/login", json={"email": "admin@edumanage.com", "password": "admin123"})
    headers = {"Authorization": f"Bearer {login.json()['token']}"}

    assert client.get("/students/student-404", headers=headers).json()["detail"] == "Élève introuvable"
    assert client.put("/grades/grade-404", headers=headers, json={"grade": 10}).json()["detail"] == "Note introuvable"
    assert client.get("/invoices/invoice-404", headers=headers).json()["detail"] == "Facture introuvable"
    response = client.delete("/users/user-404", headers=headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Utilisateur introuvable"


def test_malformed_authorization_header(client):
    response = client.get("/auth/me", headers={"Authorization": "Token abc"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token format"


def test_forged_token_is_rejected(client):
    response = client.get("/students/", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_me_returns_current_user(client, auth_headers):
    response = client.get("/auth/me", headers=auth_headers("parent"))
    assert response.status_code == 200
    assert response.json()["id"] == "parent-1"


def test_password_change_replaces_old_password(client, auth_headers):
    response = client.post("/auth/password", headers=auth_headers("parent"), json={
        "current_password": "parent123", "new_password": "nouveau1",
    })
    assert response.status_code == 200
    assert response.json()["message"] == "Password updated"

    old = client.post("/auth/login", json={"email": "marie.martin@email.com", "password": "parent123"})
    assert old.status_code == 401
    new = client.post("/auth/login", json={"email": "marie.martin@email.com", "password": "nouveau1"})
    assert new.status_code == 200


def test_password_change_needs_current_password(client, auth_headers):
    response = client.post("/auth/password", headers=auth_headers("parent"), json={
        "current_password": "wrong", "new_password": "nouveau1",
    })
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"

    too_short = client.post("/auth/password", headers=auth_headers("parent"), json={
        "current_password": "parent123", "new_password": "abc",
    })
    assert too_short.status_code == 422


def test_password_change_can_be_disabled(client, store, auth_headers):
    store.update("users", "parent-1", {"can_change_password": False})
    response = client.post("/auth/password", headers=auth_headers("parent"), json={
        "current_password": "parent123", "new_password": "nouveau1",
    })
    assert response.status_code == 403
    assert response.json()["detail"] == "Password changes are disabled for this account"


# -------- Scoped reads --------

def test_parent_lists_only_own_child_records(client, auth_headers):
    headers = auth_headers("parent")
    assert ids(client.get("/students/", headers=headers)) == {"student-1"}
    assert ids(client.get("/invoices/", headers=headers)) == {"invoice-1"}
    grades = client.get("/grades/", headers=headers).json()
    assert {g["student_id"] for g in grades} == {"student-1"}
    assert "course-2" not in ids(client.get("/courses/", headers=headers))


def test_parent_cannot_open_other_student(client, auth_headers):
    response = client.get("/students/student-2", headers=auth_headers("parent"))
    assert response.status_code == 404


def test_teacher_course_filters(client, auth_headers):
    response = client.get("/courses/", params={"status": "completed"}, headers=auth_headers("teacher"))
    assert ids(response) == {"course-3"}


def test_student_averages_endpoint(client, auth_headers):
    response = client.get("/students/student-1/averages", headers=auth_headers("student"))
    assert response.status_code == 200
    body = response.json()
    assert round(body["subjects"]["Mathématiques"], 6) == 13.0
    assert round(body["average"], 6) == 13.75


def test_parent_detail_totals(client, auth_headers):
    response = client.get("/parents/parent-2", headers=auth_headers("teacher2"))
    assert response.status_code == 200
    body = response.json()
    assert [c["id"] for c in body["children"]] == ["student-2"]
    assert body["total_pending"] == 65
    assert body["total_paid"] == 0


def test_messages_inbox_and_search(client, auth_headers):
    headers = auth_headers("parent")
    assert ids(client.get("/messages/", headers=headers)) == {"message-1"}
    assert ids(client.get("/messages/", params={"box": "unread"}, headers=headers)) == {"message-1"}
    assert ids(client.get("/messages/", params={"box": "sent"}, headers=headers)) == set()
    assert ids(client.get("/messages/", params={"search": "algèbre"}, headers=headers)) == {"message-1"}

    recipients = client.get("/messages/recipients", headers=headers).json()
    assert [r["id"] for r in recipients] == ["teacher-1"]


def test_other_users_message_is_hidden(client, auth_headers):
    response = client.post("/messages/message-2/read", headers=auth_headers("parent"))
    assert response.status_code == 404


# -------- Role checks --------

def test_parent_cannot_create_courses(client, auth_headers):
    response = client.post("/courses/", headers=auth_headers("parent"), json={
        "title": "Math", "date": "2025-01-10T14:00:00", "duration": 60, "subject": "Mathématiques",
    })
    assert response.status_code == 403
    assert response.json()["detail"] == "This screen is not available for your role"


def test_users_are_admin_only(client, auth_headers):
    assert client.get("/users/", headers=auth_headers("teacher")).status_code == 403
    assert len(client.get("/users/", headers=auth_headers("admin")).json()) == 7


def test_analytics_summary_for_teacher_only_covers_own_courses(client, auth_headers):
    response = client.get("/analytics/summary", headers=auth_headers("teacher"))
    body = response.json()
    assert body["total_courses"] == 3
    assert body["total_revenue"] == 30
    assert round(body["completion_rate"], 6) == round(100 / 3, 6)
    assert client.get("/analytics/summary", headers=auth_headers("parent")).status_code == 403


def test_dashboard_dispatches_on_role(client, auth_headers):
    assert client.get("/analytics/dashboard", headers=auth_headers("admin")).json()["total_users"] == 7
    parent = client.get("/analytics/dashboard", headers=auth_headers("parent")).json()
    assert parent["role"] == "parent"
    assert parent["children"] == 1


def test_view_resolution(client, auth_headers):
    response = client.get("/views/unknown-tab", headers=auth_headers("teacher"))
    assert response.json()["view"] == "teacher_dashboard"
    navigation = client.get("/views/navigation", headers=auth_headers("parent")).json()
    assert navigation["items"][0]["id"] == "dashboard"


# -------- Mutations --------

def test_invalid_grade_is_unprocessable(client, auth_headers):
    response = client.post("/grades/", headers=auth_headers("teacher"), json={
        "student_id": "student-1", "course_id": "course-1", "subject": "Mathématiques",
        "grade": 25, "max_grade": 20, "date": "2024-12-20",
    })
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_record"


def test_created_grade_lists_back(client, auth_headers):
    headers = auth_headers("teacher")
    created = client.post("/grades/", headers=headers, json={
        "student_id": "student-3", "course_id": "course-1", "subject": "Mathématiques",
        "grade": 18, "max_grade": 20, "weight": 2, "type": "exam", "date": "2024-12-20", "comment": "Très bien",
    })
    assert created.status_code == 200
    grade_id = created.json()["id"]

    listed = client.get("/grades/", params={"student_id": "student-3"}, headers=headers).json()
    grade = next(g for g in listed if g["id"] == grade_id)
    assert grade["grade"] == 18
    assert grade["weight"] == 2
    assert grade["comment"] == "Très bien"


def test_invoice_lifecycle(client, auth_headers):
    headers = auth_headers("teacher")
    created = client.post("/invoices/", headers=headers, json={
        "parent_id": "parent-1", "student_id": "student-1", "course_ids": ["course-1"], "due_date": "2025-01-31",
        "items": [{"description": "Cours", "quantity": 2, "unit_price": 15},
                  {"description": "Atelier", "quantity": 1, "unit_price": 45}],
        "discount": 10,
    })
    assert created.status_code == 200
    invoice = created.json()
    assert invoice["amount"] == 65
    assert invoice["status"] == "draft"

    updated = client.post(f"/invoices/{invoice['id']}/items", headers=headers,
                          json={"description": "Support", "unit_price": 5}).json()
    assert updated["amount"] == 70

    sent = client.post(f"/invoices/{invoice['id']}/status", headers=headers, json={"status": "sent"})
    assert sent.json()["status"] == "sent"

    frozen = client.delete(f"/invoices/{invoice['id']}/items/0", headers=headers)
    assert frozen.status_code == 422


def test_unknown_record_is_not_found(client, auth_headers):
    response = client.delete("/users/user-404", headers=auth_headers("admin"))
    assert response.status_code == 404


def test_calendar_range_needs_both_bounds(client, auth_headers):
    headers = auth_headers("teacher")
    response = client.get("/calendar/events", params={"start": "2024-12-16T00:00:00"}, headers=headers)
    assert response.status_code == 400
    events = client.get("/calendar/events", params={
        "start": "2024-12-16T00:00:00", "end": "2024-12-18T00:00:00",
    }, headers=headers).json()
    assert [e["id"] for e in events] == ["course-3", "course-4"]


def test_calendar_range_accepts_aware_and_naive_bounds(client, auth_headers):
    headers = auth_headers("teacher")
    events = client.get("/calendar/events", params={
        "start": "2024-12-16T00:00:00Z", "end": "2024-12-18T00:00:00",
    }, headers=headers)
    assert events.status_code == 200
    assert [e["id"] for e in events.json()] == ["course-3", "course-4"]

    # 01:00 at UTC+02:00 is still the previous day in UTC
    reversed_range = client.get("/calendar/events", params={
        "start": "2024-12-16T00:00:00", "end": "2024-12-16T01:00:00+02:00",
    }, headers=headers)
    assert reversed_range.status_code == 400
    assert reversed_range.json()["detail"] == "Both start and end are required, with end after start"


def test_month_view_endpoint(client, auth_headers):
    response = client.get("/calendar/month", params={"year": 2024, "month": 12}, headers=auth_headers("parent"))
    days = response.json()["days"]
    assert [e["id"] for e in days[19]["events"]] == ["course-1"]


# -------- Store failures --------

class FailingStore(MemoryStore):
    def list(self, kind):
        raise StoreError(f"list {kind} failed")


def test_store_failure_is_reported_as_unavailable():
    store = FailingStore(seed=SEED_DATA, credentials=SEED_CREDENTIALS, jwt_secret="test-secret")
    client = TestClient(create_app(Settings(backend="memory", jwt_secret="test-secret"), store))
    token = client.post("/auth/login", json={"email": "sophie.leroy@edumanage.com", "password": "teacher123"})
    response = client.get("/courses/", headers={"Authorization": f"Bearer {token.json()['token']}"})
    assert response.status_code == 502
    assert response.json()["detail"] == "The service is temporarily unavailable. Please try again later."
