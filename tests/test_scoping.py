from edumanage.schemas.actor import AdminActor, ParentActor, StudentActor, TeacherActor, build_actor
from edumanage.schemas.user import User
from edumanage.services.scoping import scope


def ids(records):
    return {r.id for r in records}


def test_admin_sees_everything(snapshot):
    view = scope(snapshot, AdminActor(id="admin-1"))
    assert ids(view.students) == {"student-1", "student-2", "student-3"}
    assert len(view.users) == len(snapshot.users)
    assert len(view.invoices) == 3


def test_teacher_sees_only_own_records(snapshot):
    view = scope(snapshot, TeacherActor(id="teacher-1"))
    assert ids(view.students) == {"student-1", "student-3"}
    assert ids(view.courses) == {"course-1", "course-3", "course-4"}
    assert all(g.teacher_id == "teacher-1" for g in view.grades)
    assert ids(view.invoices) == {"invoice-1", "invoice-3"}
    assert ids(view.parents) == {"parent-1", "parent-3"}
    assert ids(view.teachers) == {"teacher-1"}
    assert view.users == []


def test_parent_of_one_child_never_sees_other_children(snapshot):
    view = scope(snapshot, ParentActor(id="parent-1"))
    assert ids(view.students) == {"student-1"}
    assert all(g.student_id == "student-1" for g in view.grades)
    assert all("student-1" in c.student_ids for c in view.courses)
    assert all(i.parent_id == "parent-1" for i in view.invoices)
    assert "student-2" not in {g.student_id for g in view.grades}
    assert "course-2" not in ids(view.courses)
    assert "invoice-2" not in ids(view.invoices)
    assert ids(view.teachers) == {"teacher-1"}


def test_parent_sees_shared_course_but_not_other_childs_attendance(snapshot):
    view = scope(snapshot, ParentActor(id="parent-3"))
    # course-1 is shared by student-1 and student-3
    assert "course-1" in ids(view.courses)
    assert all(a.student_id == "student-3" for a in view.attendance)
    assert "grade-2" not in ids(view.grades)


def test_student_sees_only_own_records(snapshot):
    view = scope(snapshot, StudentActor(id="student-user-1", student_id="student-1"))
    assert ids(view.students) == {"student-1"}
    assert ids(view.grades) == {"grade-1", "grade-2", "grade-3"}
    assert ids(view.invoices) == {"invoice-1"}
    assert ids(view.attendance) == {"attendance-1"}


def test_missing_actor_gets_empty_view(snapshot):
    view = scope(snapshot, None)
    assert view.students == []
    assert view.courses == []
    assert view.grades == []
    assert view.invoices == []
    assert view.messages == []


def test_messages_are_scoped_to_participants(snapshot):
    assert ids(scope(snapshot, TeacherActor(id="teacher-1")).messages) == {"message-1"}
    assert ids(scope(snapshot, ParentActor(id="parent-2")).messages) == {"message-2"}
    assert ids(scope(snapshot, ParentActor(id="parent-3")).messages) == set()


def test_scoped_view_is_independent_of_snapshot(snapshot):
    view = scope(snapshot, TeacherActor(id="teacher-1"))
    view.students[0].first_name = "Changed"
    assert all(s.first_name != "Changed" for s in snapshot.students)


def test_build_actor_links_student_account(snapshot):
    user = next(u for u in snapshot.users if u.id == "student-user-1")
    actor = build_actor(user, snapshot.students)
    assert isinstance(actor, StudentActor)
    assert actor.student_id == "student-1"


def test_build_actor_maps_roles():
    def user(role):
        return User(id=f"{role}-x", email=f"{role}@x.com", first_name="A", last_name="B", role=role)

    assert isinstance(build_actor(user("admin")), AdminActor)
    assert isinstance(build_actor(user("teacher")), TeacherActor)
    assert isinstance(build_actor(user("parent")), ParentActor)
    assert build_actor(None) is None
