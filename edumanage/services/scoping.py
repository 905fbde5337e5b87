from typing import List, Optional, Set

from edumanage.schemas.actor import Actor, AdminActor, ParentActor, StudentActor, TeacherActor
from edumanage.schemas.message import Message
from edumanage.services.store import Snapshot

# A scoped view has the same shape as a snapshot, restricted to one actor
ScopedView = Snapshot


def _participant_messages(messages: List[Message], actor_id: str) -> List[Message]:
    return [m for m in messages if m.sender_id == actor_id or m.receiver_id == actor_id]


def scope(snapshot: Snapshot, actor: Optional[Actor]) -> ScopedView:
    """Project a snapshot onto what ``actor`` is entitled to see.

    Pure function of its inputs; called on every request. A missing actor
    gets empty collections.
    """
    if isinstance(actor, AdminActor):
        return snapshot.model_copy(deep=True)

    if isinstance(actor, TeacherActor):
        students = [s for s in snapshot.students if s.teacher_id == actor.id]
        courses = [c for c in snapshot.courses if c.teacher_id == actor.id]
        grades = [g for g in snapshot.grades if g.teacher_id == actor.id]
        invoices = [i for i in snapshot.invoices if i.teacher_id == actor.id]
        parent_ids = {pid for s in students for pid in s.parent_ids}
        return _view(
            snapshot,
            students=students,
            courses=courses,
            grades=grades,
            invoices=invoices,
            parent_ids=parent_ids,
            teacher_ids={actor.id},
            actor_id=actor.id,
        )

    if isinstance(actor, ParentActor):
        students = [s for s in snapshot.students if actor.id in s.parent_ids]
        student_ids = {s.id for s in students}
        courses = [c for c in snapshot.courses if student_ids.intersection(c.student_ids)]
        grades = [g for g in snapshot.grades if g.student_id in student_ids]
        invoices = [i for i in snapshot.invoices if i.parent_id == actor.id]
        return _view(
            snapshot,
            students=students,
            courses=courses,
            grades=grades,
            invoices=invoices,
            parent_ids={actor.id},
            teacher_ids={s.teacher_id for s in students},
            actor_id=actor.id,
            attendance_student_ids=student_ids,
        )

    if isinstance(actor, StudentActor):
        students = [s for s in snapshot.students if s.id == actor.student_id]
        courses = [c for c in snapshot.courses if actor.student_id in c.student_ids]
        grades = [g for g in snapshot.grades if g.student_id == actor.student_id]
        invoices = [i for i in snapshot.invoices if i.student_id == actor.student_id]
        return _view(
            snapshot,
            students=students,
            courses=courses,
            grades=grades,
            invoices=invoices,
            parent_ids={pid for s in students for pid in s.parent_ids},
            teacher_ids={s.teacher_id for s in students},
            actor_id=actor.id,
            attendance_student_ids={actor.student_id},
        )

    return ScopedView()


def _view(
    snapshot: Snapshot,
    students,
    courses,
    grades,
    invoices,
    parent_ids: Set[str],
    teacher_ids: Set[str],
    actor_id: str,
    attendance_student_ids: Optional[Set[str]] = None,
) -> ScopedView:
    course_ids = {c.id for c in courses}
    attendance = [
        a for a in snapshot.attendance
        if a.course_id in course_ids
        and (attendance_student_ids is None or a.student_id in attendance_student_ids)
    ]
    view = ScopedView(
        students=students,
        courses=courses,
        grades=grades,
        invoices=invoices,
        parents=[p for p in snapshot.parents if p.id in parent_ids],
        teachers=[t for t in snapshot.teachers if t.id in teacher_ids],
        messages=_participant_messages(snapshot.messages, actor_id),
        attendance=attendance,
    )
    # Records are shared with the snapshot; hand out independent copies
    return view.model_copy(deep=True)
