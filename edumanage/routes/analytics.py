from fastapi import APIRouter, Depends

from edumanage.dependencies.auth import current_actor, current_view, require_roles
from edumanage.schemas.actor import AdminActor, ParentActor, StudentActor, TeacherActor
from edumanage.services import dashboards
from edumanage.services.scoping import ScopedView

router = APIRouter()

# -------- Role dashboard --------
@router.get("/dashboard")
def get_dashboard(actor=Depends(current_actor), view: ScopedView = Depends(current_view)):
    if isinstance(actor, AdminActor):
        return {"role": "admin", **dashboards.admin_dashboard(view.users, view.courses)}
    if isinstance(actor, TeacherActor):
        return {"role": "teacher", **dashboards.teacher_dashboard(view)}
    if isinstance(actor, ParentActor):
        return {"role": "parent", **dashboards.parent_dashboard(view)}
    if isinstance(actor, StudentActor):
        return {"role": "student", **dashboards.student_dashboard(view, actor)}
    return {"role": None}

# -------- Analytics --------
@router.get("/summary")
def get_analytics(
    actor=Depends(require_roles("admin", "teacher")),
    view: ScopedView = Depends(current_view),
):
    return dashboards.analytics_summary(view)
