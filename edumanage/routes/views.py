from fastapi import APIRouter, Depends

from edumanage.dependencies.auth import current_actor
from edumanage.services import views

router = APIRouter()

@router.get("/navigation")
def get_navigation(actor=Depends(current_actor)):
    role = actor.role if actor else None
    return {"role": role, "items": views.navigation(role)}

@router.get("/{tab}")
def resolve_tab(tab: str, actor=Depends(current_actor)):
    role = actor.role if actor else None
    return {"role": role, "tab": tab, "view": views.resolve_view(role, tab)}
