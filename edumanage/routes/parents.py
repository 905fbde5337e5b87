from fastapi import APIRouter, HTTPException, Depends
from typing import List

from edumanage.dependencies.auth import current_view, get_handlers, get_locale, require_roles
from edumanage.schemas.invoice import Invoice
from edumanage.schemas.people import Parent, ParentCreate, ParentUpdate
from edumanage.schemas.student import Student
from edumanage.services import aggregation
from edumanage.services.scoping import ScopedView
from edumanage.utils.messages import message

router = APIRouter()

staff = require_roles("admin", "teacher")

# -------- Parents --------
@router.get("/", response_model=List[Parent])
def get_all_parents(view: ScopedView = Depends(current_view)):
    return view.parents

@router.get("/{parent_id}")
def get_parent(
    parent_id: str,
    view: ScopedView = Depends(current_view),
    locale: str = Depends(get_locale),
):
    parent = next((p for p in view.parents if p.id == parent_id), None)
    if not parent:
        raise HTTPException(status_code=404, detail=message("parent_not_found", locale))

    invoices: List[Invoice] = [i for i in view.invoices if i.parent_id == parent_id]
    children: List[Student] = [s for s in view.students if parent_id in s.parent_ids]
    totals = aggregation.invoice_totals(invoices)
    return {
        "parent": parent,
        "children": children,
        "invoices": invoices,
        "total_paid": totals["paid"],
        "total_pending": totals["pending"],
    }

@router.post("/", response_model=Parent)
def create_parent(parent: ParentCreate, actor=Depends(staff), handlers=Depends(get_handlers)):
    return handlers.create_parent(parent)

@router.put("/{parent_id}", response_model=Parent)
def update_parent(
    parent_id: str,
    parent: ParentUpdate,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if not any(p.id == parent_id for p in view.parents):
        raise HTTPException(status_code=404, detail=message("parent_not_found", locale))
    return handlers.update_parent(parent_id, parent)

@router.delete("/{parent_id}")
def delete_parent(
    parent_id: str,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if not any(p.id == parent_id for p in view.parents):
        raise HTTPException(status_code=404, detail=message("parent_not_found", locale))
    handlers.delete_parent(parent_id)
    return {"message": "Deleted"}
