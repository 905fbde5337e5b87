from fastapi import APIRouter, HTTPException, Depends
from typing import List, Optional

from edumanage.dependencies.auth import current_view, get_handlers, get_locale, require_roles
from edumanage.schemas.invoice import (
    Invoice, InvoiceCreate, InvoiceItemCreate, InvoiceStatus, InvoiceStatusChange,
)
from edumanage.services import aggregation
from edumanage.services.scoping import ScopedView
from edumanage.utils.messages import message

router = APIRouter()

staff = require_roles("admin", "teacher")


def _visible(view: ScopedView, invoice_id: str, locale: str) -> Invoice:
    invoice = next((i for i in view.invoices if i.id == invoice_id), None)
    if not invoice:
        raise HTTPException(status_code=404, detail=message("invoice_not_found", locale))
    return invoice

# -------- Invoices --------
@router.get("/", response_model=List[Invoice])
def get_all_invoices(status: Optional[InvoiceStatus] = None, view: ScopedView = Depends(current_view)):
    return [i for i in view.invoices if status is None or i.status == status]

@router.get("/summary")
def get_invoice_summary(view: ScopedView = Depends(current_view)):
    return aggregation.invoice_totals(view.invoices)

@router.get("/{invoice_id}", response_model=Invoice)
def get_invoice(invoice_id: str, view: ScopedView = Depends(current_view), locale: str = Depends(get_locale)):
    return _visible(view, invoice_id, locale)

@router.post("/", response_model=Invoice)
def create_invoice(invoice: InvoiceCreate, actor=Depends(staff), handlers=Depends(get_handlers)):
    return handlers.create_invoice(invoice, actor)

@router.post("/{invoice_id}/items", response_model=Invoice)
def add_invoice_item(
    invoice_id: str,
    item: InvoiceItemCreate,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _visible(view, invoice_id, locale)
    return handlers.add_invoice_item(invoice_id, item)

@router.delete("/{invoice_id}/items/{index}", response_model=Invoice)
def remove_invoice_item(
    invoice_id: str,
    index: int,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _visible(view, invoice_id, locale)
    return handlers.remove_invoice_item(invoice_id, index)

@router.post("/{invoice_id}/status", response_model=Invoice)
def change_invoice_status(
    invoice_id: str,
    change: InvoiceStatusChange,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _visible(view, invoice_id, locale)
    return handlers.change_invoice_status(invoice_id, change)

@router.delete("/{invoice_id}")
def delete_invoice(
    invoice_id: str,
    actor=Depends(staff),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _visible(view, invoice_id, locale)
    handlers.delete_invoice(invoice_id)
    return {"message": "Deleted"}
