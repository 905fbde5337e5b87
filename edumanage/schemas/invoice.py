from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import date, datetime

InvoiceStatus = Literal["draft", "sent", "paid", "overdue", "cancelled"]

# --- Invoice line items ---
class InvoiceItem(BaseModel):
    description: str
    quantity: float
    unit_price: float
    total: float = 0

class InvoiceItemCreate(BaseModel):
    description: str = Field(..., min_length=1)
    quantity: float = Field(1, gt=0)
    unit_price: float = Field(..., ge=0)

# --- Invoices ---
class Invoice(BaseModel):
    id: str
    invoice_number: str
    teacher_id: str
    parent_id: str
    student_id: str
    course_ids: List[str] = []
    amount: float
    currency: str = "EUR"
    status: InvoiceStatus = "draft"
    due_date: date
    paid_date: Optional[date] = None
    payment_method: Optional[str] = None
    items: List[InvoiceItem] = []
    taxes: float = 0
    discount: float = 0
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

class InvoiceCreate(BaseModel):
    parent_id: str
    student_id: str
    teacher_id: Optional[str] = None
    course_ids: List[str] = []
    due_date: date
    items: List[InvoiceItemCreate]
    discount: float = 0
    currency: str = "EUR"
    notes: Optional[str] = None

class InvoiceStatusChange(BaseModel):
    status: InvoiceStatus
    payment_method: Optional[str] = None
    paid_date: Optional[date] = None
