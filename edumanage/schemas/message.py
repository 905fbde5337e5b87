from pydantic import BaseModel
from typing import Optional
from datetime import datetime

# --- Messages ---
class Message(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    subject: str
    content: str
    read: bool = False
    thread_id: Optional[str] = None
    created_at: Optional[datetime] = None

class MessageCreate(BaseModel):
    receiver_id: str
    subject: str
    content: str
    thread_id: Optional[str] = None
