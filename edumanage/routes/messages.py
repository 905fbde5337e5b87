from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from edumanage.dependencies.auth import current_actor, current_view, get_handlers, get_locale, get_store
from edumanage.schemas.message import Message, MessageCreate
from edumanage.schemas.user import User
from edumanage.services.scoping import ScopedView
from edumanage.services.store import EntityStore
from edumanage.utils.messages import message

router = APIRouter()


def _participant(view: ScopedView, actor, message_id: str, locale: str) -> Message:
    msg = next((m for m in view.messages if m.id == message_id), None)
    if not msg or actor is None or actor.id not in (msg.sender_id, msg.receiver_id):
        raise HTTPException(status_code=404, detail=message("message_not_found", locale))
    return msg

# -------- Messages --------
@router.get("/", response_model=List[Message])
def get_messages(
    box: str = Query("all", pattern="^(all|unread|sent)$"),
    search: Optional[str] = None,
    actor=Depends(current_actor),
    view: ScopedView = Depends(current_view),
):
    if actor is None:
        return []
    term = (search or "").lower()
    messages = [m for m in view.messages if actor.id in (m.sender_id, m.receiver_id)]
    if box == "unread":
        messages = [m for m in messages if not m.read and m.receiver_id == actor.id]
    elif box == "sent":
        messages = [m for m in messages if m.sender_id == actor.id]
    if term:
        messages = [m for m in messages if term in m.subject.lower() or term in m.content.lower()]
    return messages

@router.get("/recipients")
def get_recipients(
    actor=Depends(current_actor),
    view: ScopedView = Depends(current_view),
    store: EntityStore = Depends(get_store),
):
    """People the caller can write to: the other side of their scoped relations."""
    if actor is None:
        return []
    if actor.role == "admin":
        users = [User(**row) for row in store.list("users")]
        return [{"id": u.id, "name": u.display_name, "role": u.role} for u in users if u.id != actor.id]
    if actor.role == "teacher":
        return [{"id": p.id, "name": f"{p.first_name} {p.last_name}", "role": "parent"} for p in view.parents]
    return [{"id": t.id, "name": f"{t.first_name} {t.last_name}", "role": "teacher"} for t in view.teachers]

@router.post("/", response_model=Message)
def send_message(
    data: MessageCreate,
    actor=Depends(current_actor),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    if actor is None:
        raise HTTPException(status_code=403, detail=message("unknown_role", locale))
    return handlers.send_message(data, actor)

@router.post("/{message_id}/read", response_model=Message)
def mark_as_read(
    message_id: str,
    actor=Depends(current_actor),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _participant(view, actor, message_id, locale)
    return handlers.mark_message_read(message_id)

@router.delete("/{message_id}")
def delete_message(
    message_id: str,
    actor=Depends(current_actor),
    view: ScopedView = Depends(current_view),
    handlers=Depends(get_handlers),
    locale: str = Depends(get_locale),
):
    _participant(view, actor, message_id, locale)
    handlers.delete_message(message_id)
    return {"message": "Deleted"}
