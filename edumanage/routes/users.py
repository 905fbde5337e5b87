from fastapi import APIRouter, Depends
from typing import List

from edumanage.dependencies.auth import get_handlers, get_store, require_roles
from edumanage.schemas.user import User, UserCreate
from edumanage.services.store import EntityStore

router = APIRouter()

admin_only = require_roles("admin")

@router.get("/", response_model=List[User])
def get_all_users(actor=Depends(admin_only), store: EntityStore = Depends(get_store)):
    return [User(**row) for row in store.list("users")]

@router.post("/", response_model=User)
def create_user(user: UserCreate, actor=Depends(admin_only), handlers=Depends(get_handlers)):
    return handlers.create_user(user)

@router.post("/{user_id}/deactivate", response_model=User)
def deactivate_user(user_id: str, actor=Depends(admin_only), handlers=Depends(get_handlers)):
    return handlers.deactivate_user(user_id)

@router.delete("/{user_id}")
def delete_user(user_id: str, actor=Depends(admin_only), handlers=Depends(get_handlers)):
    handlers.delete_user(user_id)
    return {"message": "Deleted"}
