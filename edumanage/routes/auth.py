from fastapi import APIRouter, Depends, HTTPException, Request
import logging

from edumanage.dependencies.auth import current_user, get_locale, get_store
from edumanage.errors import AuthenticationError
from edumanage.schemas.auth import LoginRequest, LoginResponse, PasswordChange
from edumanage.schemas.user import User
from edumanage.services.store import EntityStore
from edumanage.utils.messages import message

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    request: Request,
    store: EntityStore = Depends(get_store),
    locale: str = Depends(get_locale),
):
    guard = request.app.state.handlers.guard
    with guard.hold(f"sign_in:{credentials.email.lower()}"):
        try:
            user, token = store.sign_in(credentials.email, credentials.password)
        except AuthenticationError as e:
            logger.warning(f"Failed sign-in for {credentials.email}: {e.message_key}")
            raise HTTPException(status_code=401, detail=message(e.message_key, locale))

    logger.info(f"Signed in user {user['id']}")
    return {"token": token, "user": user}

@router.get("/me", response_model=User)
def get_me(user: User = Depends(current_user)):
    return user

@router.post("/password")
def change_password(
    change: PasswordChange,
    request: Request,
    user: User = Depends(current_user),
    store: EntityStore = Depends(get_store),
    locale: str = Depends(get_locale),
):
    if not user.can_change_password:
        raise HTTPException(status_code=403, detail=message("password_change_disabled", locale))

    guard = request.app.state.handlers.guard
    with guard.hold(f"update:password:{user.id}"):
        try:
            store.sign_in(user.email, change.current_password)
        except AuthenticationError as e:
            logger.warning(f"Password change refused for {user.id}: {e.message_key}")
            raise HTTPException(status_code=401, detail=message(e.message_key, locale))
        store.update_password(user.id, change.new_password)

    logger.info(f"Changed password of user {user.id}")
    return {"message": message("password_updated", locale)}
