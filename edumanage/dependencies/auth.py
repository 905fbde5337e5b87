from fastapi import Depends, Header, HTTPException, Request
import time
import logging
from typing import Optional

from edumanage.errors import AuthenticationError
from edumanage.schemas.actor import Actor, build_actor
from edumanage.schemas.student import Student
from edumanage.schemas.user import User
from edumanage.services.scoping import ScopedView, scope
from edumanage.services.store import EntityStore, load_snapshot
from edumanage.utils.messages import message

logger = logging.getLogger(__name__)


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_handlers(request: Request):
    return request.app.state.handlers


def get_locale(request: Request) -> str:
    return request.app.state.settings.locale


def current_user(
    authorization: str = Header(...),
    store: EntityStore = Depends(get_store),
    locale: str = Depends(get_locale),
) -> User:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail=message("invalid_token_format", locale))

    token = authorization.split(" ", 1)[1]
    start_time = time.time()
    try:
        user = User(**store.user_for_token(token))
    except AuthenticationError as e:
        logger.warning(f"Token rejected: {e.message_key}")
        raise HTTPException(status_code=401, detail=message(e.message_key, locale))
    logger.info(f"Token validation completed in {time.time() - start_time:.2f} seconds")

    logger.info(f"Successfully authenticated user: {user.id}")
    return user


def current_actor(
    user: User = Depends(current_user),
    store: EntityStore = Depends(get_store),
) -> Optional[Actor]:
    students = []
    if user.role == "student":
        students = [Student(**row) for row in store.list("students")]
    return build_actor(user, students)


def require_roles(*roles: str):
    """Dependency restricting a screen to the given roles."""
    def checker(actor: Optional[Actor] = Depends(current_actor), locale: str = Depends(get_locale)) -> Actor:
        if actor is None or actor.role not in roles:
            raise HTTPException(status_code=403, detail=message("forbidden", locale))
        return actor
    return checker


def current_view(
    actor: Optional[Actor] = Depends(current_actor),
    store: EntityStore = Depends(get_store),
) -> ScopedView:
    return scope(load_snapshot(store), actor)
