import copy
import uuid
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

import jwt

from edumanage.errors import AuthenticationError, InvalidRecordError, RecordNotFoundError
from edumanage.schemas.user import Role
from edumanage.services.store import ENTITY_KINDS, EntityStore, check_kind

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


class MemoryStore(EntityStore):
    """In-process store used when no remote service is configured.

    Sessions are HS256 tokens carrying the user id, signed with ``jwt_secret``.
    Users are never hard-deleted here: deleting an account deactivates it.
    """

    def __init__(
        self,
        seed: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        credentials: Optional[Dict[str, str]] = None,
        jwt_secret: str = "devsecret",
        session_ttl: timedelta = timedelta(hours=1),
    ):
        self._lock = threading.Lock()
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {kind: {} for kind in ENTITY_KINDS}
        self._passwords: Dict[str, str] = {}
        self._jwt_secret = jwt_secret
        self._session_ttl = session_ttl

        for kind, rows in (seed or {}).items():
            table = self._tables[check_kind(kind)]
            for row in rows:
                table[row["id"]] = copy.deepcopy(row)

        users_by_email = {u["email"].lower(): u["id"] for u in self._tables["users"].values()}
        for email, password in (credentials or {}).items():
            user_id = users_by_email.get(email.lower())
            if user_id:
                self._passwords[user_id] = password

    # -------- Entity access --------

    def list(self, kind: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(row) for row in self._tables[check_kind(kind)].values()]

    def get(self, kind: str, record_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._tables[check_kind(kind)].get(record_id)
            return copy.deepcopy(row) if row is not None else None

    def create(self, kind: str, record: Dict[str, Any]) -> str:
        with self._lock:
            table = self._tables[check_kind(kind)]
            row = copy.deepcopy(record)
            record_id = row.get("id") or str(uuid.uuid4())
            if record_id in table:
                raise InvalidRecordError(f"{kind} record {record_id} already exists")
            row["id"] = record_id
            row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
            table[record_id] = row
            return record_id

    def update(self, kind: str, record_id: str, patch: Dict[str, Any]) -> None:
        with self._lock:
            table = self._tables[check_kind(kind)]
            if record_id not in table:
                raise RecordNotFoundError(kind, record_id)
            changes = copy.deepcopy(patch)
            changes.pop("id", None)
            table[record_id].update(changes)

    def delete(self, kind: str, record_id: str) -> None:
        with self._lock:
            table = self._tables[check_kind(kind)]
            if record_id not in table:
                raise RecordNotFoundError(kind, record_id)
            del table[record_id]

    # -------- Accounts --------

    def create_user_account(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: Role,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> str:
        with self._lock:
            if any(u["email"].lower() == email.lower() for u in self._tables["users"].values()):
                raise InvalidRecordError(f"A user with email {email} already exists")
            user_id = str(uuid.uuid4())
            now = datetime.now(timezone.utc).isoformat()
            self._tables["users"][user_id] = {
                "id": user_id,
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
                "role": role,
                "phone": phone,
                "address": address,
                "is_active": True,
                "created_at": now,
            }
            profile = {"id": user_id, "first_name": first_name, "last_name": last_name,
                       "email": email, "created_at": now}
            if role == "teacher":
                self._tables["teachers"][user_id] = profile
            elif role == "parent":
                self._tables["parents"][user_id] = {**profile, "phone": phone, "address": address}
            self._passwords[user_id] = password

        logger.info(f"Created {role} account {user_id}")
        return user_id

    def delete_user_account(self, user_id: str) -> bool:
        with self._lock:
            user = self._tables["users"].get(user_id)
            if user is None:
                return False
            user["is_active"] = False
        logger.info(f"Deactivated user account {user_id}")
        return True

    def update_password(self, user_id: str, password: str) -> None:
        with self._lock:
            if user_id not in self._tables["users"]:
                raise RecordNotFoundError("users", user_id)
            self._passwords[user_id] = password
        logger.info(f"Updated password of user {user_id}")

    # -------- Sessions --------

    def sign_in(self, email: str, password: str) -> Tuple[Dict[str, Any], str]:
        with self._lock:
            user = next(
                (u for u in self._tables["users"].values() if u["email"].lower() == email.lower()),
                None,
            )
            if user is None or self._passwords.get(user["id"]) != password:
                raise AuthenticationError("invalid_credentials")
            if not user.get("is_active", True):
                raise AuthenticationError("account_disabled")
            user["last_login"] = datetime.now(timezone.utc).isoformat()
            user = copy.deepcopy(user)

        token = jwt.encode(
            {"sub": user["id"], "exp": datetime.now(timezone.utc) + self._session_ttl},
            self._jwt_secret,
            algorithm=JWT_ALGORITHM,
        )
        return user, token

    def user_for_token(self, token: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(token, self._jwt_secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("session_expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("invalid_token")

        user = self.get("users", payload.get("sub", ""))
        if user is None or not user.get("is_active", True):
            raise AuthenticationError("user_not_found")
        return user
