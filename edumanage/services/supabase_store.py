import time
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from supabase import Client, create_client

from edumanage.config import Settings
from edumanage.errors import AuthenticationError, InvalidRecordError, RecordNotFoundError, StoreError
from edumanage.schemas.user import Role
from edumanage.services.store import EntityStore, check_kind

logger = logging.getLogger(__name__)

# Rows keyed by user_id: the domain id of a teacher or parent is its users.id
USER_KEYED = ("teachers", "parents")
# Kinds whose names and contact details live on the users row
PROFILED = ("teachers", "parents", "students")
PROFILE_FIELDS = ("first_name", "last_name", "email", "phone", "address")
# No table for these in the remote schema
NO_TABLE = ("invoices", "messages")
NEEDS_IDENTITIES = ("teachers", "parents", "students", "courses", "grades")


class Identities:
    """users rows by id, plus teachers.id / parents.id <-> users.id lookups."""

    def __init__(
        self,
        users: Iterable[Dict[str, Any]] = (),
        teachers: Iterable[Dict[str, Any]] = (),
        parents: Iterable[Dict[str, Any]] = (),
    ):
        self.users = {row["id"]: row for row in users}
        self.teacher_user = {row["id"]: row["user_id"] for row in teachers if row.get("user_id")}
        self.parent_user = {row["id"]: row["user_id"] for row in parents if row.get("user_id")}
        self.teacher_row = {user_id: row_id for row_id, user_id in self.teacher_user.items()}
        self.parent_row = {user_id: row_id for row_id, user_id in self.parent_user.items()}

    def teacher(self, row_id: Optional[str]) -> Optional[str]:
        return self.teacher_user.get(row_id, row_id)

    def teacher_key(self, user_id: Optional[str]) -> Optional[str]:
        return self.teacher_row.get(user_id, user_id)

    def parent(self, row_id: Optional[str]) -> Optional[str]:
        return self.parent_user.get(row_id, row_id)

    def parent_key(self, user_id: Optional[str]) -> Optional[str]:
        return self.parent_row.get(user_id, user_id)


def _single(field: str, values: List[str]) -> Optional[str]:
    if len(values) > 1:
        raise InvalidRecordError(f"{field} can hold a single id in the remote schema, got {len(values)}")
    return values[0] if values else None


def from_row(kind: str, row: Dict[str, Any], ids: Identities) -> Dict[str, Any]:
    """Turn a table row into the record shape of the entity models."""
    record = dict(row)
    if kind in USER_KEYED:
        user = ids.users.get(row.get("user_id"), {})
        record["id"] = record.pop("user_id", None) or row["id"]
        for field in PROFILE_FIELDS:
            record[field] = user.get(field)
        for field in ("first_name", "last_name", "email"):
            record[field] = record[field] or ""
        if kind == "parents":
            record["children"] = record.pop("children_ids", None) or []
    elif kind == "students":
        user = ids.users.get(row.get("user_id"), {})
        record["first_name"] = user.get("first_name") or ""
        record["last_name"] = user.get("last_name") or ""
        record["teacher_id"] = ids.teacher(row.get("teacher_id")) or ""
        parent_id = record.pop("parent_id", None)
        record["parent_ids"] = [ids.parent(parent_id)] if parent_id else []
    elif kind == "courses":
        student_id = record.pop("student_id", None)
        record["student_ids"] = [student_id] if student_id else []
        record["teacher_id"] = ids.teacher(row.get("teacher_id"))
    elif kind == "grades":
        record["weight"] = record.pop("coefficient", None)
        record["teacher_id"] = ids.teacher(row.get("teacher_id"))
        record["course_id"] = row.get("course_id") or ""
    # Null columns fall back to the model defaults
    return {key: value for key, value in record.items() if value is not None}


def to_row(kind: str, record: Dict[str, Any], ids: Identities) -> Dict[str, Any]:
    """Turn a full or partial entity record into table columns."""
    row = {key: value for key, value in record.items() if key != "id"}
    if kind in PROFILED:
        for field in PROFILE_FIELDS:
            row.pop(field, None)
    if kind == "parents":
        row.pop("notifications", None)
        if "children" in row:
            row["children_ids"] = row.pop("children")
    elif kind == "students":
        row.pop("learning_goals", None)
        if "parent_ids" in row:
            row["parent_id"] = ids.parent_key(_single("parent_ids", row.pop("parent_ids")))
    elif kind == "courses":
        if "student_ids" in row:
            row["student_id"] = _single("student_ids", row.pop("student_ids"))
    elif kind == "grades":
        if "weight" in row:
            row["coefficient"] = row.pop("weight")
        if row.get("course_id") == "":
            row["course_id"] = None
    if kind in ("students", "courses", "grades") and "teacher_id" in row:
        row["teacher_id"] = ids.teacher_key(row["teacher_id"])
    return row


class SupabaseStore(EntityStore):
    """Entity store backed by a Supabase project.

    Teachers, parents and students keep their names on the linked ``users``
    row, teachers and parents are addressed by that user id, and courses and
    students reference a single student and parent. Records are mapped to and
    from that layout here so the rest of the service only sees entity models.
    """

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStore":
        logger.info("Creating Supabase client")
        return cls(create_client(settings.supabase_url, settings.supabase_key))

    def _execute(self, description: str, call: Callable[[], Any]) -> Any:
        start_time = time.time()
        try:
            response = call()
        except Exception as e:
            logger.error(f"Supabase call failed ({description}): {str(e)}")
            raise StoreError(f"{description} failed") from e
        logger.debug(f"{description} completed in {time.time() - start_time:.2f} seconds")
        return response

    def _select(self, table: str, column: Optional[str] = None, value: Optional[str] = None) -> List[Dict[str, Any]]:
        def call():
            query = self.client.table(table).select("*")
            if column is not None:
                query = query.eq(column, value)
            return query.order("created_at").execute()

        where = f" where {column}={value}" if column is not None else ""
        return self._execute(f"select {table}{where}", call).data or []

    def _identities(self, kind: str) -> Identities:
        if kind not in NEEDS_IDENTITIES:
            return Identities()
        return Identities(self._select("users"), self._select("teachers"), self._select("parents"))

    @staticmethod
    def _key_column(kind: str) -> str:
        return "user_id" if kind in USER_KEYED else "id"

    # -------- Entity access --------

    def list(self, kind: str) -> List[Dict[str, Any]]:
        check_kind(kind)
        if kind in NO_TABLE:
            logger.debug(f"No {kind} table in the remote schema, listing nothing")
            return []
        ids = self._identities(kind)
        return [from_row(kind, row, ids) for row in self._select(kind)]

    def get(self, kind: str, record_id: str) -> Optional[Dict[str, Any]]:
        check_kind(kind)
        if kind in NO_TABLE:
            return None
        rows = self._select(kind, self._key_column(kind), record_id)
        if not rows:
            return None
        return from_row(kind, rows[0], self._identities(kind))

    def create(self, kind: str, record: Dict[str, Any]) -> str:
        check_kind(kind)
        if kind in NO_TABLE:
            raise StoreError(f"insert {kind} failed: no {kind} table in the remote schema")
        row = to_row(kind, record, self._identities(kind))
        if kind in USER_KEYED:
            if not record.get("id"):
                raise InvalidRecordError(f"{kind} records need the id of their user account")
            row["user_id"] = record["id"]
        elif record.get("id") is not None:
            row["id"] = record["id"]
        if kind == "students" and not record.get("user_id"):
            raise InvalidRecordError("students need a user account (user_id) in the remote schema")

        response = self._execute(
            f"insert {kind}",
            lambda: self.client.table(kind).insert(row).execute(),
        )
        if not response.data:
            raise StoreError(f"insert {kind} returned no row")
        return response.data[0][self._key_column(kind)]

    def update(self, kind: str, record_id: str, patch: Dict[str, Any]) -> None:
        check_kind(kind)
        if kind in NO_TABLE:
            raise RecordNotFoundError(kind, record_id)
        key = self._key_column(kind)
        current = self._select(kind, key, record_id)
        if not current:
            raise RecordNotFoundError(kind, record_id)

        profile = {}
        if kind in PROFILED:
            profile = {field: patch[field] for field in PROFILE_FIELDS if field in patch}
        changes = to_row(kind, patch, self._identities(kind))

        if profile:
            user_id = current[0].get("user_id")
            if not user_id:
                raise InvalidRecordError(f"{kind} record {record_id} has no user account to hold {sorted(profile)}")
            self._execute(
                f"update users/{user_id}",
                lambda: self.client.table("users").update(profile).eq("id", user_id).execute(),
            )
        if changes:
            response = self._execute(
                f"update {kind}/{record_id}",
                lambda: self.client.table(kind).update(changes).eq(key, record_id).execute(),
            )
            if not response.data:
                raise RecordNotFoundError(kind, record_id)

    def delete(self, kind: str, record_id: str) -> None:
        check_kind(kind)
        if kind in NO_TABLE:
            raise RecordNotFoundError(kind, record_id)
        response = self._execute(
            f"delete {kind}/{record_id}",
            lambda: self.client.table(kind).delete().eq(self._key_column(kind), record_id).execute(),
        )
        if not response.data:
            raise RecordNotFoundError(kind, record_id)

    # -------- Accounts (server-side procedures) --------

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
        response = self._execute(
            "rpc create_user_account",
            lambda: self.client.rpc("create_user_account", {
                "p_email": email,
                "p_password": password,
                "p_first_name": first_name,
                "p_last_name": last_name,
                "p_role": role,
                "p_phone": phone or None,
                "p_address": address or None,
            }).execute(),
        )
        logger.info(f"Created {role} account {response.data}")
        return response.data

    def delete_user_account(self, user_id: str) -> bool:
        response = self._execute(
            "rpc delete_user_account",
            lambda: self.client.rpc("delete_user_account", {"p_user_id": user_id}).execute(),
        )
        return bool(response.data)

    def update_password(self, user_id: str, password: str) -> None:
        rows = self._select("users", "id", user_id)
        if not rows or not rows[0].get("auth_id"):
            raise RecordNotFoundError("users", user_id)
        auth_id = rows[0]["auth_id"]
        # Needs the service role key, the shared client holds no user session
        self._execute(
            f"update password of {user_id}",
            lambda: self.client.auth.admin.update_user_by_id(auth_id, {"password": password}),
        )
        logger.info(f"Updated password of user {user_id}")

    # -------- Sessions --------

    def sign_in(self, email: str, password: str) -> Tuple[Dict[str, Any], str]:
        try:
            auth_res = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            if "invalid login credentials" in str(e).lower():
                logger.warning(f"Invalid credentials for {email}")
                raise AuthenticationError("invalid_credentials")
            logger.error(f"Supabase sign-in error: {str(e)}")
            raise StoreError("sign-in failed") from e

        if not auth_res.user or not auth_res.session:
            raise AuthenticationError("invalid_credentials")

        profile = self._profile_for_auth_id(auth_res.user.id)
        return profile, auth_res.session.access_token

    def user_for_token(self, token: str) -> Dict[str, Any]:
        try:
            logger.info("Validating token with Supabase")
            user_res = self.client.auth.get_user(token)
        except Exception as e:
            logger.error(f"Supabase token validation error: {str(e)}")
            if "timed out" in str(e).lower():
                raise StoreError("token validation timed out") from e
            raise AuthenticationError("invalid_token")

        if not user_res or not user_res.user:
            logger.warning("User not found after successful token validation")
            raise AuthenticationError("user_not_found")

        return self._profile_for_auth_id(user_res.user.id)

    def _profile_for_auth_id(self, auth_id: str) -> Dict[str, Any]:
        response = self._execute(
            "fetch user profile",
            lambda: self.client.table("users").select("*").eq("auth_id", auth_id).execute(),
        )
        if not response.data:
            raise AuthenticationError("user_not_found")
        profile = response.data[0]
        if not profile.get("is_active", True):
            raise AuthenticationError("account_disabled")
        return profile
