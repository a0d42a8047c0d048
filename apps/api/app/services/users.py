"""User administration service layer."""

import logging
from typing import Any

from app.core.observability import safe_log_identifier
from app.core.security import hash_password
from app.domain.list_query import ListQuerySpec, ListResult, execute_list_query
from app.errors import not_found
from app.repositories.memory import InMemoryStore
from app.schemas.user import CreateUserRequest, UpdateUserRequest, User

logger = logging.getLogger(__name__)


def _strip_password(users: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{key: value for key, value in user.items() if key != "password"} for user in users]


class UserService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_users(self, query: ListQuerySpec) -> ListResult:
        return execute_list_query(self._store.users, query, populate=_strip_password)

    def get_user(self, user_id: str) -> User:
        record = self._store.users.find_by_id(user_id)
        if record is None:
            raise not_found("User", user_id)
        return User.model_validate(record)

    def create_user(self, payload: CreateUserRequest) -> User:
        data = payload.model_dump()
        data["password"] = hash_password(payload.password)
        record = self._store.users.insert_one(data)
        logger.info("user.created user_id=%s role=%s", safe_log_identifier(record["id"], prefix="pid"), record["role"])
        return User.model_validate(record)

    def update_user(self, user_id: str, payload: UpdateUserRequest) -> User:
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("password") is not None:
            changes["password"] = hash_password(changes["password"])
        else:
            changes.pop("password", None)
        record = self._store.users.update_one(user_id, changes)
        if record is None:
            raise not_found("User", user_id)
        return User.model_validate(record)

    def delete_user(self, user_id: str) -> None:
        if not self._store.users.delete_one(user_id):
            raise not_found("User", user_id)
