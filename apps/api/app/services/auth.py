"""Registration, login and self-service account management."""

import logging

from app.adapters.auth import TokenIssuer
from app.core.observability import safe_log_identifier
from app.core.security import hash_password, verify_password
from app.errors import ApiError, not_found, unauthenticated
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthPrincipal, RegisterRequest
from app.schemas.user import User

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: InMemoryStore, issuer: TokenIssuer) -> None:
        self._store = store
        self._issuer = issuer

    def register(self, payload: RegisterRequest) -> str:
        record = self._store.users.insert_one(
            {
                "name": payload.name,
                "email": payload.email,
                "role": payload.role,
                "password": hash_password(payload.password),
            }
        )
        logger.info("auth.registered principal_id=%s role=%s", safe_log_identifier(record["id"], prefix="pid"), record["role"])
        return self._issuer.issue_token(record["id"])

    def login(self, *, email: str | None, password: str | None) -> str:
        if not email or not password:
            raise ApiError(status_code=400, code="BAD_REQUEST", message="Please provide an email and password")

        record = self._store.users.find_one({"email": email})
        if record is None or not verify_password(password, record["password"]):
            logger.warning("auth.login_rejected email=%s", safe_log_identifier(email, prefix="eml"))
            raise unauthenticated("Invalid credentials")
        return self._issuer.issue_token(record["id"])

    def get_current_user(self, principal: AuthPrincipal) -> User:
        record = self._store.users.find_by_id(principal.user_id)
        if record is None:
            raise not_found("User", principal.user_id)
        return User.model_validate(record)

    def update_details(self, principal: AuthPrincipal, *, name: str | None, email: str | None) -> User:
        changes = {key: value for key, value in (("name", name), ("email", email)) if value is not None}
        record = self._store.users.update_one(principal.user_id, changes)
        if record is None:
            raise not_found("User", principal.user_id)
        return User.model_validate(record)

    def update_password(self, principal: AuthPrincipal, *, current_password: str, new_password: str) -> str:
        record = self._store.users.find_by_id(principal.user_id)
        if record is None:
            raise not_found("User", principal.user_id)
        if not verify_password(current_password, record["password"]):
            raise unauthenticated("Password is incorrect")

        self._store.users.update_one(principal.user_id, {"password": hash_password(new_password)})
        return self._issuer.issue_token(principal.user_id)
