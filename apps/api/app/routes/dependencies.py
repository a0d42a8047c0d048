"""Dependency wiring for routes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import timedelta
import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.adapters.auth import (
    AuthVerificationError,
    JwtTokenIssuer,
    JwtTokenVerifier,
    TokenIssuer,
    TokenVerifier,
)
from app.core.config import Settings, get_settings
from app.core.observability import safe_log_identifier
from app.domain.authorization import ensure_role
from app.domain.list_query import ListQuerySpec, parse_list_query
from app.errors import unauthenticated
from app.repositories.memory import InMemoryStore, is_object_id
from app.schemas.auth import AuthPrincipal, Role
from app.services.auth import AuthService
from app.services.bootcamps import BootcampService
from app.services.courses import CourseService
from app.services.reviews import ReviewService
from app.services.users import UserService

BEARER_PREFIX = "Bearer "

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id") or f"req-{uuid4()}"
    request.state.correlation_id = correlation_id
    return correlation_id


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_token_verifier(settings: Annotated[Settings, Depends(get_settings)]) -> TokenVerifier:
    return JwtTokenVerifier(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_token_issuer(settings: Annotated[Settings, Depends(get_settings)]) -> TokenIssuer:
    return JwtTokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(days=settings.jwt_expire_days),
    )


async def get_authenticated_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> AuthPrincipal:
    """Validate the bearer token and resolve its subject to a principal."""
    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    authorization = request.headers.get("Authorization", "")
    if credentials is None or not authorization.startswith(BEARER_PREFIX) or not credentials.credentials:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise unauthenticated()

    try:
        subject = verifier.verify_token(credentials.credentials)
    except AuthVerificationError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=token_verification_failed",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise unauthenticated() from exc

    user = store.users.find_by_id(subject) if is_object_id(subject) else None
    if user is None:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=unknown_subject",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise unauthenticated()

    principal = AuthPrincipal(user_id=user["id"], role=user["role"])
    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.user_id, prefix="pid"),
        principal.role.value,
    )
    return principal


def require_roles(*roles: Role) -> Callable[..., Awaitable[AuthPrincipal]]:
    """Build a dependency that authenticates and then checks the role set."""
    allowed = frozenset(roles)

    async def _require_roles(
        principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    ) -> AuthPrincipal:
        ensure_role(principal, allowed)
        return principal

    return _require_roles


Principal = Annotated[AuthPrincipal, Depends(get_authenticated_principal)]
PublisherPrincipal = Annotated[AuthPrincipal, Depends(require_roles(Role.PUBLISHER, Role.ADMIN))]
ReviewerPrincipal = Annotated[AuthPrincipal, Depends(require_roles(Role.USER, Role.ADMIN))]


def get_list_query(request: Request) -> ListQuerySpec:
    return parse_list_query(request.query_params.multi_items())


def get_bootcamp_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> BootcampService:
    return BootcampService(store)


def get_course_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> CourseService:
    return CourseService(store)


def get_review_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> ReviewService:
    return ReviewService(store)


def get_user_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> UserService:
    return UserService(store)


def get_auth_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    return AuthService(store, issuer)
