"""Role and ownership rules for authenticated principals."""

from collections.abc import Collection

from app.errors import forbidden
from app.schemas.auth import AuthPrincipal, Role


def ensure_role(principal: AuthPrincipal, allowed_roles: Collection[Role]) -> None:
    """Reject principals whose role is outside the route's allowed set."""
    if principal.role not in allowed_roles:
        raise forbidden(f"User role {principal.role.value} is not authorized to access this route")


def is_owner_or_admin(principal: AuthPrincipal, owner_id: str) -> bool:
    return owner_id == principal.user_id or principal.role is Role.ADMIN


def ensure_owner(
    principal: AuthPrincipal,
    *,
    owner_id: str,
    action: str,
    resource: str,
    resource_id: str,
) -> None:
    """Ownership is per instance, so call this only after the resource is loaded."""
    if not is_owner_or_admin(principal, owner_id):
        raise forbidden(f"User {principal.user_id} is not authorized to {action} {resource} {resource_id}")
