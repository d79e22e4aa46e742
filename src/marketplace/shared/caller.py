"""Explicit caller identity passed into every command."""

from enum import Enum

from marketplace.shared.errors import PermissionDenied


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


def require_role(caller_role: str | None, *allowed: Role) -> None:
    """Raise PermissionDenied unless the caller holds one of the allowed roles."""
    allowed_values = {role.value for role in allowed}
    if caller_role not in allowed_values:
        raise PermissionDenied(
            f"Role '{caller_role}' may not perform this operation (requires {', '.join(sorted(allowed_values))})"
        )


def require_caller(caller_id: str | None, owner_id: str | None, caller_role: str | None = None) -> None:
    """Raise PermissionDenied unless the caller owns the resource (admins always pass)."""
    if caller_role == Role.ADMIN.value:
        return
    if not caller_id or not owner_id or str(caller_id) != str(owner_id):
        raise PermissionDenied("Caller does not own this resource")
