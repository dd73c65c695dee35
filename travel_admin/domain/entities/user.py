"""Domain vocabulary and access rules for back-office users."""

from enum import Enum


class UserRole(str, Enum):
    """User roles with different access levels."""

    ADMIN = "admin"        # Full access to everything
    MANAGER = "manager"    # Can manage most things except other admins
    AGENT = "agent"        # Limited access to client management
    USER = "user"          # Basic access


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING = "pending"


def _is(role: str | None, *allowed: UserRole) -> bool:
    return role in {r.value for r in allowed}


def can_create_user(actor_role: str | None, target_role: str | None) -> bool:
    """Actors may only create users with their own role or a lower one."""
    if target_role == UserRole.ADMIN.value:
        return _is(actor_role, UserRole.ADMIN)
    if target_role == UserRole.MANAGER.value:
        return _is(actor_role, UserRole.ADMIN, UserRole.MANAGER)
    return True


def can_update_user(
    actor_role: str | None, existing_role: str | None, new_role: str | None
) -> bool:
    if existing_role == UserRole.ADMIN.value or new_role == UserRole.ADMIN.value:
        return _is(actor_role, UserRole.ADMIN)
    if existing_role == UserRole.MANAGER.value:
        return _is(actor_role, UserRole.ADMIN, UserRole.MANAGER)
    return True


def can_delete_user(actor_role: str | None, existing_role: str | None) -> bool:
    if existing_role in (UserRole.ADMIN.value, UserRole.MANAGER.value):
        return _is(actor_role, UserRole.ADMIN)
    return True
