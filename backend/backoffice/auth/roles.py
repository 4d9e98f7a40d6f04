"""
Role definitions — which bundles of permissions make up each role.

    USER < PARTNER < MANAGER < ADMIN

Admin is never listed explicitly: its bundle is computed from the full
Permission enum, so any permission added later is reachable by admin
without touching this file.

The mapping is built once at import time into an immutable PermissionModel.
Callers that need a different configuration (tests, tenants) build their own
with build_permission_model() and pass it explicitly.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from backoffice.auth.permissions import Permission


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    PARTNER = "partner"
    USER = "user"


# ── User: read-only customer and application views ──
_USER_PERMS: frozenset[Permission] = frozenset({
    Permission.CUSTOMER_VIEW,
    Permission.APPLICATION_VIEW,
})

# ── Partner: user + creates and edits the customers/applications it refers ──
_PARTNER_PERMS: frozenset[Permission] = frozenset({
    *_USER_PERMS,
    Permission.CUSTOMER_CREATE,
    Permission.CUSTOMER_EDIT,
    Permission.APPLICATION_CREATE,
    Permission.APPLICATION_EDIT,
})

# ── Manager: partner + review/approval, can see users ──
_MANAGER_PERMS: frozenset[Permission] = frozenset({
    *_PARTNER_PERMS,
    Permission.USER_VIEW,
    Permission.APPLICATION_APPROVE,
})


ALL_PERMISSIONS: frozenset[Permission] = frozenset(Permission)


@dataclass(frozen=True)
class PermissionModel:
    """Read-only role → permission configuration."""

    role_permissions: Mapping[Role, frozenset[Permission]]

    def permissions_for(self, role: Role) -> frozenset[Permission]:
        if role is Role.ADMIN:
            return ALL_PERMISSIONS
        return self.role_permissions.get(role, frozenset())


def build_permission_model(
    overrides: Mapping[Role, frozenset[Permission] | set[Permission]] | None = None,
) -> PermissionModel:
    """Build the immutable role configuration, optionally replacing role bundles."""
    mapping: dict[Role, frozenset[Permission]] = {
        Role.MANAGER: _MANAGER_PERMS,
        Role.PARTNER: _PARTNER_PERMS,
        Role.USER: _USER_PERMS,
    }
    for role, perms in (overrides or {}).items():
        mapping[role] = frozenset(perms)
    # Superset invariant: admin always holds the full universe.
    mapping[Role.ADMIN] = ALL_PERMISSIONS
    return PermissionModel(role_permissions=MappingProxyType(mapping))


DEFAULT_PERMISSION_MODEL = build_permission_model()

ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = DEFAULT_PERMISSION_MODEL.role_permissions


def parse_role(value: Role | str | None) -> Role | None:
    """Parse a role claim; None for anything unrecognised."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def resolve_capabilities(
    role: Role | str | None,
    is_admin_override: bool = False,
    model: PermissionModel = DEFAULT_PERMISSION_MODEL,
) -> frozenset[Permission]:
    """
    Resolve the capability set for an actor.

    Admin (by role or override) gets every permission; an unknown role gets
    nothing. Never raises.
    """
    if is_admin_override:
        return ALL_PERMISSIONS
    parsed = parse_role(role)
    if parsed is None:
        return frozenset()
    return model.permissions_for(parsed)
