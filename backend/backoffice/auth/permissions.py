"""
Permission constants — the exhaustive list of actions in the back-office.

Each permission follows the pattern `resource.verb`. Roles map to bundles
of these via the PermissionModel (see roles.py); the catalog below carries
the human-readable metadata the admin portal shows in its permission matrix.
"""

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from enum import Enum


class Permission(str, Enum):
    # ── User Management ──
    USER_VIEW = "user.view"
    USER_CREATE = "user.create"
    USER_EDIT = "user.edit"
    USER_DELETE = "user.delete"

    # ── Customer Management ──
    CUSTOMER_VIEW = "customer.view"
    CUSTOMER_CREATE = "customer.create"
    CUSTOMER_EDIT = "customer.edit"
    CUSTOMER_DELETE = "customer.delete"

    # ── Application Management ──
    APPLICATION_VIEW = "application.view"
    APPLICATION_CREATE = "application.create"
    APPLICATION_EDIT = "application.edit"
    APPLICATION_APPROVE = "application.approve"      # approve / reject, move through review

    # ── System Administration ──
    SYSTEM_CONFIG = "system.config"
    SYSTEM_LOGS = "system.logs"                      # system logs and audit trails
    SYSTEM_BACKUP = "system.backup"


class PermissionCategory(str, Enum):
    """Permission categories for UI grouping."""
    USER_MANAGEMENT = "User Management"
    CUSTOMER_MANAGEMENT = "Customer Management"
    APPLICATION_MANAGEMENT = "Application Management"
    SYSTEM_ADMINISTRATION = "System Administration"


@dataclass(frozen=True)
class PermissionDef:
    """Permission definition with display metadata."""
    key: Permission
    name: str
    description: str
    category: PermissionCategory


_DEFS: tuple[PermissionDef, ...] = (
    # User Management
    PermissionDef(Permission.USER_VIEW, "View Users",
                  "View user profiles and information", PermissionCategory.USER_MANAGEMENT),
    PermissionDef(Permission.USER_CREATE, "Create Users",
                  "Create new user accounts", PermissionCategory.USER_MANAGEMENT),
    PermissionDef(Permission.USER_EDIT, "Edit Users",
                  "Modify user profiles and settings", PermissionCategory.USER_MANAGEMENT),
    PermissionDef(Permission.USER_DELETE, "Delete Users",
                  "Remove user accounts", PermissionCategory.USER_MANAGEMENT),

    # Customer Management
    PermissionDef(Permission.CUSTOMER_VIEW, "View Customers",
                  "View customer profiles and data", PermissionCategory.CUSTOMER_MANAGEMENT),
    PermissionDef(Permission.CUSTOMER_CREATE, "Create Customers",
                  "Create new customer records", PermissionCategory.CUSTOMER_MANAGEMENT),
    PermissionDef(Permission.CUSTOMER_EDIT, "Edit Customers",
                  "Modify customer information", PermissionCategory.CUSTOMER_MANAGEMENT),
    PermissionDef(Permission.CUSTOMER_DELETE, "Delete Customers",
                  "Remove customer records", PermissionCategory.CUSTOMER_MANAGEMENT),

    # Application Management
    PermissionDef(Permission.APPLICATION_VIEW, "View Applications",
                  "View application submissions", PermissionCategory.APPLICATION_MANAGEMENT),
    PermissionDef(Permission.APPLICATION_CREATE, "Create Applications",
                  "Submit new applications", PermissionCategory.APPLICATION_MANAGEMENT),
    PermissionDef(Permission.APPLICATION_EDIT, "Edit Applications",
                  "Modify application data", PermissionCategory.APPLICATION_MANAGEMENT),
    PermissionDef(Permission.APPLICATION_APPROVE, "Approve Applications",
                  "Approve/reject applications", PermissionCategory.APPLICATION_MANAGEMENT),

    # System Administration
    PermissionDef(Permission.SYSTEM_CONFIG, "System Configuration",
                  "Modify system settings", PermissionCategory.SYSTEM_ADMINISTRATION),
    PermissionDef(Permission.SYSTEM_LOGS, "View System Logs",
                  "Access system logs and audit trails", PermissionCategory.SYSTEM_ADMINISTRATION),
    PermissionDef(Permission.SYSTEM_BACKUP, "System Backup",
                  "Create and restore system backups", PermissionCategory.SYSTEM_ADMINISTRATION),
)

# Catalog order is display order.
PERMISSION_CATALOG: dict[Permission, PermissionDef] = {d.key: d for d in _DEFS}

_missing = set(Permission) - PERMISSION_CATALOG.keys()
if _missing:
    raise RuntimeError(
        f"Permission catalog is missing definitions for: {sorted(p.value for p in _missing)}"
    )


# ── Capability checks ────────────────────────────────────────────────────────
#
# Pure functions over a caller-supplied capability set (usually the result of
# roles.resolve_capabilities). None of these raise.

def _coerce(perm: Permission | str) -> Permission | None:
    # Raw strings come from token claims and UI callers; unknown ids map to None.
    if isinstance(perm, Permission):
        return perm
    try:
        return Permission(perm)
    except ValueError:
        return None


def has_permission(capabilities: Collection[Permission], perm: Permission | str) -> bool:
    p = _coerce(perm)
    return p is not None and p in capabilities


def has_any_permission(capabilities: Collection[Permission], perms: Iterable[Permission | str]) -> bool:
    return any(has_permission(capabilities, p) for p in perms)


def has_all_permissions(capabilities: Collection[Permission], perms: Iterable[Permission | str]) -> bool:
    return all(has_permission(capabilities, p) for p in perms)


def get_by_category(
    capabilities: Collection[Permission],
    category: PermissionCategory | str,
) -> list[PermissionDef]:
    """Catalog entries in `category` that the actor holds. Display only."""
    return [
        d for d in PERMISSION_CATALOG.values()
        if d.category == category and d.key in capabilities
    ]


def can_manage_users(capabilities: Collection[Permission]) -> bool:
    return has_any_permission(capabilities, (
        Permission.USER_CREATE, Permission.USER_EDIT, Permission.USER_DELETE,
    ))


def can_manage_customers(capabilities: Collection[Permission]) -> bool:
    return has_any_permission(capabilities, (
        Permission.CUSTOMER_CREATE, Permission.CUSTOMER_EDIT, Permission.CUSTOMER_DELETE,
    ))


def can_manage_applications(capabilities: Collection[Permission]) -> bool:
    return has_any_permission(capabilities, (
        Permission.APPLICATION_CREATE, Permission.APPLICATION_EDIT, Permission.APPLICATION_APPROVE,
    ))


def can_access_system_settings(capabilities: Collection[Permission]) -> bool:
    return has_any_permission(capabilities, (
        Permission.SYSTEM_CONFIG, Permission.SYSTEM_LOGS, Permission.SYSTEM_BACKUP,
    ))
