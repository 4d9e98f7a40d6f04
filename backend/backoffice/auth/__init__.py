from backoffice.auth.permissions import (
    Permission, PermissionCategory, PermissionDef, PERMISSION_CATALOG,
    has_permission, has_any_permission, has_all_permissions, get_by_category,
    can_manage_users, can_manage_customers, can_manage_applications, can_access_system_settings,
)
from backoffice.auth.roles import (
    Role, PermissionModel, ROLE_PERMISSIONS, ALL_PERMISSIONS, DEFAULT_PERMISSION_MODEL,
    build_permission_model, parse_role, resolve_capabilities,
)
from backoffice.auth.context import RequestContext

__all__ = [
    "Permission", "PermissionCategory", "PermissionDef", "PERMISSION_CATALOG",
    "has_permission", "has_any_permission", "has_all_permissions", "get_by_category",
    "can_manage_users", "can_manage_customers", "can_manage_applications",
    "can_access_system_settings",
    "Role", "PermissionModel", "ROLE_PERMISSIONS", "ALL_PERMISSIONS", "DEFAULT_PERMISSION_MODEL",
    "build_permission_model", "parse_role", "resolve_capabilities",
    "RequestContext",
]
