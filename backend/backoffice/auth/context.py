"""
RequestContext — the "who is asking and what can they do" abstraction.

Every API request gets a RequestContext. It carries:
- user_id: the identity provider's subject id
- role: the actor's single role
- permissions: the resolved set of permissions for that role

`get_request_context()` in deps.py builds it from the bearer token.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import HTTPException

from backoffice.auth.permissions import Permission, has_any_permission, has_permission
from backoffice.auth.roles import Role


@dataclass
class RequestContext:
    user_id: str = "anonymous"
    role: Role = Role.USER
    permissions: frozenset[Permission] = field(default_factory=frozenset)

    def has_permission(self, perm: Permission) -> bool:
        return has_permission(self.permissions, perm)

    def require_permission(self, perm: Permission) -> None:
        """Raise 403 if the caller lacks the given permission."""
        if not self.has_permission(perm):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: requires {perm.value}",
            )

    def require_any(self, *perms: Permission) -> None:
        """Raise 403 if the caller lacks ALL of the given permissions."""
        if not has_any_permission(self.permissions, perms):
            needed = ", ".join(p.value for p in perms)
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: requires one of [{needed}]",
            )

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_manager(self) -> bool:
        return self.role is Role.MANAGER

    @property
    def actor(self) -> str:
        """Identity string for audit logging."""
        return f"{self.role.value}:{self.user_id}"
