"""Actor profile — the caller's role and resolved permissions."""

from fastapi import APIRouter, Depends

from backoffice.api.deps import get_request_context
from backoffice.auth.context import RequestContext
from backoffice.auth.permissions import (
    PermissionCategory,
    can_access_system_settings,
    can_manage_applications,
    can_manage_customers,
    can_manage_users,
    get_by_category,
)
from backoffice.schemas.schemas import ActorProfile, PermissionInfo

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=ActorProfile)
async def me(ctx: RequestContext = Depends(get_request_context)):
    """Return the current actor's permissions, grouped for the portal menus."""
    perms = ctx.permissions
    by_category = {
        category.value: [
            PermissionInfo(key=d.key.value, name=d.name, description=d.description)
            for d in get_by_category(perms, category)
        ]
        for category in PermissionCategory
    }
    return ActorProfile(
        user_id=ctx.user_id,
        role=ctx.role.value,
        permissions=sorted(p.value for p in perms),
        permissions_by_category={k: v for k, v in by_category.items() if v},
        can_manage_users=can_manage_users(perms),
        can_manage_customers=can_manage_customers(perms),
        can_manage_applications=can_manage_applications(perms),
        can_access_system_settings=can_access_system_settings(perms),
    )
