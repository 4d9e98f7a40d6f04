"""
API Dependencies — DB session, auth context, permission guards.

The identity provider issues bearer tokens; `get_request_context`:
  1. Extracts the Bearer token from the Authorization header
  2. Decodes and validates the JWT
  3. Resolves the role claim → permissions via the PermissionModel
  4. Returns a RequestContext

Unrecognised role claims are not an error: the caller gets the lowest role
with no permissions at all (fail closed).
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, Request, HTTPException
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.database import async_session
from backoffice.auth.permissions import Permission
from backoffice.auth.roles import Role, parse_role, resolve_capabilities
from backoffice.auth.context import RequestContext
from backoffice.auth.jwt import decode_access_token

logger = logging.getLogger(__name__)


# ── Database session ─────────────────────────────────────────────────────────

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session per request, commit on success, rollback on error."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ── Request context (JWT authentication) ──────────────────────────────────────

async def get_request_context(request: Request) -> RequestContext:
    """Build a RequestContext for the current request by decoding the JWT."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid Authorization header")

    token = auth_header[7:]  # strip "Bearer "
    try:
        claims = decode_access_token(token)
    except JWTError as e:
        logger.debug("JWT decode failed: %s", e)
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token has no subject")

    role_claim = claims.get("role")
    role = parse_role(role_claim)
    if role is None:
        logger.warning("Unknown role claim %r for user %s; denying all permissions", role_claim, user_id)
        return RequestContext(user_id=str(user_id), role=Role.USER, permissions=frozenset())

    return RequestContext(
        user_id=str(user_id),
        role=role,
        permissions=resolve_capabilities(role),
    )


# ── Permission guards ────────────────────────────────────────────────────────

def require(*perms: Permission):
    """
    FastAPI dependency that checks the caller has ALL listed permissions.

    Usage:
        @router.get("/applications/{application_id}")
        async def get_application(ctx: RequestContext = Depends(require(Permission.APPLICATION_VIEW))):
            ...
    """
    async def _check(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        for p in perms:
            ctx.require_permission(p)
        return ctx
    return _check


def require_any(*perms: Permission):
    """
    FastAPI dependency that checks the caller has AT LEAST ONE of the listed permissions.
    """
    async def _check(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        ctx.require_any(*perms)
        return ctx
    return _check
