"""Tests for bearer token handling, request context and the actor profile."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from jose import JWTError, jwt

from backoffice.auth.context import RequestContext
from backoffice.auth.jwt import ALGORITHM, create_access_token, decode_access_token
from backoffice.auth.permissions import Permission
from backoffice.auth.roles import Role
from backoffice.config import settings
from tests.conftest import USER_ID, _client, _make_auth_header, make_context


# ── JWT utility tests ─────────────────────────────────────────────────────────

class TestJWTUtils:
    def test_create_and_decode_access_token(self):
        token = create_access_token(USER_ID, "partner", email="partner@example.com")
        claims = decode_access_token(token)
        assert claims["sub"] == USER_ID
        assert claims["role"] == "partner"
        assert claims["email"] == "partner@example.com"
        assert claims["type"] == "access"

    def test_decode_invalid_token_raises(self):
        with pytest.raises(JWTError):
            decode_access_token("invalid.token.here")

    def test_refresh_token_rejected(self):
        token = jwt.encode(
            {"sub": USER_ID, "role": "user", "type": "refresh"},
            settings.secret_key, algorithm=ALGORITHM,
        )
        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_expired_token_rejected(self):
        token = jwt.encode(
            {
                "sub": USER_ID,
                "role": "user",
                "type": "access",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.secret_key, algorithm=ALGORITHM,
        )
        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_wrong_key_rejected(self):
        token = jwt.encode(
            {"sub": USER_ID, "role": "admin", "type": "access"},
            "someone-elses-key", algorithm=ALGORITHM,
        )
        with pytest.raises(JWTError):
            decode_access_token(token)


# ── RequestContext ───────────────────────────────────────────────────────────

class TestRequestContext:
    def test_defaults_have_no_permissions(self):
        ctx = RequestContext()
        assert ctx.user_id == "anonymous"
        assert not ctx.has_permission(Permission.APPLICATION_VIEW)

    def test_require_permission(self):
        ctx = make_context(Role.USER, USER_ID)
        ctx.require_permission(Permission.APPLICATION_VIEW)
        with pytest.raises(HTTPException) as exc_info:
            ctx.require_permission(Permission.APPLICATION_EDIT)
        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Insufficient permissions: requires application.edit"

    def test_require_any(self):
        ctx = make_context(Role.PARTNER, USER_ID)
        ctx.require_any(Permission.APPLICATION_APPROVE, Permission.APPLICATION_EDIT)
        with pytest.raises(HTTPException) as exc_info:
            ctx.require_any(Permission.USER_DELETE, Permission.SYSTEM_CONFIG)
        assert exc_info.value.status_code == 403

    def test_role_flags_and_actor(self):
        ctx = make_context(Role.MANAGER, "m-1")
        assert ctx.is_manager and not ctx.is_admin
        assert ctx.actor == "manager:m-1"


# ── /api/auth/me ────────────────────────────────────────────────────────────

@pytest.mark.asyncio
class TestMe:
    async def test_requires_token(self, anon_client):
        resp = await anon_client.get("/api/auth/me")
        assert resp.status_code == 401

    async def test_admin_profile(self, admin_client):
        resp = await admin_client.get("/api/auth/me")
        assert resp.status_code == 200
        data = resp.json()
        assert data["role"] == "admin"
        assert set(data["permissions"]) == {p.value for p in Permission}
        assert set(data["permissions_by_category"]) == {
            "User Management",
            "Customer Management",
            "Application Management",
            "System Administration",
        }
        assert data["can_access_system_settings"] is True

    async def test_user_profile(self, user_client):
        resp = await user_client.get("/api/auth/me")
        data = resp.json()
        assert data["user_id"] == USER_ID
        assert data["permissions"] == ["application.view", "customer.view"]
        assert set(data["permissions_by_category"]) == {
            "Customer Management", "Application Management",
        }
        assert data["can_manage_applications"] is False

    async def test_manager_profile(self, manager_client):
        data = (await manager_client.get("/api/auth/me")).json()
        users = data["permissions_by_category"]["User Management"]
        assert [p["key"] for p in users] == ["user.view"]
        assert data["can_manage_users"] is False
        assert data["can_manage_applications"] is True

    async def test_unknown_role_gets_no_permissions(self, db_session):
        async with _client(db_session, _make_auth_header(USER_ID, "superuser")) as client:
            resp = await client.get("/api/auth/me")
            assert resp.status_code == 200
            data = resp.json()
            assert data["role"] == "user"
            assert data["permissions"] == []
            assert data["permissions_by_category"] == {}

            resp = await client.get("/api/applications/anything")
            assert resp.status_code == 403

    async def test_token_without_subject(self, db_session):
        token = jwt.encode({"role": "admin", "type": "access"}, settings.secret_key, algorithm=ALGORITHM)
        async with _client(db_session, {"Authorization": f"Bearer {token}"}) as client:
            resp = await client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token has no subject"
