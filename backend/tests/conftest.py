"""Shared test fixtures for backend tests."""

import os

# Settings are read at import time; point them at SQLite before anything imports backoffice.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from contextlib import asynccontextmanager  # noqa: E402
from typing import AsyncGenerator, AsyncIterator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backoffice.api.deps import get_db  # noqa: E402
from backoffice.auth.context import RequestContext  # noqa: E402
from backoffice.auth.jwt import create_access_token  # noqa: E402
from backoffice.auth.roles import Role, resolve_capabilities  # noqa: E402
from backoffice.database import Base  # noqa: E402
from backoffice.main import app  # noqa: E402
from backoffice.models import Application, ApplicationDocument  # noqa: E402

ADMIN_ID = "00000000-0000-0000-0000-0000000000a1"
MANAGER_ID = "00000000-0000-0000-0000-0000000000b1"
PARTNER_ID = "00000000-0000-0000-0000-0000000000c1"
USER_ID = "00000000-0000-0000-0000-0000000000d1"
OTHER_USER_ID = "00000000-0000-0000-0000-0000000000d2"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


def make_context(role: Role, user_id: str) -> RequestContext:
    return RequestContext(user_id=user_id, role=role, permissions=resolve_capabilities(role))


@pytest.fixture
def admin_ctx() -> RequestContext:
    return make_context(Role.ADMIN, ADMIN_ID)


@pytest.fixture
def manager_ctx() -> RequestContext:
    return make_context(Role.MANAGER, MANAGER_ID)


@pytest.fixture
def user_ctx() -> RequestContext:
    return make_context(Role.USER, USER_ID)


async def create_application(
    session: AsyncSession,
    *,
    status: str = "Draft",
    created_by: str = USER_ID,
    created_by_role: str = "user",
    assigned_manager: str | None = MANAGER_ID,
    partner_id: str | None = None,
    documents_uploaded: bool = True,
    checklist_complete: bool = False,
) -> Application:
    application = Application(
        applicant_name="Jane Applicant",
        company="Acme Trading LLC",
        email="jane@acme.example",
        status=status,
        created_by=created_by,
        created_by_role=created_by_role,
        assigned_manager=assigned_manager,
        partner_id=partner_id,
        document_checklist_complete=checklist_complete,
        documents=[
            ApplicationDocument(
                document_name="Passport",
                document_category="identity",
                is_mandatory=True,
                is_uploaded=documents_uploaded,
            ),
            ApplicationDocument(
                document_name="Trade License",
                document_category="company",
                is_mandatory=True,
                is_uploaded=documents_uploaded,
            ),
            ApplicationDocument(
                document_name="Bank Reference Letter",
                document_category="company",
                is_mandatory=False,
                is_uploaded=False,
            ),
        ],
    )
    session.add(application)
    await session.flush()
    return application


def _make_auth_header(user_id: str, role: str) -> dict:
    """Create an Authorization header with a valid JWT."""
    token = create_access_token(user_id, role)
    return {"Authorization": f"Bearer {token}"}


def _override_db(session: AsyncSession):
    """Create a dependency override for get_db."""
    async def _get_db():
        yield session
    return _get_db


@asynccontextmanager
async def _client(session: AsyncSession, headers: dict | None = None) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_db] = _override_db(session)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=headers or {}) as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db_session, _make_auth_header(ADMIN_ID, "admin")) as client:
        yield client


@pytest_asyncio.fixture
async def manager_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db_session, _make_auth_header(MANAGER_ID, "manager")) as client:
        yield client


@pytest_asyncio.fixture
async def partner_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db_session, _make_auth_header(PARTNER_ID, "partner")) as client:
        yield client


@pytest_asyncio.fixture
async def user_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async with _client(db_session, _make_auth_header(USER_ID, "user")) as client:
        yield client


@pytest_asyncio.fixture
async def anon_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with no authentication."""
    async with _client(db_session) as client:
        yield client
