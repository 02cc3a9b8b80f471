"""
Shared fixtures.

Service tests use mocks; repository, concurrency and router tests run
against a throwaway SQLite file per test.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from infosys.core import rate_limit
from infosys.core.config import settings
from infosys.core.database import create_engine_for_url, create_session_maker, get_db, init_db
from infosys.core.security import create_access_token
from infosys.main import app
from infosys.modules.accounts import Account, AccountRepository, AccountRole, AccountStatus
from infosys.modules.auth import ensure_admin_account


@pytest.fixture(autouse=True)
def fast_test_settings(monkeypatch):
    """Cheap bcrypt, no real email, fresh rate limit counters."""
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)
    monkeypatch.setattr(settings, "resend_api_key", None)
    monkeypatch.setattr(settings, "allowed_email_domain", None)
    monkeypatch.setattr(settings, "python_env", "development")
    rate_limit.reset_memory_store()
    yield
    rate_limit.reset_memory_store()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A fresh SQLite database with the accounts table created."""
    engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'accounts.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return create_session_maker(db_engine)


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return AccountRepository(db_session)


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def mock_repository():
    """An AccountRepository stand-in for service unit tests."""
    repo = MagicMock(spec=AccountRepository)
    repo.insert_pending = AsyncMock()
    repo.insert_admin = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.find_by_reg_number = AsyncMock(return_value=None)
    repo.list_by_status = AsyncMock(return_value=[])
    repo.find_admin = AsyncMock(return_value=None)
    repo.set_approved = AsyncMock()
    repo.update_passcode_hash = AsyncMock()
    return repo


def make_account(
    account_id: int = 1,
    *,
    name: str = "Ada Etuk",
    reg_number: str = "24/is/co/346",
    email: str = "ada.etuk@example.com",
    status: AccountStatus = AccountStatus.PENDING,
    role: AccountRole = AccountRole.STUDENT,
    passcode_hash: str | None = None,
) -> Account:
    """Build a detached Account as the repository would return it."""
    now = datetime.now(UTC)
    return Account(
        id=account_id,
        name=name,
        reg_number=reg_number,
        email=email,
        status=status,
        role=role,
        passcode_hash=passcode_hash,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def pending_account():
    return make_account()


@pytest.fixture
def account_factory():
    return make_account


@pytest_asyncio.fixture
async def client(session_maker):
    """HTTP client for the app, with get_db bound to the test database."""

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_headers(session_maker):
    """Bearer headers for the seeded admin."""
    async with session_maker() as session:
        admin = await ensure_admin_account(AccountRepository(session))

    token = create_access_token(
        subject=str(admin.id),
        additional_claims={"role": admin.role.value, "regNumber": admin.reg_number},
    )
    return {"Authorization": f"Bearer {token}"}
