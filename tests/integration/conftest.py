from typing import List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from finly.adapter.services.password_hasher import BcryptPasswordHasher
from finly.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from finly.app.errors import Unauthorized
from finly.app.services.identity_provider import IdentityClaims, IIdentityProvider
from finly.app.services.reset_password_notifier import IResetPasswordNotifier
from finly.depends import get_unit_of_work
from tests.fixtures.clock import FixedClock
from tests.fixtures.http import bearer, signup_and_login
from tests.fixtures.keys import RESET_SECRET, rsa_key_pair

GOOGLE_ID_TOKEN = "google-id-token"


class TestConfig(ApplicationConfig):
    __test__ = False

    JWT_PRIVATE_KEY, JWT_PUBLIC_KEY = rsa_key_pair()
    RESET_TOKEN_SECRET = RESET_SECRET
    RESET_PASSWORD_LINK_BASE = "https://app.example.com/reset-password"
    AUTO_CREATE_TABLES = False
    CORS_ORIGINS = []


class FakeIdentityProvider(IIdentityProvider):
    """Accepts only GOOGLE_ID_TOKEN, issued for google@example.com"""

    async def verify(self, token: str) -> IdentityClaims:
        if token != GOOGLE_ID_TOKEN:
            raise Unauthorized("invalid google id token", code="INVALID_ID_TOKEN")
        return IdentityClaims(
            subject="google-sub", email="google@example.com", email_verified=True, name="Googler"
        )


class CapturingNotifier(IResetPasswordNotifier):
    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    async def send_reset_link(self, email: str, link: str) -> None:
        self.sent.append((email, link))


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def notifier():
    return CapturingNotifier()


@pytest_asyncio.fixture
async def client(session_factory, clock, notifier):
    from finly.api.app import create_app

    app = create_app(
        TestConfig,
        clock=clock,
        password_hasher=BcryptPasswordHasher(rounds=4),
        identity_provider=FakeIdentityProvider(),
        reset_password_notifier=notifier,
    )

    # One database session per request, as in production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    # Starlette re-raises after the 500 handler has answered; keep the response
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers(client) -> dict:
    tokens = await signup_and_login(client)
    return bearer(tokens["access_token"])
