"""Pytest fixtures for API integration tests.

The app runs against a file-backed SQLite database. Outbound email and
Google token verification are replaced by in-memory fakes, so no network
is touched. TestClient is used without its context manager, so the
lifespan (schema creation on PostgreSQL, purge task) never runs.
"""

import asyncio
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from juander.domain.shared.exceptions import EmailDeliveryError
from juander.domain.user import OneTimeCodePurpose
from juander.infrastructure.persistence.sqlalchemy.models import Base
from juander.presentation.api.app import API_V1_PREFIX, create_app
from juander.presentation.api.config import get_api_settings
from juander.presentation.api.dependencies import (
    get_db_session,
    get_email_service,
    get_google_verifier,
)
from juander_auth import FederatedIdentity, FederationVerificationError
from juander_auth.persistence.sqlalchemy import AuthBase
from juander_config.settings import Settings

SUPER_ADMIN_EMAIL = "root@juander.test"
TEST_PASSWORD = "SecurePassword123!"


@dataclass
class SentCode:
    to_email: str
    code: str
    purpose: OneTimeCodePurpose


@dataclass
class FakeEmailService:
    """Records codes instead of sending them."""

    sent: list[SentCode] = field(default_factory=list)
    fail: bool = False

    def send_one_time_code(self, to_email: str, code: str, purpose: OneTimeCodePurpose):
        if self.fail:
            raise EmailDeliveryError(details={"to": to_email})
        self.sent.append(SentCode(to_email, code, purpose))

    def last_code_for(self, email: str) -> str:
        return next(s.code for s in reversed(self.sent) if s.to_email == email)


@dataclass
class FakeGoogleVerifier:
    """Accepts only the tokens registered in ``identities``."""

    identities: dict[str, FederatedIdentity] = field(default_factory=dict)

    async def verify(self, token: str) -> FederatedIdentity:
        identity = self.identities.get(token)
        if identity is None:
            raise FederationVerificationError
        return identity

    async def close(self) -> None:
        pass


def _run(coro):
    """Run a coroutine in a fresh event loop, apart from TestClient's."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def api_v1_prefix() -> str:
    return API_V1_PREFIX


@pytest.fixture
def auth_prefix(api_v1_prefix) -> str:
    return f"{api_v1_prefix}/auth"


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and cheap hashing."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        super_admin_email=SUPER_ADMIN_EMAIL,
        argon2_time_cost=1,
        argon2_memory_cost=1024,
        argon2_parallelism=1,
        otp_hash_rounds=4,
        smtp_enabled=False,
    )


@pytest.fixture
def test_db_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'juander-api.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.run_sync(AuthBase.metadata.create_all)

    _run(_setup())
    yield engine
    _run(engine.dispose())


@pytest.fixture
def test_session_maker(test_db_engine):
    return async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def email_outbox() -> FakeEmailService:
    return FakeEmailService()


@pytest.fixture
def google_verifier() -> FakeGoogleVerifier:
    return FakeGoogleVerifier()


@pytest.fixture
def test_client(
    api_settings,
    test_session_maker,
    email_outbox,
    google_verifier,
):
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_email_service] = lambda: email_outbox
    app.dependency_overrides[get_google_verifier] = lambda: google_verifier

    return TestClient(app)


@pytest.fixture
def register_user(test_client, auth_prefix, email_outbox):
    """Return a helper that registers, verifies and logs in a user."""

    def _register(
        email: str,
        password: str = TEST_PASSWORD,
        first_name: str = "Juan",
        last_name: str = "Dela Cruz",
    ) -> dict:
        response = test_client.post(
            f"{auth_prefix}/register",
            json={
                "firstName": first_name,
                "lastName": last_name,
                "email": email,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text

        response = test_client.post(
            f"{auth_prefix}/verify-otp",
            json={"email": email, "otp": email_outbox.last_code_for(email)},
        )
        assert response.status_code == 200, response.text
        user_id = response.json()["userId"]

        response = test_client.post(
            f"{auth_prefix}/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        token = response.json()["token"]

        return {
            "user_id": user_id,
            "email": email,
            "password": password,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _register


@pytest.fixture
def authenticated_user(register_user) -> dict:
    return register_user("juan@example.com")
