"""
tests.conftest

Shared fixtures.

Responsibilities:
- Test settings pointing at a throwaway SQLite file with cheap bcrypt rounds.
- A controllable clock so token expiry is tested without sleeping.
- Issuer/gate/store fixtures wired the same way the app factory wires them.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import pytest_asyncio

from iam_service.auth.gate import AccessGate
from iam_service.auth.jwt import TokenIssuer
from iam_service.db.identity_store import SqlIdentityStore
from iam_service.db.init_db import init_db
from iam_service.db.session import create_engine, create_sessionmaker
from iam_service.settings import Settings

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'iam.db'}",
        jwt_secret=TEST_SECRET,
        token_lifetime=timedelta(hours=1),
        password_hash_rounds=4,
        bootstrap_admin_username="root",
        bootstrap_admin_password="root-password",
    )


@pytest.fixture()
def issuer(settings: Settings, clock: FrozenClock) -> TokenIssuer:
    return TokenIssuer.from_settings(settings, clock=clock)


@pytest.fixture()
def gate(issuer: TokenIssuer, settings: Settings) -> AccessGate:
    return AccessGate(issuer=issuer, admin_roles=settings.admin_roles)


@pytest.fixture()
def admin_token(issuer: TokenIssuer) -> str:
    return issuer.issue("admin-1", "root", ["admin"]).value


@pytest.fixture()
def user_token(issuer: TokenIssuer) -> str:
    return issuer.issue("user-1", "plain", ["user"]).value


@pytest_asyncio.fixture()
async def session_factory(settings: Settings):
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield create_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest.fixture()
def sql_store(session_factory, settings: Settings) -> SqlIdentityStore:
    return SqlIdentityStore(session_factory, password_hash_rounds=settings.password_hash_rounds)


# --- Module Notes -----------------------------------------------------------
# Every test gets its own database file under tmp_path; nothing is shared.
