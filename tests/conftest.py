"""Shared fixtures: in-memory database, sessions and a wired user service."""

import os

# Settings are cached on first use, so the test environment must be in place first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MAIL_API_URL"] = ""
os.environ["MAIL_API_KEY"] = ""

from typing import AsyncGenerator, Dict
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.modules.notifications.domain.services.mail_service import NotificationDispatcher
from app.modules.user_management.domain.services.user_service import UserService, build_user_service
from app.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.shared.infrastructure.database.connection import Base

# Registers both tables on Base.metadata
from app.modules.user_management.infrastructure.database.models import UserModel  # noqa: F401
from app.modules.shopping_cart.infrastructure.database.models import ShoppingCartModel  # noqa: F401


async def make_engine(url: str = "sqlite+aiosqlite:///:memory:") -> AsyncEngine:
    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        kwargs["poolclass"] = StaticPool
    engine = create_async_engine(url, **kwargs)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = await make_engine()
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier() -> MagicMock:
    """Stands in for the mail dispatcher so no background task is started."""
    return MagicMock(spec=NotificationDispatcher)


@pytest.fixture
def repository(session: AsyncSession) -> UserRepositoryImpl:
    return UserRepositoryImpl(session)


@pytest.fixture
def user_service(session: AsyncSession, repository: UserRepositoryImpl, notifier: MagicMock) -> UserService:
    return build_user_service(session, repository=repository, notifier=notifier)


@pytest.fixture
def user_payload() -> Dict[str, str]:
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "password": "correct-horse-battery",
        "phone": "+44 20 7946 0958",
    }
