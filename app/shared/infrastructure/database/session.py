# 📄 File: app/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database) ensuring each request
# gets its own clean session and that failed work is undone.
#
# 🧪 Purpose (Technical Summary):
# Implements async SQLAlchemy session management with dependency injection for FastAPI,
# transaction handling, and session lifecycle management.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - app/shared/infrastructure/database/connection.py (database engine)
#
# 🔄 Connected Modules / Calls From:
# - app/modules/user_management/presentation/dependencies.py (request sessions)
# - app/main.py (startup)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.shared.core.exceptions import DatabaseError
from app.shared.infrastructure.database.connection import db_manager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Hands out request-scoped sessions from a factory bound at startup.

    expire_on_commit is off so entities stay readable after the lifecycle
    service commits mid-request.
    """

    def __init__(self):
        self._session_factory: Optional[async_sessionmaker] = None

    def initialize(self, engine: AsyncEngine) -> None:
        """Initialize the session factory with database engine."""
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )
        logger.info("Database session factory initialized successfully")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session, committing leftover work on exit and rolling back on error.

        Raises:
            DatabaseError: If the session manager is not initialized or the
                final commit fails
        """
        if self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()

        try:
            logger.debug("Database session created")
            yield session
            await session.commit()

        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Request session rolled back after database error: {e}")
            raise DatabaseError("Database operation failed", operation="commit") from e

        except Exception:
            await session.rollback()
            raise

        finally:
            await session.close()
            logger.debug("Database session closed")


# Global session manager instance
session_manager = DatabaseSessionManager()


def initialize_sessions() -> None:
    """Bind the global session manager to the global engine."""
    session_manager.initialize(db_manager.engine)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; services commit their own multi-row writes."""
    async with session_manager.get_session() as session:
        yield session
