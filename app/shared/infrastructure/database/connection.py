# 📄 File: app/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our database, making sure we can talk to our data storage
# and handling multiple connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Implements async SQLAlchemy engine management with connection pooling, health checks
# and retry logic, plus the declarative base shared by every module's ORM models.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine)
# - app/shared/config/settings.py (database configuration)
# - asyncpg (PostgreSQL async driver), aiosqlite (SQLite async driver)
#
# 🔄 Connected Modules / Calls From:
# - app/shared/infrastructure/database/session.py (session management)
# - All module ORM models (declarative base)
# - app/api/v1/health.py (database health monitoring)

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.shared.config.settings import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for every ORM model in the application."""


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling,
    health monitoring, and automatic retry logic.
    """

    def __init__(self, url: Optional[str] = None):
        self._settings = get_settings()
        self._url = url or self._settings.database_url
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 1.0

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")
        return self._engine

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters for the configured backend."""
        params: Dict[str, Any] = {
            "url": self._url,
            "echo": self._settings.DB_ECHO,
            "pool_pre_ping": True,  # Validate connections before use
        }

        if self._url.startswith("sqlite"):
            params["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self._url:
                # A single shared connection keeps the in-memory database alive
                params["poolclass"] = StaticPool
            return params

        params.update({
            "pool_size": self._settings.DB_POOL_SIZE,
            "max_overflow": self._settings.DB_MAX_OVERFLOW,
            "pool_timeout": self._settings.DB_POOL_TIMEOUT,
            "pool_recycle": self._settings.DB_POOL_RECYCLE,
            "connect_args": {
                "server_settings": {
                    "application_name": "storefront_backend",
                    "jit": "off",
                },
                "command_timeout": 60,
            },
        })
        return params

    async def initialize(self) -> None:
        """Initialize database engine with connection pooling."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params())
        logger.info("Database engine created")

    async def create_all(self) -> None:
        """Create every table registered on the declarative base."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            logger.error("Database engine not initialized")
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    await conn.execute(self._health_check_query)

                logger.debug("Database health check passed")
                return {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }

            except Exception as e:
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        logger.error("Database health check failed after all retry attempts")
        return {
            "status": "unhealthy",
            "error": "Database health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    async def close(self) -> None:
        """Dispose of the engine and every pooled connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database connections closed")


# Global connection manager instance
db_manager = DatabaseConnectionManager()


async def init_database() -> None:
    """Initialize the global database connection manager."""
    await db_manager.initialize()


async def close_database() -> None:
    """Close the global database connection manager."""
    await db_manager.close()
