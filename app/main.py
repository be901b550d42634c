# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the storefront backend, connects the database,
# plugs in request tracking and error formatting, and opens the account endpoints.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point with lifespan-managed database and session
# initialization, middleware setup, exception handlers and router registration.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - app.shared.config.settings
# - app.shared.infrastructure.database (engine and sessions)
# - app.api (routers, middleware)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Docker container entry point
# - tests (TestClient)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.middleware import RequestLoggingMiddleware, register_exception_handlers
from app.api.v1 import API_PREFIX
from app.api.v1.health import health_router
from app.api.v1.router import api_v1_router
from app.modules.notifications.domain.services.mail_service import get_notification_dispatcher
from app.shared.config.settings import get_settings
from app.shared.infrastructure.database.connection import close_database, db_manager, init_database
from app.shared.infrastructure.database.session import initialize_sessions
from app.shared.utils.logging import setup_logging

# Get application settings
settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database engine and session factory on startup; on shutdown waits
    for in-flight emails and closes every pooled connection.
    """
    logger.info(f"{settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    try:
        await init_database()
        logger.info("✅ Database connection initialized")

        initialize_sessions()
        logger.info("✅ Session manager initialized")

        # Tables are managed by Alembic outside development
        if settings.ENVIRONMENT in ("development", "test"):
            await db_manager.create_all()

        logger.info(f"✅ {settings.APP_NAME} startup complete")

        yield  # Application is running

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        logger.info(f"🔄 {settings.APP_NAME} shutting down...")

        await get_notification_dispatcher().drain()
        await close_database()
        logger.info(f"✅ {settings.APP_NAME} shutdown complete")


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    # Health check routes (no prefix)
    app.include_router(health_router)

    app.include_router(api_v1_router, prefix=API_PREFIX)

    return app


app = create_application()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
