# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# This file provides health check endpoints that tell us if the storefront is working properly,
# like a quick checkup confirming the app is up and the database answers.
# 🧪 Purpose (Technical Summary):
# Liveness and readiness endpoints; readiness runs the database connection health check.
# 🔗 Dependencies:
# FastAPI, app.shared.infrastructure.database.connection, datetime
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, load balancers, monitoring systems

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from app.shared.config.settings import get_settings
from app.shared.infrastructure.database.connection import db_manager

logger = logging.getLogger(__name__)

# Create router for health endpoints
health_router = APIRouter()


@health_router.get("/health",
                  summary="Health Check",
                  description="Application and database health for load balancers and monitoring",
                  tags=["Health Check"])
async def health_check() -> JSONResponse:
    """
    Report overall health.

    Returns 503 when the database is unreachable.
    """
    settings = get_settings()
    database = await db_manager.health_check()
    healthy = database.get("status") == "healthy"

    if not healthy:
        logger.warning(f"Health check failed: {database}")

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "checks": {"database": database},
        }
    )


@health_router.get("/health/live",
                  summary="Liveness Probe",
                  tags=["Health Check"])
async def liveness_probe() -> Response:
    """The process is up and serving requests."""
    return Response(status_code=200)
