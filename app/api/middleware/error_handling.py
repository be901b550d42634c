# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# This file catches errors raised anywhere in the storefront and turns them into consistent,
# friendly JSON error messages with the right HTTP status code.
# 🧪 Purpose (Technical Summary):
# FastAPI exception handlers rendering StorefrontException outcomes, request validation failures
# and unexpected exceptions as one JSON error envelope tagged with the request id.
# 🔗 Dependencies:
# FastAPI, starlette, app.shared.core.exceptions, logging, traceback
# 🔄 Connected Modules / Calls From:
# app.main.py (handler registration), all API endpoints

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.shared.config.settings import get_settings
from app.shared.core.exceptions import StorefrontException

logger = logging.getLogger(__name__)


def create_error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Build the standard error envelope.

    Args:
        request: Request being answered
        status_code: HTTP status code
        error_code: Machine-readable error code
        message: Human-readable message
        details: Extra structured context
    """
    request_id = getattr(request.state, "request_id", None)
    content = {
        "error": {
            "code": error_code,
            "message": message,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
            "path": str(request.url.path),
            "method": request.method,
        }
    }

    response = JSONResponse(status_code=status_code, content=jsonable_encoder(content))
    if request_id:
        response.headers["X-Request-ID"] = request_id
    response.headers["X-Error-Code"] = error_code
    return response


async def storefront_exception_handler(request: Request, exc: StorefrontException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

    return create_error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query validation failures are bad requests."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg"),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]
    return create_error_response(
        request, 400, "BAD_REQUEST", "Request validation failed", {"validation_errors": errors}
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)

    settings = get_settings()
    details: Dict[str, Any] = {}
    if settings.DEBUG and not settings.is_production:
        details["debug"] = {
            "exception_type": type(exc).__name__,
            "traceback": traceback.format_exc().split("\n"),
        }

    return create_error_response(
        request, 500, "INTERNAL_SERVER_ERROR", "Internal server error, please try again later", details
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontException, storefront_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
