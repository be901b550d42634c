# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Gives every incoming request a tracking number and writes a short log line for each one,
# so a problem can be traced from the customer's request to the server logs.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: resolves or generates an X-Request-ID, binds it to the logging
# context for the duration of the request, logs method, path, status and timing, and echoes
# the id back in the response headers.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, app.shared.utils.logging (log_context)
# 🔄 Connected Modules / Calls From:
# app.main.py (middleware registration)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Paths too noisy to log on every call
EXCLUDED_PATHS = {"/health", "/favicon.ico"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request correlation and access logging.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.request_id_header = REQUEST_ID_HEADER

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        start_time = time.perf_counter()

        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as e:
                processing_time = time.perf_counter() - start_time
                logger.error(
                    f"{request.method} {request.url.path} failed after {processing_time:.3f}s: {e}"
                )
                raise

            processing_time = time.perf_counter() - start_time
            if request.url.path not in EXCLUDED_PATHS:
                logger.info(
                    f"{request.method} {request.url.path} -> {response.status_code} "
                    f"({processing_time:.3f}s)"
                )

        response.headers[self.request_id_header] = request_id
        response.headers["X-Response-Time"] = f"{processing_time:.3f}s"
        return response

    def _get_or_create_request_id(self, request: Request) -> str:
        """Reuse the caller's X-Request-ID or create one."""
        request_id = request.headers.get(self.request_id_header.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id
