# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the request tracking and error formatting pieces the app plugs in at startup.
# 🧪 Purpose (Technical Summary):
# Middleware package exports: request logging middleware and exception handler registration.
# 🔗 Dependencies:
# FastAPI, starlette
# 🔄 Connected Modules / Calls From:
# app.main.py

from .error_handling import register_exception_handlers, create_error_response
from .logging import RequestLoggingMiddleware, REQUEST_ID_HEADER

__all__ = [
    "register_exception_handlers",
    "create_error_response",
    "RequestLoggingMiddleware",
    "REQUEST_ID_HEADER",
]
