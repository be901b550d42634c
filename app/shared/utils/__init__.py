# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Sets up the shared helper tools, currently the logging setup every part of the app writes to.

# 🧪 Purpose (Technical Summary):
# Initializes the utilities package and re-exports the logging configuration helpers.

# 🔗 Dependencies:
# - logging: Structured logging utilities

# 🔄 Connected Modules / Calls From:
# Used by: app.main (startup), request-id middleware

from .logging import setup_logging, log_context, request_id_var, user_id_var

__all__ = [
    "setup_logging",
    "log_context",
    "request_id_var",
    "user_id_var",
]
