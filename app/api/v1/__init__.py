# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks version 1 of the storefront API and records where each group of endpoints lives.
# 🧪 Purpose (Technical Summary):
# API v1 package metadata: version, route prefixes and OpenAPI tags.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main.py

__version__ = "1.0.0"
__api_version__ = "v1"

API_PREFIX = "/api/v1"

# Route prefixes relative to API_PREFIX
ROUTE_PREFIXES = {
    "users": "/users",
}

API_TAGS = {
    "users": "Users",
    "health": "Health Check",
}

__all__ = [
    "API_PREFIX",
    "ROUTE_PREFIXES",
    "API_TAGS",
]
