# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# This file acts like a traffic director for all API version 1 requests, sending account requests
# to the user endpoints and health questions to the health endpoints.
# 🧪 Purpose (Technical Summary):
# Main API v1 router aggregation combining module routers under their route prefixes.
# 🔗 Dependencies:
# FastAPI, app.api.v1.health, app.modules.user_management.presentation.api.v1.users
# 🔄 Connected Modules / Calls From:
# app.main.py

import logging

from fastapi import APIRouter

from . import ROUTE_PREFIXES, API_TAGS
from app.modules.user_management.presentation.api.v1.users import users_router

logger = logging.getLogger(__name__)

# Create main API v1 router
api_v1_router = APIRouter()

api_v1_router.include_router(
    users_router,
    prefix=ROUTE_PREFIXES["users"],
    tags=[API_TAGS["users"]]
)

logger.debug(f"API v1 routes registered: {sorted(ROUTE_PREFIXES)}")
