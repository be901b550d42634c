# 📄 File: app/modules/user_management/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the user account endpoints.
#
# 🧪 Purpose (Technical Summary):
# Exports the v1 users router.
#
# 🔗 Dependencies:
# - FastAPI APIRouter
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (router inclusion)

from .users import users_router

__all__ = ["users_router"]
