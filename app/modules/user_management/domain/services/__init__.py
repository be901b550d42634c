# 📄 File: app/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the services that run account operations like sign-up, login and deactivation
# 🧪 Purpose (Technical Summary):
# Package initialization for user domain services
# 🔗 Dependencies:
# Domain models, repositories, shopping cart and notification modules
# 🔄 Connected Modules / Calls From:
# Presentation dependencies and API endpoints

from .credential_service import CredentialService
from .user_queries import UserQueryService, translate_query_errors
from .user_service import UserService, build_user_service

__all__ = [
    "CredentialService",
    "UserQueryService",
    "translate_query_errors",
    "UserService",
    "build_user_service",
]
