# 📄 File: app/modules/user_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the data access interfaces that define how to save and find user information
# 🧪 Purpose (Technical Summary):
# Package initialization for repository interfaces following the Repository pattern
# 🔗 Dependencies:
# Repository interface classes, domain models, typing
# 🔄 Connected Modules / Calls From:
# Domain services, infrastructure implementations

from .user_repository import UserRepository

__all__ = [
    "UserRepository",
]
