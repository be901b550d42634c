# 📄 File: app/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core user data models - what we store about a customer and how we search for them
# 🧪 Purpose (Technical Summary):
# Package initialization for domain models: the User entity and user query value objects
# 🔗 Dependencies:
# Domain model classes, pydantic base models
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, presentation layer, infrastructure layer

from .user import User, UPDATABLE_FIELDS
from .query import QueryOptions, SortOrder, PaginatedUsers

__all__ = [
    "User",
    "UPDATABLE_FIELDS",
    "QueryOptions",
    "SortOrder",
    "PaginatedUsers",
]
