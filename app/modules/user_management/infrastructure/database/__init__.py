# 📄 File: app/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gives easy access to the users table definition and the code that reads and writes it.
#
# 🧪 Purpose (Technical Summary):
# Database layer exports for user management: UserModel and UserRepositoryImpl.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM models and sessions
#
# 🔄 Connected Modules / Calls From:
# - Presentation dependencies, migrations

from .models import UserModel
from .user_repository_impl import UserRepositoryImpl, parse_user_id

__all__ = [
    "UserModel",
    "UserRepositoryImpl",
    "parse_user_id",
]
