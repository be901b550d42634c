# 📄 File: app/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Sets up how user accounts are actually stored in and read from the database.
#
# 🧪 Purpose (Technical Summary):
# Infrastructure layer initialization for user management: SQLAlchemy model and
# repository implementation.
#
# 🔗 Dependencies:
# - app.modules.user_management.domain.repositories (repository interfaces)
# - app.shared.infrastructure.database (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation (dependency injection)
# - migrations/env.py (model metadata)
