# 📄 File: app/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the customer account system: signing up, logging in, editing profile details
# and switching accounts off or back on.
# 🧪 Purpose (Technical Summary):
# Package initialization for the user management module, laid out in domain,
# application, infrastructure and presentation layers.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, app.shared.core, pydantic, passlib, python-jose
# 🔄 Connected Modules / Calls From:
# app.main, app.api.v1.router

"""
User Management Module

- Domain: User entity, query options, repository interface, lifecycle,
  credential and query services
- Application: request DTOs
- Infrastructure: SQLAlchemy model and repository implementation
- Presentation: /api/v1/users endpoints and response schemas
"""

__version__ = "1.0.0"
