# 📄 File: app/modules/user_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core rules for customer accounts - what a valid user is and what may happen to it
# 🧪 Purpose (Technical Summary):
# Domain layer initialization containing the User entity, query value objects,
# the repository interface and the domain services
# 🔗 Dependencies:
# Domain models, services, repositories from subpackages
# 🔄 Connected Modules / Calls From:
# Application layer, Infrastructure layer, Presentation layer

"""
User Management Domain Layer

Business rules enforced:
- Email uniqueness (lower-case, enforced by the store)
- Passwords only ever stored as bcrypt hashes
- Deactivation instead of deletion, coupled to cart ownership
"""
