# 📄 File: app/modules/user_management/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# Holds the input formats the user endpoints accept.
# 🧪 Purpose (Technical Summary):
# Application layer package for user management request DTOs.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# Presentation layer
