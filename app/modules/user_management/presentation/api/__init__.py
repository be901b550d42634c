# 📄 File: app/modules/user_management/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the user account web endpoints and their response formats.
#
# 🧪 Purpose (Technical Summary):
# API package for user management, organized by version.
#
# 🔗 Dependencies:
# - app.modules.user_management.presentation.api.v1
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router
