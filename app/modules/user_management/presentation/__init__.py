# 📄 File: app/modules/user_management/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the web-facing side of customer accounts: the endpoints and what they return.
#
# 🧪 Purpose (Technical Summary):
# Presentation layer initialization: FastAPI router, response schemas and dependency wiring.
#
# 🔗 Dependencies:
# - FastAPI for HTTP endpoint routing and OpenAPI documentation
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (includes the users router)
