# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this 'app' folder contains our storefront backend code and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version and package metadata for the
# Storefront FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - app.shared.config.settings (APP_VERSION default)

"""
Storefront Backend - user accounts, credentials and shopping cart provisioning.
"""

__version__ = "1.0.0"
__title__ = "Storefront Backend API"
__description__ = "E-commerce user lifecycle service"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
