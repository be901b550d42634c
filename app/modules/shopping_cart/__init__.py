# 📄 File: app/modules/shopping_cart/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the shopping cart feature. Every active customer owns exactly one cart.
# 🧪 Purpose (Technical Summary):
# Package initialization for the shopping cart module: the cart ORM model and the
# transaction-aware provisioning service used by the user lifecycle.
# 🔗 Dependencies:
# SQLAlchemy, app.shared.infrastructure.database
# 🔄 Connected Modules / Calls From:
# app.modules.user_management (activation toggling), migrations

"""
Shopping Cart Module

Cart existence follows the owner's active flag: a cart is created when a user is
created or reactivated and destroyed when the user is deactivated.
"""
