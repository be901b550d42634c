# 📄 File: app/modules/notifications/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the email feature that greets new customers after they sign up.
# 🧪 Purpose (Technical Summary):
# Package initialization for transactional email: message model, rendering, HTTP delivery
# with bounded retry and the background dispatcher.
# 🔗 Dependencies:
# aiohttp, tenacity, pydantic
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.domain.services.user_service, app.main

"""
Notifications Module

Delivery is best-effort: emails are sent after the business transaction commits
and a failed delivery is logged, never reported back to the caller.
"""
