# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as a package holding the web layer: versioned routes and the
# request tracking and error formatting middleware.
# 🧪 Purpose (Technical Summary):
# Package initialization for the API layer.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# app.main.py
