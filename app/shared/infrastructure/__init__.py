"""
Infrastructure layer package for the storefront.
Provides the async database engine and session management.
"""

__all__ = []
