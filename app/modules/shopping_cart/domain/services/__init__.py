from .cart_service import ShoppingCartService

__all__ = ["ShoppingCartService"]
