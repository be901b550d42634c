from .models import ShoppingCartModel

__all__ = ["ShoppingCartModel"]
