# 📄 File: app/modules/shopping_cart/domain/services/cart_service.py
# 🧭 Purpose (Layman Explanation):
# Gives a customer a shopping cart when their account becomes active and takes it away
# when the account is deactivated.
# 🧪 Purpose (Technical Summary):
# Transaction-aware cart provisioning. Both operations run on the caller's AsyncSession and
# only flush, so they commit or roll back together with the user lifecycle change.
# 🔗 Dependencies:
# SQLAlchemy async session, ShoppingCartModel
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.domain.services.user_service (create, delete_user)

import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.shopping_cart.infrastructure.database.models import ShoppingCartModel
from app.modules.user_management.infrastructure.database.user_repository_impl import parse_user_id

logger = logging.getLogger(__name__)


class ShoppingCartService:
    """
    Creates and destroys carts on behalf of a user id.

    The service never commits: the session passed in belongs to the caller's
    transaction.
    """

    async def create_cart(self, user_id: str, session: AsyncSession) -> ShoppingCartModel:
        """
        Create the cart owned by user_id.

        Raises:
            IntegrityError: If the user already owns a cart
        """
        cart = ShoppingCartModel(user_id=parse_user_id(user_id))
        session.add(cart)
        await session.flush()

        logger.info(f"Created shopping cart {cart.id} for user {user_id}")
        return cart

    async def destroy_cart(self, user_id: str, session: AsyncSession) -> None:
        """Delete the cart owned by user_id, if any."""
        stmt = delete(ShoppingCartModel).where(ShoppingCartModel.user_id == parse_user_id(user_id))
        result = await session.execute(stmt)

        if result.rowcount == 0:
            logger.warning(f"No shopping cart to destroy for user {user_id}")
        else:
            logger.info(f"Destroyed shopping cart for user {user_id}")
