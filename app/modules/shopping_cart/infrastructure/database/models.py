# 📄 File: app/modules/shopping_cart/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how a customer's shopping cart is stored in the database.
# Every active customer owns exactly one cart.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the shopping_carts table, keyed by a unique user_id
# foreign key so a user can own at most one cart.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.shopping_cart.domain.services.cart_service (provisioning)
# - app.modules.user_management.infrastructure.database.models (user relationship)
# - Database migration scripts

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.shared.infrastructure.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShoppingCartModel(Base):
    """
    SQLAlchemy model for a user's shopping cart.

    The cart's existence mirrors its owner's is_active flag; rows are created and
    destroyed by ShoppingCartService inside the owner's lifecycle transaction.
    """
    __tablename__ = "shopping_carts"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
        comment="Unique identifier for each cart"
    )
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
        comment="Owner of the cart"
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="Cart creation date"
    )

    user = relationship("UserModel", back_populates="cart")

    def __repr__(self) -> str:
        return f"<ShoppingCartModel(id={self.id}, user_id={self.user_id})>"


__all__ = ["ShoppingCartModel"]
