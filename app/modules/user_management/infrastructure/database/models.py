# 📄 File: app/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how customer accounts are stored in the database: names, email,
# hashed password, phone and whether the account is active.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model implementing the users table with a unique email constraint
# and a one-to-one relationship to the owned shopping cart.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (declarative base)
# - app.modules.shopping_cart.infrastructure.database.models (cart relationship target)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py (CRUD operations)
# - Database migration scripts (schema generation)

"""
SQLAlchemy Models for User Management

Models:
- UserModel: Account identity, credentials and activation flag

Users are never physically deleted; is_active=False is the soft-delete state.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Uuid
from sqlalchemy.orm import relationship

from app.shared.infrastructure.database.connection import Base
# Registers the relationship target on the shared metadata
from app.modules.shopping_cart.infrastructure.database.models import ShoppingCartModel  # noqa: F401


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """
    SQLAlchemy model for customer accounts.
    """
    __tablename__ = "users"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
        comment="Unique identifier for each user"
    )
    first_name = Column(String(100), nullable=False, comment="User's first name")
    last_name = Column(String(100), nullable=False, comment="User's last name")
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User's email address (unique, lower-case)"
    )
    password = Column(
        String(255),
        nullable=False,
        comment="Hashed password using bcrypt"
    )
    phone = Column(String(30), nullable=False, comment="User's phone number")
    is_active = Column(
        Boolean,
        nullable=False,
        default=True,
        comment="Soft-delete flag; false means deactivated"
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="Account creation date"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="Last modification date"
    )

    # lazy="raise" keeps async code from issuing implicit loads
    cart = relationship(
        "ShoppingCartModel",
        back_populates="user",
        uselist=False,
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


__all__ = [
    "UserModel",
]
