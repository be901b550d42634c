# 📄 File: app/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles all database operations for user accounts, like creating new users,
# finding existing users and saving changes to their information.
#
# 🧪 Purpose (Technical Summary):
# Concrete implementation of the UserRepository interface using SQLAlchemy ORM,
# providing async database operations for user entities with error handling and logging.
#
# 🔗 Dependencies:
# - app.modules.user_management.domain.repositories.user_repository (interface)
# - app.modules.user_management.domain.models (domain models)
# - app.modules.user_management.infrastructure.database.models (SQLAlchemy models)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.domain.services (lifecycle and query services)
# - app.modules.user_management.presentation.dependencies (repository wiring)

"""
User Repository Implementation

Maps between domain User entities and UserModel rows. Writes are flushed into the
caller's transaction and never committed here; the lifecycle service decides when
to commit or roll back.
"""

import logging
import uuid
from typing import Any, List, Optional, Sequence

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from app.modules.user_management.domain.models.query import QueryOptions, SortOrder
from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.modules.user_management.infrastructure.database.models import UserModel
from app.shared.core.exceptions import BadRequestError, ConflictError

logger = logging.getLogger(__name__)

# Columns a caller may filter on
FILTERABLE_COLUMNS = {"id", "first_name", "last_name", "email", "phone", "is_active"}

# Domain field -> column attribute, for fields the repository writes back on update
_WRITABLE_FIELDS = {
    "first_name": "first_name",
    "last_name": "last_name",
    "email": "email",
    "phone": "phone",
    "is_active": "is_active",
    "password_hash": "password",
    "updated_at": "updated_at",
}


def parse_user_id(user_id: Any) -> uuid.UUID:
    """Parse a user identifier, rejecting malformed values as a bad request."""
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except (TypeError, ValueError):
        raise BadRequestError("Invalid user id", field="id", value=user_id)


def is_email_conflict(error: IntegrityError) -> bool:
    """Tell a unique-email violation apart from other integrity failures."""
    return "email" in str(error.orig).lower()


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the user repository.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session

    async def create(self, user: User) -> User:
        """
        Insert a new user and flush it into the current transaction.

        Raises:
            ConflictError: If the email is already registered
        """
        user_model = self._domain_to_model(user)
        self._session.add(user_model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_email_conflict(e):
                logger.warning(f"User creation failed - email already exists: {user.email}")
                raise ConflictError(
                    "An account with this email already exists, you can sign in.",
                    resource_type="user",
                    field="email",
                    value=user.email
                ) from e
            raise

        logger.info(f"Created user with ID: {user_model.id}")
        return self._model_to_domain(user_model)

    async def get_by_id(self, user_id: str, include: Sequence[str] = ()) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.id == parse_user_id(user_id))
        stmt = self._apply_includes(stmt, include)

        user_model = (await self._session.execute(stmt)).scalar_one_or_none()
        if user_model is None:
            logger.debug(f"User not found: {user_id}")
            return None

        return self._model_to_domain(user_model)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email.lower().strip())
        user_model = (await self._session.execute(stmt)).scalar_one_or_none()

        if user_model is None:
            logger.debug(f"User not found by email: {email}")
            return None

        return self._model_to_domain(user_model)

    async def update(self, user: User) -> User:
        """
        Write changed fields of a user back and flush them.

        Only columns whose value differs are assigned, so an unchanged user
        produces no UPDATE statement.

        Raises:
            BadRequestError: If the user does not exist
            ConflictError: If the new email is already taken
        """
        stmt = select(UserModel).where(UserModel.id == parse_user_id(user.id))
        user_model = (await self._session.execute(stmt)).scalar_one_or_none()

        if user_model is None:
            raise BadRequestError("The given id does not belong to any user", field="id", value=user.id)

        self._update_model_from_domain(user_model, user)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_email_conflict(e):
                logger.warning(f"User update failed - email already exists: {user.email}")
                raise ConflictError(
                    "An account with this email already exists.",
                    resource_type="user",
                    field="email",
                    value=user.email
                ) from e
            raise

        logger.info(f"Updated user: {user.id}")
        return self._model_to_domain(user_model)

    async def find(self, options: QueryOptions) -> List[User]:
        stmt = self._apply_filters(select(UserModel), options)
        stmt = self._apply_includes(stmt, options.include)

        if options.order_by == SortOrder.LATEST:
            stmt = stmt.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        else:
            stmt = stmt.order_by(UserModel.created_at.asc(), UserModel.id.asc())

        if options.limit is not None:
            stmt = stmt.limit(options.limit)
        if options.offset is not None:
            stmt = stmt.offset(options.offset)

        try:
            user_models = (await self._session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error querying users: {e}")
            raise

        logger.debug(f"Retrieved {len(user_models)} users")
        return [self._model_to_domain(model) for model in user_models]

    async def count(self, options: QueryOptions) -> int:
        stmt = self._apply_filters(select(func.count()).select_from(UserModel), options)
        return (await self._session.execute(stmt)).scalar_one()

    # =========================================================================
    # QUERY BUILDING
    # =========================================================================

    def _apply_filters(self, stmt: Select, options: QueryOptions) -> Select:
        for column_name, value in options.filters.items():
            if column_name not in FILTERABLE_COLUMNS:
                raise BadRequestError(f"Cannot filter users by '{column_name}'", field=column_name)

            if column_name == "id":
                value = parse_user_id(value)
            elif column_name == "email" and isinstance(value, str):
                value = value.lower().strip()

            stmt = stmt.where(getattr(UserModel, column_name) == value)
        return stmt

    def _apply_includes(self, stmt: Select, include: Sequence[str]) -> Select:
        if "cart" in include:
            stmt = stmt.options(selectinload(UserModel.cart))
        return stmt

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=parse_user_id(user.id),
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            password=user.password_hash,
            phone=user.phone,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _model_to_domain(self, user_model: UserModel) -> User:
        cart_id = None
        if "cart" not in inspect(user_model).unloaded and user_model.cart is not None:
            cart_id = str(user_model.cart.id)

        return User(
            id=str(user_model.id),
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            email=user_model.email,
            password_hash=user_model.password,
            phone=user_model.phone,
            is_active=user_model.is_active,
            cart_id=cart_id,
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )

    def _update_model_from_domain(self, user_model: UserModel, user: User) -> None:
        for field_name, column_name in _WRITABLE_FIELDS.items():
            value = getattr(user, field_name)
            if getattr(user_model, column_name) != value:
                setattr(user_model, column_name, value)
