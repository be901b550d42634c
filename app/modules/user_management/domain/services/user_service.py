# 📄 File: app/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# This file contains the business rules for customer accounts - signing up, logging in, changing
# profile details, listing customers page by page, and switching an account off (or back on)
# together with its shopping cart.
# 🧪 Purpose (Technical Summary):
# User lifecycle domain service. Multi-row writes run in one explicit transaction that is
# committed on success and rolled back before any failure is surfaced; activation toggling
# creates or destroys the cart inside that transaction. The welcome email is dispatched
# only after commit and never affects the outcome.
# 🔗 Dependencies:
# UserRepository, CredentialService, ShoppingCartService, NotificationDispatcher,
# SQLAlchemy AsyncSession, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.users (HTTP endpoints), presentation.dependencies (wiring)

import logging
import math
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.query import QueryOptions
from ..models.user import User
from ..repositories.user_repository import UserRepository
from .credential_service import CredentialService
from app.modules.notifications.domain.models.mail import Cases, MailMessage
from app.modules.notifications.domain.services.mail_service import (
    NotificationDispatcher,
    get_notification_dispatcher,
)
from app.modules.shopping_cart.domain.services.cart_service import ShoppingCartService
from app.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.shared.core.exceptions import (
    KNOWN_OUTCOMES,
    BadRequestError,
    ConflictError,
    InternalServerError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
UNKNOWN_USER = "The given id does not belong to any user"


class UserService:
    """
    Domain service for the user account lifecycle.

    Every operation returns a plain dict carrying a status_code plus a token,
    a message or data, and fails with one of the four outcome kinds.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: UserRepository,
        cart_service: ShoppingCartService,
        credential_service: CredentialService,
        notifier: NotificationDispatcher,
    ):
        self.session = session
        self.repository = repository
        self.cart_service = cart_service
        self.credentials = credential_service
        self.notifier = notifier

    # =========================================================================
    # ERROR POLICY
    # =========================================================================

    @asynccontextmanager
    async def _guard(self, operation: str, message: str, transactional: bool = False) -> AsyncIterator[None]:
        """
        Apply the shared error policy to a block.

        Known outcomes are re-raised as-is, invalid field values become
        BadRequestError and anything else becomes InternalServerError.
        With transactional=True the block is committed on success and rolled
        back before any failure leaves this context.
        """
        try:
            yield
            if transactional:
                await self.session.commit()
        except Exception as e:
            if transactional:
                await self.session.rollback()
                logger.debug(f"Rolled back user.{operation}")

            if isinstance(e, KNOWN_OUTCOMES):
                raise
            if isinstance(e, ValidationError):
                raise BadRequestError(f"Invalid user data: {e.errors()[0]['msg']}") from e

            logger.error(f"Unexpected error in user.{operation}: {e}", exc_info=True)
            raise InternalServerError(message, entity="user", operation=operation) from e

    # =========================================================================
    # ACCOUNT CREATION AND AUTHENTICATION
    # =========================================================================

    async def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        phone: str,
    ) -> Dict[str, Any]:
        """
        Register a new, active user with its shopping cart.

        The user row and the cart are written in one transaction. After commit a
        session token is issued and the welcome email is handed to the notifier.

        Returns:
            {"status_code": 201, "token": str}

        Raises:
            ConflictError: If the email is already registered
            InternalServerError: For any other persistence failure
        """
        async with self._guard("create", "Could not create the user", transactional=True):
            user = User(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password_hash=self.credentials.hash_password(password),
                phone=phone,
                is_active=True,
            )
            user = await self.repository.create(user)
            await self.cart_service.create_cart(user.id, self.session)

        logger.info(f"User registered: {user.id}")

        token = self.credentials.issue_token(user.id, user.email)
        self._send_welcome_email(user)

        return {"status_code": 201, "token": token}

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Exchange valid credentials for a session token.

        Unknown emails, wrong passwords and deactivated accounts all fail with
        the same message so the response does not reveal which accounts exist.

        Returns:
            {"status_code": 200, "token": str}
        """
        user = await self.find_one_by_email(email)

        if not self.credentials.verify_password(password, user.password_hash):
            logger.warning(f"Sign-in failed for user {user.id}: wrong password")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.can_sign_in():
            logger.warning(f"Sign-in refused for deactivated user {user.id}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info(f"User signed in: {user.id}")
        return {"status_code": 200, "token": self.credentials.issue_token(user.id, user.email)}

    async def find_one_by_email(self, email: str) -> User:
        """
        Raises:
            UnauthorizedError: If no user owns the email
        """
        async with self._guard("find_one_by_email", "Could not look up the user"):
            user = await self.repository.get_by_email(email)

        if user is None:
            logger.info(f"No user registered with email {email}")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user

    async def verify_email(self, email: str) -> bool:
        """
        Check that an email is still free for registration.

        This is only a fast-path hint; create() relies on the unique constraint.

        Raises:
            ConflictError: If a user already owns the email
        """
        async with self._guard("verify_email", "Could not verify the email"):
            user = await self.repository.get_by_email(email)

        if user is not None:
            raise ConflictError(
                "An account with this email already exists, you can sign in.",
                resource_type="user",
                field="email",
                value=email,
            )
        return True

    # =========================================================================
    # PROFILE AND LISTING
    # =========================================================================

    async def update(self, user_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update first_name, last_name, email and phone.

        Keys that are absent or None keep their current value.

        Returns:
            {"status_code": 204, "message": str}

        Raises:
            BadRequestError: If no user exists for the id
            ConflictError: If the new email belongs to another user
        """
        async with self._guard("update", "Could not update the user", transactional=True):
            user = await self.repository.get_by_id(user_id)
            if user is None:
                raise BadRequestError(UNKNOWN_USER, field="id", value=user_id)

            if user.apply_patch(patch):
                await self.repository.update(user)
                logger.info(f"User updated: {user_id}")
            else:
                logger.debug(f"Nothing to update for user {user_id}")

        return {"status_code": 204, "message": "User updated successfully"}

    async def get_all(self, page: int, limit: int) -> Dict[str, Any]:
        """
        Return one page of users, oldest first.

        Pages are one-indexed. prev_page and next_page are None at the first
        and last page. When there are no users page 1 is still valid and empty.

        Raises:
            BadRequestError: If page or limit is out of range
            InternalServerError: If the users could not be searched
        """
        if limit < 1:
            raise BadRequestError("Limit must be a positive number", field="limit", value=limit)

        async with self._guard("get_all", "could not search users"):
            total_users = await self.repository.count(QueryOptions())
            total_pages = math.ceil(total_users / limit)

            if page < 1 or page > max(total_pages, 1):
                raise BadRequestError("The requested page does not exist", field="page", value=page)

            users = await self.repository.find(QueryOptions(limit=limit, offset=(page - 1) * limit))

        return {
            "status_code": 200,
            "prev_page": page - 1 if page > 1 else None,
            "page": page,
            "next_page": page + 1 if page < total_pages else None,
            "total_pages": total_pages,
            "total_users": total_users,
            "users": users,
        }

    # =========================================================================
    # ACTIVATION
    # =========================================================================

    async def delete_user(self, user_id: str) -> Dict[str, Any]:
        """
        Toggle a user's active flag together with its shopping cart.

        Deactivation destroys the cart, reactivation creates a new one. The flag
        and the cart change commit together or not at all.

        Returns:
            {"status_code": 204, "message": str} after deactivation,
            {"status_code": 200, "message": str} after reactivation
        """
        async with self._guard("delete_user", "Could not change the user's status", transactional=True):
            user = await self.repository.get_by_id(user_id)
            if user is None:
                raise BadRequestError(UNKNOWN_USER, field="id", value=user_id)

            is_active = user.toggle_active()
            if is_active:
                await self.cart_service.create_cart(user.id, self.session)
            else:
                await self.cart_service.destroy_cart(user.id, self.session)

            await self.repository.update(user)

        if is_active:
            logger.info(f"User reactivated: {user_id}")
            return {"status_code": 200, "message": "User activated successfully"}

        logger.info(f"User deactivated: {user_id}")
        return {"status_code": 204, "message": "User deactivated successfully"}

    async def reactivate(self, email: str, password: str) -> Dict[str, Any]:
        """
        Bring a deactivated account back after re-checking its credentials.

        Session tokens stop working once an account is deactivated, so the
        password is the only way back. The account gets a new cart and a
        fresh token.

        Returns:
            {"status_code": 200, "token": str}

        Raises:
            UnauthorizedError: If the email or password is wrong
            BadRequestError: If the account is already active
        """
        user = await self.find_one_by_email(email)

        if not self.credentials.verify_password(password, user.password_hash):
            logger.warning(f"Reactivation refused for user {user.id}: wrong password")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if user.is_active:
            raise BadRequestError("The account is already active", field="email", value=email)

        await self.delete_user(user.id)
        return {"status_code": 200, "token": self.credentials.issue_token(user.id, user.email)}

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================

    def _send_welcome_email(self, user: User) -> None:
        message = MailMessage(
            addressee=user.email,
            subject=Cases.CREATE_ACCOUNT,
            context={"first_name": user.first_name, "last_name": user.last_name},
        )
        self.notifier.dispatch(message)
        logger.debug(f"Welcome email queued for user {user.id}")


def build_user_service(
    session: AsyncSession,
    repository: Optional[UserRepository] = None,
    notifier: Optional[NotificationDispatcher] = None,
) -> UserService:
    """Wire a UserService with the default collaborators for a session."""
    return UserService(
        session=session,
        repository=repository or UserRepositoryImpl(session),
        cart_service=ShoppingCartService(),
        credential_service=CredentialService(),
        notifier=notifier or get_notification_dispatcher(),
    )
