# 📄 File: app/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find and update user information in the database
# without specifying the actual database technology
# 🧪 Purpose (Technical Summary):
# Repository interface defining data access operations for User entities following
# the Repository pattern and dependency inversion principle
# 🔗 Dependencies:
# Domain models (User, QueryOptions), typing, abc
# 🔄 Connected Modules / Calls From:
# Domain services, infrastructure implementations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..models.user import User
from ..models.query import QueryOptions


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (User), not database models
    - Writes are flushed, never committed: the calling service owns the transaction
    - Unique email violations surface as ConflictError
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Insert a new user.

        Raises:
            ConflictError: If a user with the email already exists
        """

    @abstractmethod
    async def get_by_id(self, user_id: str, include: Sequence[str] = ()) -> Optional[User]:
        """
        Get user by primary key, optionally eager-loading relations.

        Raises:
            BadRequestError: If user_id is not a valid UUID
        """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Persist changed fields of an existing user.

        Raises:
            BadRequestError: If the user does not exist
            ConflictError: If the new email is already taken
        """

    @abstractmethod
    async def find(self, options: QueryOptions) -> List[User]:
        """Return every user matching the options."""

    @abstractmethod
    async def count(self, options: QueryOptions) -> int:
        """Count users matching the filters of the options (window ignored)."""

    async def find_one(self, options: QueryOptions) -> Optional[User]:
        """Return the first user matching the options."""
        users = await self.find(options.model_copy(update={"limit": 1}))
        return users[0] if users else None

    async def find_and_count(self, options: QueryOptions) -> Tuple[List[User], int]:
        """Return the requested window of users and the total match count."""
        return await self.find(options), await self.count(options)
