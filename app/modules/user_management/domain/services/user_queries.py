# 📄 File: app/modules/user_management/domain/services/user_queries.py
# 🧭 Purpose (Layman Explanation):
# A small toolbox for looking users up (one user, many users, a user by id, or a page of
# users with a total count) that turns "nothing found" and unexpected crashes into clear errors.
# 🧪 Purpose (Technical Summary):
# Closed set of typed user queries over UserRepository sharing one error-translation policy:
# known outcomes pass through unchanged, anything else becomes an InternalServerError naming
# the entity and the operation attempted.
# 🔗 Dependencies:
# UserRepository, QueryOptions, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# user_service.py, presentation dependencies, sibling modules that need user lookups

import functools
import logging
import math
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from ..models.query import PaginatedUsers, QueryOptions
from ..models.user import User
from ..repositories.user_repository import UserRepository
from app.shared.core.exceptions import KNOWN_OUTCOMES, BadRequestError, InternalServerError

logger = logging.getLogger(__name__)

ENTITY_NAME = "user"

T = TypeVar("T")


def translate_query_errors(operation: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator applying the shared error policy to a query coroutine.

    Args:
        operation: Name of the query, used in the wrapped error message
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except KNOWN_OUTCOMES:
                raise
            except Exception as e:
                logger.error(f"Unexpected error in {ENTITY_NAME}.{operation}: {e}", exc_info=True)
                raise InternalServerError(
                    f"Error while running {operation} on {ENTITY_NAME}",
                    entity=ENTITY_NAME,
                    operation=operation,
                ) from e
        return wrapper
    return decorator


class UserQueryService:
    """
    Typed user queries that never return an empty result.

    Every operation raises BadRequestError when nothing matches, so callers can
    rely on getting a user (or a non-empty list) back.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    @translate_query_errors("find_one")
    async def find_one(self, options: QueryOptions) -> User:
        user = await self.repository.find_one(options)
        if user is None:
            raise BadRequestError("No user matches the given criteria")
        return user

    @translate_query_errors("find_all")
    async def find_all(self, options: QueryOptions) -> List[User]:
        users = await self.repository.find(options)
        if not users:
            raise BadRequestError("No users match the given criteria")
        return users

    @translate_query_errors("find_by_pk")
    async def find_by_pk(self, user_id: str, options: Optional[QueryOptions] = None) -> User:
        """
        Primary-key lookup, eager-loading the relations listed in options.include.

        Raises:
            BadRequestError: If the id is malformed or belongs to no user
        """
        include = options.include if options else ()
        user = await self.repository.get_by_id(user_id, include=include)
        if user is None:
            raise BadRequestError("The given id does not belong to any user", field="id", value=user_id)
        return user

    @translate_query_errors("find_and_count_all")
    async def find_and_count_all(self, options: QueryOptions, page: int) -> PaginatedUsers:
        """
        Fetch one window of users together with the total match count.

        The window is whatever options.limit/offset describe; page is echoed back
        so callers can present it alongside total_pages.

        Raises:
            BadRequestError: If no positive limit is given or nothing matches
        """
        if not options.limit:
            raise BadRequestError("A positive limit is required to paginate users", field="limit")

        users, total = await self.repository.find_and_count(options)
        if not users:
            raise BadRequestError("No users match the given criteria")

        return PaginatedUsers(
            data=users,
            page=page,
            total_pages=math.ceil(total / options.limit),
            total_users=total,
        )
