# 📄 File: app/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands each web request the tools it needs: the account service for this request, and a check
# of the login pass (token) so only the right customer can see or change their own account.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies wiring the per-request UserService and resolving the bearer token
# into verified claims and the current User.
# 🔗 Dependencies:
# FastAPI, app.shared.infrastructure.database.session, user_management domain services
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.presentation.api.v1.users

import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.services.credential_service import CredentialService
from app.modules.user_management.domain.services.user_queries import UserQueryService
from app.modules.user_management.domain.services.user_service import UserService, build_user_service
from app.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.shared.core.exceptions import BadRequestError, UnauthorizedError
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.logging import user_id_var

logger = logging.getLogger(__name__)

# auto_error=False so a missing header surfaces as our own UnauthorizedError
security = HTTPBearer(auto_error=False)


async def get_user_service(session: AsyncSession = Depends(get_db_session)) -> UserService:
    return build_user_service(session)


async def get_user_queries(session: AsyncSession = Depends(get_db_session)) -> UserQueryService:
    return UserQueryService(UserRepositoryImpl(session))


def get_credential_service() -> CredentialService:
    return CredentialService()


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    credential_service: CredentialService = Depends(get_credential_service),
) -> Dict[str, Any]:
    """
    Validate the bearer token and return its claims.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Not authenticated")

    claims = credential_service.decode_token(credentials.credentials)
    user_id_var.set(claims["sub"])
    return claims


async def get_current_user(
    claims: Dict[str, Any] = Depends(get_token_claims),
    queries: UserQueryService = Depends(get_user_queries),
) -> User:
    """
    Load the user the token was issued for.

    A token whose user no longer exists or was deactivated is rejected.
    """
    try:
        user = await queries.find_by_pk(claims["sub"])
    except BadRequestError:
        logger.warning(f"Token subject {claims['sub']} does not match any user")
        raise UnauthorizedError("Could not validate credentials")

    if not user.is_active:
        raise UnauthorizedError("Account is deactivated")
    return user


async def require_account_owner(
    user_id: str,
    current_user: User = Depends(get_current_user),
) -> str:
    """
    Allow a request on /{user_id} only for the token's own, active user.

    A deactivated account cannot change itself through an old token;
    it comes back through POST /reactivate with its credentials.
    """
    if current_user.id != user_id:
        logger.warning(f"User {current_user.id} tried to modify account {user_id}")
        raise UnauthorizedError("You can only modify your own account")
    return user_id
