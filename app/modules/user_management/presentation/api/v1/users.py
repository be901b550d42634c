# 📄 File: app/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# This file contains the web addresses customers call to sign up, log in, check whether an email
# is free, see and edit their account, list customers and switch an account off or on.
#
# 🧪 Purpose (Technical Summary):
# FastAPI user endpoints mapping HTTP verbs onto UserService lifecycle operations. Outcome
# exceptions propagate to the global handlers; results are converted to response schemas.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters, status codes
# - app.modules.user_management.application.dto (request bodies)
# - app.modules.user_management.presentation.api.schemas.user_schemas (responses)
# - app.modules.user_management.presentation.dependencies (service and auth wiring)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /api/v1/users)

"""
Users API Endpoints

Endpoints:
- POST /: Create an account (returns a session token)
- POST /login: Sign in
- GET /verify-email: Check that an email is still available
- GET /: List users, one page at a time
- GET /me: Current user information
- PATCH /{user_id}: Partial profile update
- DELETE /{user_id}: Deactivate the account
- POST /reactivate: Reactivate a deactivated account with its credentials
"""

import logging
from typing import Union

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import EmailStr

from app.modules.user_management.application.dto.user_dto import (
    CreateUserDTO,
    LoginUserDTO,
    UpdateUserDTO,
)
from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.services.user_service import UserService
from app.modules.user_management.presentation.api.schemas.user_schemas import (
    EmailAvailabilityResponse,
    MessageResponse,
    TokenResponse,
    UserListResponse,
    UserResponse,
)
from app.modules.user_management.presentation.dependencies import (
    get_current_user,
    get_user_service,
    require_account_owner,
)
from app.shared.config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

users_router = APIRouter()


def _message_response(result: dict) -> Union[MessageResponse, Response]:
    """204 results carry no body over HTTP."""
    if result["status_code"] == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return MessageResponse(**result)


@users_router.post(
    "/",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        201: {"description": "Account created, session token issued"},
        400: {"description": "Invalid input"},
        409: {"description": "Email already registered"},
    }
)
async def create_user(
    payload: CreateUserDTO,
    user_service: UserService = Depends(get_user_service),
) -> TokenResponse:
    result = await user_service.create(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
    )
    return TokenResponse(**result)


@users_router.post(
    "/login",
    response_model=TokenResponse,
    summary="Sign in",
    responses={401: {"description": "Invalid email or password"}},
)
async def sign_in(
    payload: LoginUserDTO,
    user_service: UserService = Depends(get_user_service),
) -> TokenResponse:
    result = await user_service.sign_in(payload.email, payload.password)
    return TokenResponse(**result)


@users_router.post(
    "/reactivate",
    response_model=TokenResponse,
    summary="Reactivate a deactivated account",
    responses={
        200: {"description": "Account reactivated, session token issued"},
        400: {"description": "Account is already active"},
        401: {"description": "Invalid email or password"},
    },
)
async def reactivate_user(
    payload: LoginUserDTO,
    user_service: UserService = Depends(get_user_service),
) -> TokenResponse:
    result = await user_service.reactivate(payload.email, payload.password)
    return TokenResponse(**result)


@users_router.get(
    "/verify-email",
    response_model=EmailAvailabilityResponse,
    summary="Check email availability",
    responses={409: {"description": "Email already registered"}},
)
async def verify_email(
    email: EmailStr = Query(..., description="Email to check"),
    user_service: UserService = Depends(get_user_service),
) -> EmailAvailabilityResponse:
    available = await user_service.verify_email(email)
    return EmailAvailabilityResponse(email=email, available=available)


@users_router.get(
    "/",
    response_model=UserListResponse,
    summary="List users",
    responses={400: {"description": "Page out of range"}},
)
async def list_users(
    page: int = Query(1, ge=1, description="One-indexed page number"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserListResponse:
    result = await user_service.get_all(page, limit)
    return UserListResponse.from_result(result)


@users_router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user information",
    responses={401: {"description": "Authentication required"}},
)
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_domain(current_user)


@users_router.patch(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update profile fields",
    responses={
        204: {"description": "User updated"},
        400: {"description": "Unknown user or invalid input"},
        409: {"description": "Email already registered"},
    },
)
async def update_user(
    payload: UpdateUserDTO,
    user_id: str = Depends(require_account_owner),
    user_service: UserService = Depends(get_user_service),
):
    result = await user_service.update(user_id, payload.to_patch())
    return _message_response(result)


@users_router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate an account",
    responses={
        204: {"description": "Account deactivated, cart removed"},
        401: {"description": "Not the account owner, or already deactivated"},
    },
)
async def delete_user(
    user_id: str = Depends(require_account_owner),
    user_service: UserService = Depends(get_user_service),
):
    result = await user_service.delete_user(user_id)
    return _message_response(result)
