# 📄 File: app/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# This file defines what the user endpoints send back: login passes, confirmation messages,
# customer details (never the password) and pages of customers.
#
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas for the user endpoints, converting domain users into
# public representations and lifecycle result dicts into typed responses.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - app.modules.user_management.domain.models.user (User domain entity)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.users (response models)

"""
User Management API Schemas

Response Schemas:
- TokenResponse: Session token after sign-up or sign-in
- MessageResponse: Confirmation of an update or activation change
- EmailAvailabilityResponse: Result of the pre-registration email check
- UserResponse: Public user representation
- UserListResponse: One page of users with navigation metadata
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.modules.user_management.domain.models.user import User


class TokenResponse(BaseModel):
    status_code: int = Field(..., examples=[201])
    token: str = Field(..., description="Bearer session token")


class MessageResponse(BaseModel):
    status_code: int = Field(..., examples=[200])
    message: str


class EmailAvailabilityResponse(BaseModel):
    email: str
    available: bool


class UserResponse(BaseModel):
    """Public user information. The password hash is never part of it."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserListResponse(BaseModel):
    """
    One page of users.

    prev_page and next_page are one-indexed page numbers, null at the boundaries.
    """

    status_code: int = 200
    prev_page: Optional[int] = None
    page: int
    next_page: Optional[int] = None
    total_pages: int
    total_users: int
    users: List[UserResponse]

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "UserListResponse":
        return cls(
            status_code=result["status_code"],
            prev_page=result["prev_page"],
            page=result["page"],
            next_page=result["next_page"],
            total_pages=result["total_pages"],
            total_users=result["total_users"],
            users=[UserResponse.from_domain(user) for user in result["users"]],
        )
