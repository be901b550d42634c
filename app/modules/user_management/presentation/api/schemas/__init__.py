from .user_schemas import (
    TokenResponse,
    MessageResponse,
    EmailAvailabilityResponse,
    UserResponse,
    UserListResponse,
)

__all__ = [
    "TokenResponse",
    "MessageResponse",
    "EmailAvailabilityResponse",
    "UserResponse",
    "UserListResponse",
]
