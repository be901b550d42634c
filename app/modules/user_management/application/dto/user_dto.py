# 📄 File: app/modules/user_management/application/dto/user_dto.py
# 🧭 Purpose (Layman Explanation):
# This file defines the shape of what a customer sends us when signing up, logging in or
# editing their details, and checks it (valid email, sensible password length) before use.
#
# 🧪 Purpose (Technical Summary):
# Input data transfer objects with field-level validation for the user lifecycle operations.
#
# 🔗 Dependencies:
# - pydantic for DTO validation
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.users (request bodies)

"""
User Data Transfer Objects (DTOs)

DTO Classes:
- CreateUserDTO: Sign-up input
- LoginUserDTO: Sign-in credentials
- UpdateUserDTO: Partial profile update; only fields actually sent are applied
"""

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72

PHONE_PATTERN = re.compile(r"^\+?[0-9 ()\-]{7,30}$")


def _validate_phone(value: str) -> str:
    value = value.strip()
    if not PHONE_PATTERN.match(value):
        raise ValueError("Phone must contain 7 to 30 digits, spaces, dashes or parentheses")
    return value


class CreateUserDTO(BaseModel):
    """Input validation for user creation."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1, max_length=100, examples=["Ada"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Lovelace"])
    email: EmailStr = Field(..., examples=["ada@example.com"])
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    phone: str = Field(..., examples=["+44 20 7946 0958"])

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return _validate_phone(v)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_LENGTH:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_LENGTH} bytes")
        return v


class LoginUserDTO(BaseModel):
    """Sign-in credentials."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)


class UpdateUserDTO(BaseModel):
    """
    Partial profile update.

    Every field is optional; to_patch() returns only the fields the client sent
    with a non-null value.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _validate_phone(v) if v is not None else v

    def to_patch(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)
